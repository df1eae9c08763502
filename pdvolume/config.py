# -*- coding: utf-8 -*-
# © Copyright EnterpriseDB UK Limited 2025
#
# This file is part of pdvolume.
#
# pdvolume is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# pdvolume is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with pdvolume.  If not, see <http://www.gnu.org/licenses/>.

"""
This module is responsible for all the things related to
pdvolume configuration, such as resolving the projects used for snapshot
and volume operations and parsing configuration files.

:data CONFIG_KEYS: The configuration keys recognised by :func:`parse_config`.
"""

import collections
import json
import logging
import os
from configparser import ConfigParser, Error as ConfigParserError

from pdvolume.exceptions import ConfigurationException, CredentialsFileException

_logger = logging.getLogger(__name__)

PROJECT_KEY = "project"
CREDENTIALS_FILE_KEY = "credentialsFile"
SNAPSHOT_LOCATION_KEY = "snapshotLocation"
VOLUME_PROJECT_KEY = "volumeProject"

CONFIG_KEYS = (
    PROJECT_KEY,
    CREDENTIALS_FILE_KEY,
    SNAPSHOT_LOCATION_KEY,
    VOLUME_PROJECT_KEY,
)

CREDENTIALS_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"

DEFAULT_CONFIG_SECTION = "pdvolume"


SnapshotterConfig = collections.namedtuple(
    "SnapshotterConfig",
    "snapshot_project volume_project snapshot_location credentials_file",
)


def read_credentials_project(credentials_file):
    """
    Read the project a credentials file belongs to.

    :param str credentials_file: path to a JSON credentials file, such as a
        service account key
    :rtype: str|None
    :return: the project_id of the credentials, None if they have none
    :raise CredentialsFileException: if the file cannot be read or decoded
    """
    try:
        with open(credentials_file, "r", encoding="utf-8") as fp:
            credentials = json.load(fp)
    except (IOError, OSError) as e:
        raise CredentialsFileException(
            "unable to read credentials file %s: %s" % (credentials_file, e)
        )
    except ValueError as e:
        raise CredentialsFileException(
            "unable to decode credentials file %s: %s" % (credentials_file, e)
        )
    if not isinstance(credentials, dict):
        raise CredentialsFileException(
            "credentials file %s does not contain a JSON object" % credentials_file
        )
    return credentials.get("project_id") or None


def _resolve_credentials(config):
    """
    Locate the credentials file and read its project.

    An explicitly configured credentials file must be readable. The file
    named by GOOGLE_APPLICATION_CREDENTIALS is only used if it can be read.

    :rtype: tuple[str|None,str|None]
    :return: the credentials file path and its project
    """
    credentials_file = config.get(CREDENTIALS_FILE_KEY)
    if credentials_file:
        _logger.debug(
            "looking up credentials from config key %s", CREDENTIALS_FILE_KEY
        )
        return credentials_file, read_credentials_project(credentials_file)

    credentials_file = os.environ.get(CREDENTIALS_ENV_VAR)
    if not credentials_file:
        return None, None
    _logger.debug("looking up credentials from %s", CREDENTIALS_ENV_VAR)
    try:
        return credentials_file, read_credentials_project(credentials_file)
    except CredentialsFileException as e:
        _logger.warning("ignoring default credentials: %s", e)
        return credentials_file, None


def parse_config(config):
    """
    Build the snapshotter configuration from a configuration map.

    The volume project defaults to the project of the credentials, and the
    snapshot project defaults to the volume project. Unrecognised keys are
    ignored.

    :param dict[str,str]|None config: the configuration map
    :rtype: SnapshotterConfig
    :raise ConfigurationException: if the configuration cannot be used
    """
    config = dict(config or {})
    unknown_keys = sorted(set(config) - set(CONFIG_KEYS))
    if unknown_keys:
        _logger.debug("ignoring unknown configuration keys: %s", ", ".join(unknown_keys))
    for key in CONFIG_KEYS:
        value = config.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigurationException(
                "configuration key %s must be a string, got %r" % (key, value)
            )

    credentials_file, credentials_project = _resolve_credentials(config)

    volume_project = config.get(VOLUME_PROJECT_KEY) or credentials_project
    snapshot_project = config.get(PROJECT_KEY) or volume_project
    snapshot_location = config.get(SNAPSHOT_LOCATION_KEY) or None

    return SnapshotterConfig(
        snapshot_project=snapshot_project,
        volume_project=volume_project,
        snapshot_location=snapshot_location,
        credentials_file=credentials_file,
    )


def load_config_file(filename, section=DEFAULT_CONFIG_SECTION):
    """
    Read a configuration map from an INI file.

    Only the recognised keys of the given section are returned. A missing
    section yields an empty map.

    :param str filename: path of the configuration file
    :param str section: the section holding the configuration
    :rtype: dict[str,str]
    :raise ConfigurationException: if the file cannot be read or parsed
    """
    parser = ConfigParser(interpolation=None)
    # Keys are camelCase, as in the configuration map
    parser.optionxform = str
    try:
        with open(filename, "r", encoding="utf-8") as fp:
            parser.read_file(fp)
    except (IOError, OSError) as e:
        raise ConfigurationException(
            "unable to read configuration file %s: %s" % (filename, e)
        )
    except ConfigParserError as e:
        raise ConfigurationException(
            "unable to parse configuration file %s: %s" % (filename, e)
        )
    if not parser.has_section(section):
        _logger.debug("no [%s] section in %s", section, filename)
        return {}
    return dict(
        (key, value)
        for key, value in parser.items(section)
        if key in CONFIG_KEYS
    )

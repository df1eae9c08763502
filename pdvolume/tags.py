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
Snapshot tag reconciliation.

Persistent Disks used to have no native labels, so tags were stored as a
JSON object in the free-form description of the disk. Snapshot tags are the
union of those disk tags and the tags supplied by the operator, with the
operator tags taking precedence.
"""

import json
import logging

from pdvolume.exceptions import DiskDescriptionDecodeError

_logger = logging.getLogger(__name__)


def decode_disk_tags(disk_description):
    """
    Decode the tags stored in a disk description.

    :param str disk_description: the description of the disk
    :rtype: dict[str,str]
    :raise DiskDescriptionDecodeError: if the description is empty or is not
        a JSON object mapping strings to strings
    """
    if not disk_description:
        raise DiskDescriptionDecodeError("disk description is empty")
    try:
        tags = json.loads(disk_description)
    except ValueError as e:
        raise DiskDescriptionDecodeError("disk description is not valid JSON: %s" % e)
    if not isinstance(tags, dict):
        raise DiskDescriptionDecodeError(
            "disk description is not a JSON object: %s" % type(tags).__name__
        )
    for key, value in tags.items():
        if not isinstance(value, str):
            raise DiskDescriptionDecodeError(
                "disk description tag %r is not a string: %r" % (key, value)
            )
    return tags


def get_snapshot_tags(operator_tags, disk_description, logger=None):
    """
    Compute the tags of a snapshot of a disk.

    The disk tags are decoded from its description and the operator tags are
    laid over them. A description which cannot be decoded is logged as a
    warning and contributes no tags.

    :param dict[str,str]|None operator_tags: tags supplied by the operator
    :param str disk_description: the description of the source disk
    :param logging.Logger|None logger: where to report an undecodable
        description. Defaults to the logger of this module.
    :rtype: str
    :return: the tags encoded as a JSON object, or an empty string if there
        are no tags at all
    """
    logger = logger or _logger
    try:
        tags = decode_disk_tags(disk_description)
    except DiskDescriptionDecodeError as e:
        logger.warning(
            "unable to decode disk description as tags, "
            "only operator tags will be applied: %s",
            e,
        )
        tags = {}

    if operator_tags:
        tags.update(operator_tags)

    if not tags:
        return ""
    return json.dumps(tags, sort_keys=True, separators=(",", ":"))

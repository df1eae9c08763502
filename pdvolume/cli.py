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
This module implements the pdvolume command line interface.
"""

import argparse
import csv
import json
import logging
import sys

import pdvolume
from pdvolume.config import (
    CREDENTIALS_FILE_KEY,
    PROJECT_KEY,
    SNAPSHOT_LOCATION_KEY,
    VOLUME_PROJECT_KEY,
    load_config_file,
)
from pdvolume.exceptions import PdVolumeException
from pdvolume.snapshotter import GcpVolumeSnapshotter
from pdvolume.utils import configure_logging, force_str
from pdvolume.zones import is_multi_zone, parse_region

try:
    import argcomplete
except ImportError:
    argcomplete = None

_logger = logging.getLogger(__name__)


class OperationErrorExit(SystemExit):
    """
    Dedicated exit code for errors where the input was read but the
    operation still failed.
    """

    def __init__(self):
        super(OperationErrorExit, self).__init__(1)


class CLIErrorExit(SystemExit):
    """Dedicated exit code for CLI level errors."""

    def __init__(self):
        super(CLIErrorExit, self).__init__(3)


class GeneralErrorExit(SystemExit):
    """Dedicated exit code for general pdvolume errors."""

    def __init__(self):
        super(GeneralErrorExit, self).__init__(4)


class PdVolumeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser which exits with CLIErrorExit on errors."""

    def error(self, message):
        try:
            super(PdVolumeArgumentParser, self).error(message)
        except SystemExit:
            raise CLIErrorExit()


def parse_tag(tag):
    """Parse key,value tag with csv reader"""
    try:
        rows = list(csv.reader([tag], delimiter=","))
    except csv.Error as exc:
        raise argparse.ArgumentTypeError(
            "error parsing tag %s: %s" % (tag, force_str(exc))
        )
    if len(rows) != 1 or len(rows[0]) != 2:
        raise argparse.ArgumentTypeError("invalid tag format: %s" % tag)
    return tuple(rows[0])


p = PdVolumeArgumentParser(
    description="Read and rewrite the Persistent Disk identity of Kubernetes "
    "persistent volumes and compute snapshot tags.",
)
p.add_argument(
    "-V", "--version", action="version", version="%%(prog)s %s" % pdvolume.__version__
)
p.add_argument(
    "-c",
    "--config",
    help="read the configuration from the [pdvolume] section of an INI file",
)
p.add_argument("--project", help="the project in which snapshots are taken")
p.add_argument(
    "--volume-project",
    help="the project of restored volumes (defaults to the project of the "
    "credentials)",
)
p.add_argument(
    "--credentials-file",
    help="a JSON credentials file (defaults to $GOOGLE_APPLICATION_CREDENTIALS)",
)
p.add_argument("--snapshot-location", help="the storage location of snapshots")
p.add_argument(
    "--log-file",
    help="write log messages to this file instead of standard error",
)
verbosity = p.add_mutually_exclusive_group()
verbosity.add_argument(
    "-v",
    "--verbose",
    action="count",
    default=0,
    help="increase output verbosity (e.g., -vv is more than -v)",
)
verbosity.add_argument(
    "-q",
    "--quiet",
    action="count",
    default=0,
    help="decrease output verbosity (e.g., -qq is less than -q)",
)

subparsers = p.add_subparsers(dest="command")


def argument(*name_or_flags, **kwargs):
    """Convenience function to properly format arguments to pass to the
    command decorator.
    """
    return (list(name_or_flags), kwargs)


def command(args=None, parent=subparsers):
    """Decorator to define a new subcommand in a sanity-preserving way.
    The function will be stored in the ``func`` variable when the parser
    parses arguments so that it can be called directly like so::
        args = cli.parse_args()
        args.func(snapshotter, args)
    """

    if args is None:
        args = []

    def decorator(func):
        parser = parent.add_parser(
            func.__name__.replace("_", "-"),
            description=func.__doc__,
            help=func.__doc__,
        )
        for arg in args:
            parser.add_argument(*arg[0], **arg[1])
        parser.set_defaults(func=func)
        return func

    return decorator


def read_persistent_volume(filename):
    """
    Load a persistent volume from a JSON file, or from stdin if filename is -
    """
    try:
        if filename == "-":
            return json.load(sys.stdin)
        with open(filename, "r", encoding="utf-8") as fp:
            return json.load(fp)
    except (IOError, OSError) as e:
        _logger.error("Unable to read persistent volume %s: %s", filename, e)
        raise OperationErrorExit()
    except ValueError as e:
        _logger.error("Unable to decode persistent volume %s: %s", filename, e)
        raise OperationErrorExit()


@command([argument("pv_file", help="persistent volume JSON file, or - for stdin")])
def get_volume_id(snapshotter, args):
    """
    print the Persistent Disk name of a persistent volume
    """
    pv = read_persistent_volume(args.pv_file)
    volume_id = snapshotter.get_volume_id(pv)
    if not volume_id:
        _logger.info("%s is not a Persistent Disk volume", args.pv_file)
    print(volume_id)


@command(
    [
        argument("pv_file", help="persistent volume JSON file, or - for stdin"),
        argument("volume_id", help="the name of the disk to reference"),
    ]
)
def set_volume_id(snapshotter, args):
    """
    print a persistent volume rewritten to reference another disk
    """
    pv = read_persistent_volume(args.pv_file)
    print(json.dumps(snapshotter.set_volume_id(pv, args.volume_id), indent=2))


@command(
    [
        argument(
            "--tag",
            type=parse_tag,
            nargs="*",
            default=[],
            help="operator tags as key,value pairs",
        ),
        argument(
            "--disk-description",
            default="",
            help="the description of the source disk",
        ),
    ]
)
def snapshot_tags(snapshotter, args):
    """
    print the tags of a snapshot of a disk
    """
    print(snapshotter.get_snapshot_tags(dict(args.tag), args.disk_description))


@command([argument("zone", help="a zone, or zones joined by __")])
def region(snapshotter, args):
    """
    print the region of a zone token
    """
    print(
        json.dumps(
            {
                "region": parse_region(args.zone),
                "multi_zone": is_multi_zone(args.zone),
            }
        )
    )


@command([argument("volume_handle", help="a CSI volume handle")])
def cross_project(snapshotter, args):
    """
    print whether a volume belongs to a project other than the volume project
    """
    result = snapshotter.is_volume_created_cross_projects(args.volume_handle)
    print("true" if result else "false")


def build_config(args):
    """
    Merge the configuration file with the command line options

    :param argparse.Namespace args: the parsed arguments
    :rtype: dict[str,str]
    """
    config = {}
    if args.config:
        config.update(load_config_file(args.config))
    for key, value in (
        (PROJECT_KEY, args.project),
        (VOLUME_PROJECT_KEY, args.volume_project),
        (CREDENTIALS_FILE_KEY, args.credentials_file),
        (SNAPSHOT_LOCATION_KEY, args.snapshot_location),
    ):
        if value is not None:
            config[key] = value
    return config


def parse_arguments(args=None):
    """
    Parse command line arguments

    :param list[str] args: The raw arguments list
    :return: The options parsed
    """
    if argcomplete:
        argcomplete.autocomplete(p)
    return p.parse_args(args=args)


def main(args=None):
    """
    The main script entry point

    :param list[str] args: the raw arguments list. When not provided
        it defaults to sys.args[1:]
    """
    config = parse_arguments(args)
    configure_logging(config.verbose, config.quiet, log_file=config.log_file)
    if config.command is None:
        p.print_help()
        raise CLIErrorExit()

    try:
        snapshotter = GcpVolumeSnapshotter.from_config(build_config(config))
        config.func(snapshotter, config)
    except PdVolumeException as exc:
        _logger.error("%s", force_str(exc))
        raise OperationErrorExit()
    except Exception as exc:
        _logger.error("pdvolume exception: %s", force_str(exc))
        _logger.debug("Exception details:", exc_info=exc)
        raise GeneralErrorExit()


if __name__ == "__main__":
    main()

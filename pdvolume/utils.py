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
This module contains utility functions used in pdvolume.
"""

import logging
import logging.handlers
import os

_logger = logging.getLogger(__name__)

LOGGING_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def mkpath(directory):
    """
    Recursively create a target directory.

    If the path already exists it does nothing.

    :param str directory: directory to be created
    """
    if not os.path.isdir(directory):
        os.makedirs(directory)


def configure_logging(verbose=0, quiet=0, log_file=None, log_format=LOGGING_FORMAT):
    """
    Configure the logging module

    The default level is WARNING. Each verbose step lowers it by one level
    (down to DEBUG) and each quiet step raises it.

    :param int verbose: number of verbosity increments requested
    :param int quiet: number of verbosity decrements requested
    :param str,None log_file: target file path. If None use standard error.
    :param str log_format: format string used for a log line.
    """
    verbosity = verbose - quiet
    log_level = max(logging.WARNING - verbosity * 10, logging.DEBUG)
    warn = None
    handler = logging.StreamHandler()
    if log_file:
        log_file = os.path.abspath(log_file)
        try:
            mkpath(os.path.dirname(log_file))
            handler = logging.handlers.WatchedFileHandler(log_file, encoding="utf-8")
        except (OSError, IOError):
            # fallback to standard error
            warn = (
                "Failed opening the requested log file. "
                "Using standard error instead."
            )
    handler.setFormatter(logging.Formatter(log_format))
    logging.root.addHandler(handler)
    if warn:
        # this will be always displayed because the default level is WARNING
        _logger.warning(warn)
    logging.root.setLevel(log_level)
    return log_level


def force_str(obj, encoding="utf-8", errors="replace"):
    """
    Force any object to a unicode string.

    Code inspired by Django's force_text function
    """
    if isinstance(obj, str):
        return obj
    try:
        if isinstance(obj, bytes):
            return str(obj, encoding, errors)
        return str(obj)
    except (UnicodeDecodeError, TypeError):
        if isinstance(obj, Exception):
            return " ".join(force_str(arg, encoding, errors) for arg in obj.args)
        # As last resort, use a repr call to avoid any exception
        return repr(obj)

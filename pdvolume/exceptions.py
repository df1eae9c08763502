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


class PdVolumeException(Exception):
    """
    The base class of all other pdvolume exceptions
    """


class ConfigurationException(PdVolumeException):
    """
    Base exception for all the Configuration errors
    """


class CredentialsFileException(ConfigurationException):
    """
    The configured credentials file cannot be read or decoded
    """


class VolumeException(PdVolumeException):
    """
    Base exception for all the errors related to a persistent volume
    representation.
    """


class MalformedVolume(VolumeException):
    """
    A recognised volume source is present but its required payload is
    missing or structurally invalid
    """


class MalformedVolumeHandle(MalformedVolume):
    """
    A CSI volume handle does not match
    projects/<project>/zones/<zone>/disks/<name>
    """


class UnsupportedVolumeType(VolumeException):
    """
    The persistent volume does not use a volume source we can handle
    """


class InvalidVolumeId(VolumeException):
    """
    The volume ID supplied for a restore cannot be used as a disk name
    """


class RegionParseError(PdVolumeException):
    """
    A zone token does not match the expected grammar
    """


class DiskDescriptionDecodeError(PdVolumeException):
    """
    A disk description does not contain a JSON encoded tag map
    """

    def __str__(self):
        """
        Human readable string representation
        """
        return "%s:%s" % (self.__class__.__name__, self.args[0] if self.args else None)

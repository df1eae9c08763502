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
Parsing and formatting of Persistent Disk CSI volume handles.

A volume handle names a disk within a project and zone::

    projects/<project>/zones/<zone>/disks/<name>
"""

import collections
import re

from pdvolume.exceptions import MalformedVolumeHandle

VOLUME_HANDLE_FORMAT = "projects/%s/zones/%s/disks/%s"

_VOLUME_HANDLE_RE = re.compile(
    r"""
      ^projects/(?P<project>[^/]+)
      /zones/(?P<zone>[^/]+)
      /disks/(?P<disk_name>[^/]+)$
      """,
    re.VERBOSE,
)


class VolumeHandle(collections.namedtuple("VolumeHandle", "project zone disk_name")):
    """
    The project, zone and disk name encoded in a CSI volume handle.
    """

    __slots__ = ()

    @classmethod
    def parse(cls, handle):
        """
        Parse a volume handle string.

        :param str handle: the volume handle
        :rtype: VolumeHandle
        :raise MalformedVolumeHandle: if the handle does not match the
            expected grammar
        """
        match = None
        if isinstance(handle, str):
            match = _VOLUME_HANDLE_RE.match(handle)
        if match is None:
            raise MalformedVolumeHandle(
                "invalid volume handle %r, expected %s"
                % (handle, VOLUME_HANDLE_FORMAT % ("{project}", "{zone}", "{name}"))
            )
        return cls(**match.groupdict())

    def with_disk_name(self, disk_name, project=None):
        """
        Return a handle for a different disk in the same zone.

        :param str disk_name: the name of the new disk
        :param str|None project: replacement project, if any
        :rtype: VolumeHandle
        """
        return self._replace(disk_name=disk_name, project=project or self.project)

    def __str__(self):
        return VOLUME_HANDLE_FORMAT % (self.project, self.zone, self.disk_name)

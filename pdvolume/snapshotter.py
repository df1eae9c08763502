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

import logging

from pdvolume import tags
from pdvolume.config import parse_config
from pdvolume.exceptions import InvalidVolumeId, MalformedVolume
from pdvolume.persistent_volume import CsiVolumeSource, classify_volume
from pdvolume.volume_handle import VolumeHandle
from pdvolume.zones import is_multi_zone, parse_region

_logger = logging.getLogger(__name__)


class GcpVolumeSnapshotter(object):
    """
    Maps persistent volumes provisioned as GCP Persistent Disks to the volume
    IDs used for their snapshots, and back again on restore.

    Instances hold only the configuration they were created with and can be
    shared between threads.
    """

    def __init__(self, config):
        """
        :param pdvolume.config.SnapshotterConfig config: the resolved
            configuration
        """
        self.config = config

    @classmethod
    def from_config(cls, config):
        """
        Create a GcpVolumeSnapshotter from a configuration map.

        :param dict[str,str]|None config: the configuration map, see
            :func:`pdvolume.config.parse_config`
        :rtype: GcpVolumeSnapshotter
        """
        snapshotter = cls(parse_config(config))
        _logger.debug(
            "Initialized snapshotter: snapshot project %s, volume project %s, "
            "snapshot location %s",
            snapshotter.snapshot_project,
            snapshotter.volume_project,
            snapshotter.snapshot_location,
        )
        return snapshotter

    @property
    def snapshot_project(self):
        return self.config.snapshot_project

    @property
    def volume_project(self):
        return self.config.volume_project

    @property
    def snapshot_location(self):
        return self.config.snapshot_location

    @property
    def credentials_file(self):
        return self.config.credentials_file

    def get_volume_id(self, pv):
        """
        Return the ID of the Persistent Disk backing a persistent volume.

        :param dict pv: the persistent volume representation
        :rtype: str
        :return: the disk name, or an empty string if the volume is not a
            Persistent Disk
        :raise MalformedVolume: if the volume is a Persistent Disk but does
            not name one
        """
        return classify_volume(pv).volume_id

    def set_volume_id(self, pv, volume_id):
        """
        Return a copy of a persistent volume pointing at a different disk.

        For CSI volumes the zone of the current volume handle is kept and the
        project is replaced by the configured volume project, when there is
        one.

        :param dict pv: the persistent volume representation
        :param str volume_id: the name of the disk to reference
        :rtype: dict
        :raise InvalidVolumeId: if volume_id cannot be a disk name
        :raise MalformedVolume: if the current volume source is malformed
        :raise UnsupportedVolumeType: if the volume is not a Persistent Disk
        """
        if not volume_id or not isinstance(volume_id, str) or "/" in volume_id:
            raise InvalidVolumeId("invalid volume ID: %r" % (volume_id,))
        source = classify_volume(pv)
        if isinstance(source, CsiVolumeSource) and source.is_persistent_disk:
            self._log_project_change(source)
        return source.with_volume_id(pv, volume_id, self.volume_project)

    def _log_project_change(self, source):
        try:
            handle = source.parse_handle()
        except MalformedVolume:
            # reported by with_volume_id
            return
        if self.volume_project and handle.project != self.volume_project:
            _logger.info(
                "Moving volume handle %s from project %s to project %s",
                source.volume_handle,
                handle.project,
                self.volume_project,
            )

    def is_volume_created_cross_projects(self, volume_handle):
        """
        Whether a volume was provisioned in a project other than the
        configured volume project.

        An unparseable handle is never considered cross-project.

        :param str volume_handle: the CSI volume handle
        :rtype: bool
        """
        try:
            handle = VolumeHandle.parse(volume_handle)
        except MalformedVolume as e:
            _logger.debug("Unable to check volume project: %s", e)
            return False
        return handle.project != self.volume_project

    def get_snapshot_tags(self, operator_tags, disk_description):
        """
        Compute the tags of a snapshot, see
        :func:`pdvolume.tags.get_snapshot_tags`.

        :param dict[str,str]|None operator_tags: tags supplied by the operator
        :param str disk_description: the description of the source disk
        :rtype: str
        """
        return tags.get_snapshot_tags(operator_tags, disk_description, _logger)

    def get_disk_location(self, volume_az):
        """
        Return the scope in which a disk lives.

        Disks replicated across the zones of a multi-zone token are regional
        resources; all other disks are zonal.

        :param str volume_az: the zone token of the disk
        :rtype: tuple[str,str]
        :return: ``("regions", <region>)`` or ``("zones", <zone>)``
        :raise RegionParseError: if a multi-zone token is invalid
        """
        if is_multi_zone(volume_az):
            return "regions", parse_region(volume_az)
        return "zones", volume_az

    def get_snapshot_storage_locations(self):
        """
        The storage locations to request for new snapshots.

        :rtype: list[str]
        :return: the configured snapshot location, or an empty list to use
            the default location
        """
        if self.snapshot_location:
            return [self.snapshot_location]
        return []

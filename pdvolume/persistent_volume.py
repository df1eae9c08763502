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
Classification of persistent volume representations.

A persistent volume is handled as the nested dict form of a Kubernetes
PersistentVolume. Its ``spec`` is classified once into one of the
:class:`VolumeSource` specializations, so the rest of pdvolume never has to
probe the nested fields again.
"""

import copy
import logging
from abc import ABCMeta, abstractmethod

from pdvolume.exceptions import MalformedVolume, UnsupportedVolumeType
from pdvolume.volume_handle import VolumeHandle

_logger = logging.getLogger(__name__)

LEGACY_DISK_KEY = "gcePersistentDisk"
LEGACY_NAME_KEY = "pdName"
CSI_KEY = "csi"

# The only CSI driver whose volume handles name Persistent Disks
PD_CSI_DRIVER = "pd.csi.storage.gke.io"


def _get_mapping(container, key, description):
    """
    Return the mapping stored under key, or None if it is not set.

    :raise MalformedVolume: if the value is set but is not a mapping
    """
    value = container.get(key)
    if value is not None and not isinstance(value, dict):
        raise MalformedVolume(
            "%s is not a mapping: %r" % (description, type(value).__name__)
        )
    return value


def classify_volume(pv):
    """
    Classify a persistent volume by the volume source it uses.

    The legacy ``gcePersistentDisk`` source is checked before ``csi``.
    Keys set to None count as absent.

    :param dict pv: the persistent volume representation
    :rtype: VolumeSource
    :raise MalformedVolume: if the representation or one of its volume
        sources is not a mapping
    """
    if not isinstance(pv, dict):
        raise MalformedVolume(
            "persistent volume is not a mapping: %r" % type(pv).__name__
        )
    spec = _get_mapping(pv, "spec", "spec")
    if spec is None:
        return NoVolumeSource()
    disk = _get_mapping(spec, LEGACY_DISK_KEY, "spec.%s" % LEGACY_DISK_KEY)
    if disk is not None:
        return GcePersistentDiskSource(disk)
    csi = _get_mapping(spec, CSI_KEY, "spec.%s" % CSI_KEY)
    if csi is not None:
        return CsiVolumeSource(csi)
    return NoVolumeSource()


class VolumeSource(metaclass=ABCMeta):
    """
    The volume source found in a persistent volume spec.

    Specializations must:

        1. Set `spec_key` to the key of their container under ``spec``.
        2. Implement `volume_id`, returning the canonical volume ID or an
           empty string when the volume was not provisioned as a Persistent
           Disk.
        3. Implement `_updated_fields`, returning the content of their
           container with a new volume ID.
    """

    spec_key = None

    @property
    @abstractmethod
    def volume_id(self):
        """
        The canonical volume ID, or an empty string if this volume is not
        a Persistent Disk.

        :rtype: str
        """

    @abstractmethod
    def _updated_fields(self, volume_id, volume_project=None):
        """
        Return a copy of this source's fields naming a different volume.

        :param str volume_id: the new volume ID
        :param str|None volume_project: the project of the new volume, when
            it differs from the project of the current one
        :rtype: dict
        """

    def with_volume_id(self, pv, volume_id, volume_project=None):
        """
        Return a copy of pv which references a different volume.

        The supplied persistent volume is never modified.

        :param dict pv: the persistent volume this source was classified from
        :param str volume_id: the new volume ID
        :param str|None volume_project: the project of the new volume
        :rtype: dict
        """
        fields = self._updated_fields(volume_id, volume_project)
        updated_pv = copy.deepcopy(pv)
        updated_pv["spec"][self.spec_key] = fields
        return updated_pv


class NoVolumeSource(VolumeSource):
    """
    A persistent volume with neither a legacy nor a CSI volume source.
    """

    @property
    def volume_id(self):
        return ""

    def _updated_fields(self, volume_id, volume_project=None):
        raise UnsupportedVolumeType(
            "persistent volume has neither spec.%s nor spec.%s"
            % (LEGACY_DISK_KEY, CSI_KEY)
        )


class GcePersistentDiskSource(VolumeSource):
    """
    The legacy in-tree ``gcePersistentDisk`` volume source.
    """

    spec_key = LEGACY_DISK_KEY

    def __init__(self, fields):
        """
        :param dict fields: the content of spec.gcePersistentDisk
        """
        self.fields = fields
        self.pd_name = fields.get(LEGACY_NAME_KEY)

    @property
    def volume_id(self):
        """
        The pdName of the disk.

        :raise MalformedVolume: if pdName is missing or empty
        """
        if not self.pd_name:
            raise MalformedVolume(
                "spec.%s.%s is missing or empty" % (LEGACY_DISK_KEY, LEGACY_NAME_KEY)
            )
        if not isinstance(self.pd_name, str):
            raise MalformedVolume(
                "spec.%s.%s is not a string: %r"
                % (LEGACY_DISK_KEY, LEGACY_NAME_KEY, self.pd_name)
            )
        return self.pd_name

    def _updated_fields(self, volume_id, volume_project=None):
        # The disk project is not part of the legacy source
        fields = copy.deepcopy(self.fields)
        fields[LEGACY_NAME_KEY] = volume_id
        return fields


class CsiVolumeSource(VolumeSource):
    """
    A ``csi`` volume source, provisioned by any CSI driver.
    """

    spec_key = CSI_KEY

    def __init__(self, fields):
        """
        :param dict fields: the content of spec.csi
        """
        self.fields = fields
        self.driver = fields.get("driver")
        self.volume_handle = fields.get("volumeHandle")
        self.fs_type = fields.get("fsType")
        self.volume_attributes = fields.get("volumeAttributes") or {}

    @property
    def is_persistent_disk(self):
        """
        Whether the volume was provisioned by the Persistent Disk CSI driver.

        :rtype: bool
        """
        return self.driver == PD_CSI_DRIVER

    def parse_handle(self):
        """
        Parse the volume handle of this volume.

        :rtype: VolumeHandle
        :raise MalformedVolume: if the handle is missing or malformed
        """
        if not isinstance(self.volume_handle, str):
            raise MalformedVolume(
                "spec.%s.volumeHandle is missing or not a string" % CSI_KEY
            )
        return VolumeHandle.parse(self.volume_handle)

    @property
    def volume_id(self):
        """
        The disk name of the volume handle, or an empty string for volumes
        provisioned by other CSI drivers.

        :raise MalformedVolume: if the handle is malformed
        """
        if not self.is_persistent_disk:
            _logger.debug("Ignoring volume provisioned by CSI driver %s", self.driver)
            return ""
        return self.parse_handle().disk_name

    def _updated_fields(self, volume_id, volume_project=None):
        if not self.is_persistent_disk:
            raise UnsupportedVolumeType(
                "unable to handle CSI driver: %s" % self.driver
            )
        handle = self.parse_handle().with_disk_name(volume_id, project=volume_project)
        fields = copy.deepcopy(self.fields)
        fields["volumeHandle"] = str(handle)
        return fields

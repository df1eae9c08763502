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

import copy

import pytest
from testing_helpers import (
    DISK_NAME,
    VOLUME_HANDLE,
    build_csi_pv,
    build_legacy_pv,
)

from pdvolume.exceptions import (
    MalformedVolume,
    MalformedVolumeHandle,
    UnsupportedVolumeType,
)
from pdvolume.persistent_volume import (
    CsiVolumeSource,
    GcePersistentDiskSource,
    NoVolumeSource,
    classify_volume,
)


class TestClassifyVolume(object):
    """
    Verify a persistent volume is classified by its volume source.
    """

    @pytest.mark.parametrize(
        "pv",
        (
            {},
            {"spec": None},
            {"spec": {}},
            {"spec": {"gcePersistentDisk": None, "csi": None}},
            {"spec": {"nfs": {"server": "nfs.local", "path": "/exports"}}},
        ),
    )
    def test_no_volume_source(self, pv):
        assert isinstance(classify_volume(pv), NoVolumeSource)

    def test_legacy_source(self, legacy_pv):
        source = classify_volume(legacy_pv)
        assert isinstance(source, GcePersistentDiskSource)
        assert source.pd_name == "abc123"

    def test_csi_source(self, csi_pv):
        source = classify_volume(csi_pv)
        assert isinstance(source, CsiVolumeSource)
        assert source.driver == "pd.csi.storage.gke.io"
        assert source.volume_handle == VOLUME_HANDLE
        assert source.fs_type == "ext4"
        assert source.is_persistent_disk

    def test_legacy_source_checked_first(self, legacy_pv):
        # GIVEN a persistent volume with both volume sources
        legacy_pv["spec"]["csi"] = build_csi_pv()["spec"]["csi"]

        # THEN it is classified by its legacy volume source
        assert isinstance(classify_volume(legacy_pv), GcePersistentDiskSource)

    @pytest.mark.parametrize(
        ("pv", "expected_message"),
        (
            (None, "persistent volume is not a mapping: 'NoneType'"),
            ({"spec": "csi"}, "spec is not a mapping: 'str'"),
            (
                {"spec": {"gcePersistentDisk": "abc123"}},
                "spec.gcePersistentDisk is not a mapping: 'str'",
            ),
            ({"spec": {"csi": ["driver"]}}, "spec.csi is not a mapping: 'list'"),
        ),
    )
    def test_not_a_mapping(self, pv, expected_message):
        with pytest.raises(MalformedVolume) as exc:
            classify_volume(pv)
        assert str(exc.value) == expected_message


class TestGcePersistentDiskSource(object):
    """
    Verify the legacy gcePersistentDisk volume source.
    """

    def test_volume_id(self, legacy_pv):
        assert classify_volume(legacy_pv).volume_id == "abc123"

    @pytest.mark.parametrize("pd_name", (None, ""))
    def test_volume_id_missing(self, pd_name):
        # GIVEN a gcePersistentDisk without pdName
        source = classify_volume(build_legacy_pv(pd_name))

        # THEN reading its volume ID raises MalformedVolume
        with pytest.raises(MalformedVolume) as exc:
            source.volume_id
        assert str(exc.value) == "spec.gcePersistentDisk.pdName is missing or empty"

    def test_volume_id_not_a_string(self):
        source = classify_volume(build_legacy_pv(123))
        with pytest.raises(MalformedVolume):
            source.volume_id

    def test_with_volume_id(self):
        # GIVEN a gcePersistentDisk without pdName
        pv = {"spec": {"gcePersistentDisk": {}}}
        original = copy.deepcopy(pv)

        # WHEN the volume ID is replaced
        updated_pv = classify_volume(pv).with_volume_id(pv, "123abc")

        # THEN the updated volume has the new pdName
        assert updated_pv == {"spec": {"gcePersistentDisk": {"pdName": "123abc"}}}
        # AND the original volume is unchanged
        assert pv == original


class TestCsiVolumeSource(object):
    """
    Verify the csi volume source.
    """

    def test_volume_id(self, csi_pv):
        assert classify_volume(csi_pv).volume_id == DISK_NAME

    def test_volume_id_other_driver(self):
        source = classify_volume(build_csi_pv(driver="xxx.csi.storage.gke.io"))
        assert not source.is_persistent_disk
        assert source.volume_id == ""

    @pytest.mark.parametrize("volume_handle", (DISK_NAME, ""))
    def test_volume_id_malformed_handle(self, volume_handle):
        source = classify_volume(build_csi_pv(volume_handle=volume_handle))
        with pytest.raises(MalformedVolumeHandle):
            source.volume_id

    @pytest.mark.parametrize("volume_handle", (None, 42))
    def test_volume_id_missing_handle(self, volume_handle):
        source = classify_volume(build_csi_pv(volume_handle=volume_handle))
        with pytest.raises(MalformedVolume) as exc:
            source.volume_id
        assert str(exc.value) == "spec.csi.volumeHandle is missing or not a string"

    @pytest.mark.parametrize(
        ("volume_project", "expected_handle"),
        (
            (None, "projects/velero-gcp/zones/us-central1-f/disks/restore-1"),
            (
                "velero-gcp-2",
                "projects/velero-gcp-2/zones/us-central1-f/disks/restore-1",
            ),
        ),
    )
    def test_with_volume_id(self, csi_pv, volume_project, expected_handle):
        # GIVEN a csi persistent volume and a copy of it
        original = copy.deepcopy(csi_pv)

        # WHEN the volume ID is replaced
        updated_pv = classify_volume(csi_pv).with_volume_id(
            csi_pv, "restore-1", volume_project
        )

        # THEN the handle references the new disk in the expected project
        assert updated_pv["spec"]["csi"]["volumeHandle"] == expected_handle
        # AND the other csi fields are kept
        assert updated_pv["spec"]["csi"]["fsType"] == "ext4"
        assert (
            updated_pv["spec"]["csi"]["volumeAttributes"]
            == original["spec"]["csi"]["volumeAttributes"]
        )
        # AND the rest of the volume is kept
        assert updated_pv["metadata"] == original["metadata"]
        assert updated_pv["spec"]["capacity"] == original["spec"]["capacity"]
        # AND the original volume is unchanged
        assert csi_pv == original

    def test_with_volume_id_malformed_handle(self):
        pv = build_csi_pv(volume_handle=DISK_NAME)
        original = copy.deepcopy(pv)
        with pytest.raises(MalformedVolume):
            classify_volume(pv).with_volume_id(pv, "restore-1")
        assert pv == original

    def test_with_volume_id_other_driver(self):
        pv = build_csi_pv(driver="xxx.csi.storage.gke.io")
        with pytest.raises(UnsupportedVolumeType) as exc:
            classify_volume(pv).with_volume_id(pv, "restore-1")
        assert str(exc.value) == "unable to handle CSI driver: xxx.csi.storage.gke.io"


class TestNoVolumeSource(object):
    def test_volume_id(self):
        assert NoVolumeSource().volume_id == ""

    def test_with_volume_id(self):
        with pytest.raises(UnsupportedVolumeType):
            NoVolumeSource().with_volume_id({}, "abc123")

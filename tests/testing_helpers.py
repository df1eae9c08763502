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
Builders for persistent volume representations used across the tests
"""

PD_CSI_DRIVER = "pd.csi.storage.gke.io"
DISK_NAME = "pvc-a970184f-6cc1-4769-85ad-61dcaf8bf51d"
VOLUME_HANDLE = "projects/velero-gcp/zones/us-central1-f/disks/%s" % DISK_NAME


def build_csi_pv(driver=PD_CSI_DRIVER, volume_handle=VOLUME_HANDLE, **fields):
    """
    Build a persistent volume with a csi volume source
    """
    csi = {
        "driver": driver,
        "fsType": "ext4",
        "volumeAttributes": {
            "storage.kubernetes.io/csiProvisionerIdentity": (
                "1637243273131-8081-pd.csi.storage.gke.io"
            ),
        },
        "volumeHandle": volume_handle,
    }
    csi.update(fields)
    return {
        "apiVersion": "v1",
        "kind": "PersistentVolume",
        "metadata": {"name": "pv-1"},
        "spec": {"capacity": {"storage": "10Gi"}, "csi": csi},
    }


def build_legacy_pv(pd_name=None):
    """
    Build a persistent volume with a gcePersistentDisk volume source
    """
    disk = {"fsType": "ext4"}
    if pd_name is not None:
        disk["pdName"] = pd_name
    return {
        "apiVersion": "v1",
        "kind": "PersistentVolume",
        "metadata": {"name": "pv-1"},
        "spec": {"gcePersistentDisk": disk},
    }


def write_credentials_file(path, project_id="project-a"):
    """
    Write a service account credentials file for project_id
    """
    path.write_text(
        '{"type": "service_account","project_id": "%s","private_key_id":"id",'
        '"private_key":"key","client_email":"a@b.com","client_id":"id",'
        '"auth_uri":"uri","token_uri":"uri","auth_provider_x509_cert_url":"url",'
        '"client_x509_cert_url":"url"}' % project_id
    )
    return str(path)

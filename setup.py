#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# pdvolume - Persistent Disk volume identity and snapshot tag helpers
#
# © Copyright EnterpriseDB UK Limited 2025
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""Persistent Disk volume identity and snapshot tag helpers

pdvolume translates the identity of Kubernetes persistent volumes
provisioned as GCP Persistent Disks, either through the legacy
gcePersistentDisk volume source or the Persistent Disk CSI driver, into
the disk names used for snapshots, and rewrites them on restore. It also
computes the tags applied to disk snapshots.

pdvolume is distributed under GNU GPL 3.
"""

import sys

from setuptools import find_packages, setup

if sys.version_info < (3, 6):
    raise SystemExit("ERROR: pdvolume needs at least python 3.6 to work")

install_requires = []

pdvolume = {}
with open("pdvolume/version.py", "r", encoding="utf-8") as fversion:
    exec(fversion.read(), pdvolume)

setup(
    name="pdvolume",
    version=pdvolume["__version__"],
    author="EnterpriseDB",
    packages=find_packages(exclude=["tests"]),
    entry_points={
        "console_scripts": [
            "pdvolume=pdvolume.cli:main",
        ],
    },
    license="GPL-3.0",
    description=__doc__.split("\n")[0],
    long_description="\n".join(__doc__.split("\n")[2:]),
    install_requires=install_requires,
    extras_require={
        "argcomplete": ["argcomplete"],
        "test": ["pytest", "mock"],
    },
    platforms=["Linux", "Mac OS X"],
    classifiers=[
        "Environment :: Console",
        "Development Status :: 5 - Production/Stable",
        "Topic :: System :: Archiving :: Backup",
        "Topic :: System :: Recovery Tools",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
    ],
)

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
Volume identity and snapshot tag helpers for GCP Persistent Disk backups.
"""

from pdvolume.version import __version__  # noqa

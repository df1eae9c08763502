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
Zone token helpers.

A zone token names a single zone (``us-central1-a``) or, for disks
replicated across zones, several zones of the same region joined by
``__`` (``us-central1-a__us-central1-b``).
"""

import json
import re

from pdvolume.exceptions import RegionParseError

MULTI_ZONE_SEPARATOR = "__"

_ZONE_RE = re.compile(r"^(?P<region>[a-z0-9]+(?:-[a-z0-9]+)*)-(?P<suffix>[a-z])$")


def _quote(zone_token):
    """Double quote a zone token, escaping quotes and backslashes"""
    return json.dumps(zone_token, ensure_ascii=False)


def is_multi_zone(zone_token):
    """
    Whether the token names more than one zone.

    :param str zone_token: the zone token
    :rtype: bool
    """
    return MULTI_ZONE_SEPARATOR in zone_token


def _zone_matches(zone_token):
    zones = zone_token.split(MULTI_ZONE_SEPARATOR)
    matches = [_ZONE_RE.match(zone) for zone in zones]
    if not all(matches):
        # always report the full token, even for a single bad zone
        raise RegionParseError(
            "failed to parse region from zone: %s" % _quote(zone_token)
        )
    return matches


def parse_zones(zone_token):
    """
    Split a zone token into its zone names.

    :param str zone_token: the zone token
    :rtype: list[str]
    :raise RegionParseError: if any zone in the token is invalid
    """
    return [match.group(0) for match in _zone_matches(zone_token)]


def parse_region(zone_token):
    """
    Return the region of the zones named by a zone token.

    Every zone of a multi-zone token must belong to the same region.

    :param str zone_token: the zone token
    :rtype: str
    :raise RegionParseError: if any zone is invalid or the zones span
        more than one region
    """
    regions = [match.group("region") for match in _zone_matches(zone_token)]
    if len(set(regions)) > 1:
        raise RegionParseError(
            "zones in %s span more than one region: %s"
            % (_quote(zone_token), ", ".join(sorted(set(regions))))
        )
    return regions[0]

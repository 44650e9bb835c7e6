# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Thin client for the MLB Stats API (statsapi.mlb.com) stats endpoints.

Fetches ``/people/{id}/stats`` and ``/teams/{id}/stats`` for a
:class:`~stats.layout.StatsLayout` and resolves the JSON into a
:class:`~stats.layout.StatsBundle`.  Each request is a single attempt;
callers that want retries wrap these functions themselves.

Usage::

    from data.mlb_api import get_person_stats
    from stats.layout import StatsLayout

    layout = StatsLayout(["season", "career"], ["hitting"])
    bundle = get_person_stats(592450, layout, season=2024)
    print(bundle["season", "hitting"].stats.avg)
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any

import config
from stats.layout import StatsBundle, StatsLayout

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

API_VERSION = "v1"

# Team name / abbreviation lookup (all 30 teams)
TEAM_IDS: dict[str, int] = {
    "angels": 108, "los angeles angels": 108, "laa": 108,
    "diamondbacks": 109, "arizona diamondbacks": 109, "az": 109, "ari": 109,
    "orioles": 110, "baltimore orioles": 110, "bal": 110,
    "red sox": 111, "boston red sox": 111, "bos": 111,
    "cubs": 112, "chicago cubs": 112, "chc": 112,
    "reds": 113, "cincinnati reds": 113, "cin": 113,
    "guardians": 114, "cleveland guardians": 114, "cle": 114,
    "rockies": 115, "colorado rockies": 115, "col": 115,
    "tigers": 116, "detroit tigers": 116, "det": 116,
    "astros": 117, "houston astros": 117, "hou": 117,
    "royals": 118, "kansas city royals": 118, "kc": 118,
    "dodgers": 119, "los angeles dodgers": 119, "lad": 119,
    "nationals": 120, "washington nationals": 120, "wsh": 120,
    "mets": 121, "new york mets": 121, "nym": 121,
    "athletics": 133, "ath": 133, "oak": 133,
    "pirates": 134, "pittsburgh pirates": 134, "pit": 134,
    "padres": 135, "san diego padres": 135, "sd": 135,
    "mariners": 136, "seattle mariners": 136, "sea": 136,
    "giants": 137, "san francisco giants": 137, "sf": 137,
    "cardinals": 138, "st. louis cardinals": 138, "stl": 138,
    "rays": 139, "tampa bay rays": 139, "tb": 139,
    "rangers": 140, "texas rangers": 140, "tex": 140,
    "blue jays": 141, "toronto blue jays": 141, "tor": 141,
    "twins": 142, "minnesota twins": 142, "min": 142,
    "phillies": 143, "philadelphia phillies": 143, "phi": 143,
    "braves": 144, "atlanta braves": 144, "atl": 144,
    "white sox": 145, "chicago white sox": 145, "cws": 145,
    "marlins": 146, "miami marlins": 146, "mia": 146,
    "yankees": 147, "new york yankees": 147, "nyy": 147,
    "brewers": 158, "milwaukee brewers": 158, "mil": 158,
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class MLBApiError(Exception):
    """Base exception for MLB Stats API errors."""

    def __init__(self, message: str, status_code: int | None = None,
                 url: str | None = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class MLBApiNotFoundError(MLBApiError):
    """Raised when a resource is not found (404)."""


class MLBApiConnectionError(MLBApiError):
    """Raised when a connection to the API cannot be established."""


class MLBApiTimeoutError(MLBApiError):
    """Raised when a request to the API times out."""


# ---------------------------------------------------------------------------
# Low-level HTTP helpers
# ---------------------------------------------------------------------------

def _fetch_json(url: str, timeout: float | None = None) -> Any:
    """Fetch and decode JSON from *url* in a single attempt.

    Args:
        url: Full URL to fetch.
        timeout: Request timeout in seconds. Defaults to the configured
            ``MLB_STATS_API_TIMEOUT``.

    Returns:
        The decoded JSON document.

    Raises:
        MLBApiNotFoundError: If the server returns 404.
        MLBApiTimeoutError: If the request times out.
        MLBApiConnectionError: If the server is unreachable.
        MLBApiError: For other HTTP errors or an undecodable body.
    """
    if timeout is None:
        timeout = config.get_timeout()

    logger.debug("GET %s", url)
    try:
        req = urllib.request.Request(url)
        req.add_header("Accept", "application/json")
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            data = resp.read()

    except urllib.error.HTTPError as exc:
        if exc.code == 404:
            raise MLBApiNotFoundError(
                f"Resource not found: {url}",
                status_code=404,
                url=url,
            ) from exc
        raise MLBApiError(
            f"HTTP {exc.code} from {url}",
            status_code=exc.code,
            url=url,
        ) from exc

    except urllib.error.URLError as exc:
        if isinstance(exc.reason, TimeoutError):
            raise MLBApiTimeoutError(f"Request timed out: {url}", url=url) from exc
        raise MLBApiConnectionError(f"Connection failed: {exc.reason}", url=url) from exc

    except TimeoutError as exc:
        raise MLBApiTimeoutError(f"Request timed out: {url}", url=url) from exc

    except OSError as exc:
        raise MLBApiConnectionError(f"Connection error: {exc}", url=url) from exc

    try:
        return json.loads(data)
    except ValueError as exc:
        raise MLBApiError(f"Invalid JSON from {url}: {exc}", url=url) from exc


def _build_url(version: str, path: str,
               params: dict[str, Any] | None = None) -> str:
    """Build a full MLB Stats API URL.

    Args:
        version: API version (e.g. ``"v1"``).
        path: Resource path (e.g. ``"people/592450/stats"``).
        params: Optional query parameters; ``None`` values are dropped.

    Returns:
        The full URL string.
    """
    url = f"{config.get_base_url()}/{version}/{path}"
    if params:
        filtered = {k: v for k, v in params.items() if v is not None}
        if filtered:
            query = "&".join(f"{k}={v}" for k, v in filtered.items())
            url = f"{url}?{query}"
    return url


# ---------------------------------------------------------------------------
# Team lookup
# ---------------------------------------------------------------------------

def lookup_team_id(team: str | int) -> int:
    """Resolve a team name, abbreviation, or numeric ID to an MLB team ID.

    Raises:
        ValueError: If the team cannot be resolved.
    """
    if isinstance(team, int):
        return team
    key = team.strip().lower()
    if key in TEAM_IDS:
        return TEAM_IDS[key]
    if key.isdigit():
        return int(key)
    raise ValueError(
        f"Unknown team: {team!r}. Use a team name (e.g. 'Red Sox'), "
        f"abbreviation (e.g. 'BOS'), or numeric team ID (e.g. 111)."
    )


# ---------------------------------------------------------------------------
# Stats endpoints
# ---------------------------------------------------------------------------

def get_person_stats(
    person_id: int,
    layout: StatsLayout,
    season: int | None = None,
    **extra_params: Any,
) -> StatsBundle:
    """Fetch and resolve a player's stats for every pair in *layout*.

    Args:
        person_id: MLB person ID.
        layout: The stat types and groups to request.
        season: Optional season filter.
        **extra_params: Additional query parameters, e.g.
            ``opposingPlayerId`` for ``vsPlayer``.

    Raises:
        MLBApiError: On transport errors.
        StatsResolutionError: If the response cannot be resolved.
    """
    params = layout.query_params(season=season)
    params.update(extra_params)
    url = _build_url(API_VERSION, f"people/{person_id}/stats", params)
    return layout.resolve(_fetch_json(url))


def get_team_stats(
    team: str | int,
    layout: StatsLayout,
    season: int | None = None,
    **extra_params: Any,
) -> StatsBundle:
    """Fetch and resolve a team's stats for every pair in *layout*.

    Args:
        team: Team name, abbreviation, or numeric ID.
        layout: The stat types and groups to request.
        season: Optional season filter.

    Raises:
        MLBApiError: On transport errors.
        StatsResolutionError: If the response cannot be resolved.
        ValueError: If the team cannot be resolved.
    """
    team_id = lookup_team_id(team)
    params = layout.query_params(season=season)
    params.update(extra_params)
    url = _build_url(API_VERSION, f"teams/{team_id}/stats", params)
    return layout.resolve(_fetch_json(url))

"""Observer layer — geocoding, local time to UTC, and sun data assembly."""

import os
from datetime import datetime, timedelta

import httpx
from pytz import timezone, utc
from pytz.exceptions import InvalidTimeError
from timezonefinder import TimezoneFinder

from sunpos.compute import sun_path, sun_position
from sunpos.models import Instant, ObserverContext, QueryInput, SunData

_NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
_DEFAULT_USER_AGENT = "SunPos/1.0 (solar position calculator)"
_tf = TimezoneFinder()


class GeocodingError(Exception):
    """Geocoder call failure, or a place/time that cannot be resolved."""


def _geocode_nominatim(address: str) -> tuple[float, float, str] | None:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": os.environ.get("SUNPOS_USER_AGENT", _DEFAULT_USER_AGENT)}
    resp = httpx.get(_NOMINATIM_URL, params=params, headers=headers, timeout=10)
    resp.raise_for_status()
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def localize(lat: float, lng: float, when: str) -> tuple[datetime, str]:
    """Interpret a local "YYYY-MM-DD HH:MM" string at the given coordinates.

    Returns:
        (UTC datetime, IANA timezone name).

    Raises:
        ValueError: If `when` does not match the expected format.
        GeocodingError: If no timezone covers the coordinates, or the local
            time is ambiguous or skipped by a DST transition.
    """
    dt = datetime.strptime(when, "%Y-%m-%d %H:%M")
    tz_str = _tf.timezone_at(lat=lat, lng=lng)
    if tz_str is None:
        raise GeocodingError(f"Timezone not found: lat={lat}, lng={lng}")
    local_tz = timezone(tz_str)
    try:
        local_dt = local_tz.localize(dt, is_dst=None)
    except InvalidTimeError as e:
        raise GeocodingError(f"Invalid local time {when} in {tz_str}: {e!r}") from e
    return local_dt.astimezone(utc), tz_str


def geocode_address(address: str, when: str) -> ObserverContext:
    """Resolve an address string and local time string to an ObserverContext.

    Args:
        address: Address string in any language.
        when: Local time string in "YYYY-MM-DD HH:MM" format.

    Returns:
        ObserverContext containing lat/lng, UTC datetime, and normalized address.

    Raises:
        GeocodingError: When the address or its timezone cannot be found.
        httpx.HTTPStatusError: On a non-2xx geocoder response.
    """
    result = _geocode_nominatim(address)
    if result is None:
        raise GeocodingError(f"Address not found: {address}")
    lat, lng, address_display = result

    utc_dt, tz_str = localize(lat, lng, when)
    return ObserverContext(
        lat=lat,
        lng=lng,
        utc_dt=utc_dt,
        address_display=address_display,
        timezone_name=tz_str,
    )


def compute_sun_data(context: ObserverContext, step_minutes: int = 10) -> SunData:
    """Compute the sun position at the context instant and its path over the local day.

    The path runs from local midnight to the next local midnight, so it spans
    23 or 25 hours when the day contains a DST transition.

    Args:
        context: Geocoding result (lat/lng, UTC datetime, timezone).
        step_minutes: Sun path sampling interval.

    Returns:
        SunData for the renderers.
    """
    location = context.location
    position = sun_position(Instant.from_datetime(context.utc_dt), location)

    local_tz = timezone(context.timezone_name)
    local_day = context.utc_dt.astimezone(local_tz).date()
    midnight = local_tz.localize(datetime(local_day.year, local_day.month, local_day.day))
    next_day = local_day + timedelta(days=1)
    next_midnight = local_tz.localize(datetime(next_day.year, next_day.month, next_day.day))
    hours = (next_midnight - midnight).total_seconds() / 3600
    path = sun_path(midnight, location, hours=hours, step_minutes=step_minutes)

    return SunData(context=context, position=position, path=path)


def run(query: QueryInput, step_minutes: int = 10) -> SunData:
    """Top-level entry point: takes a QueryInput and returns a SunData.

    Args:
        query: User input (address, local time string).
        step_minutes: Sun path sampling interval.

    Returns:
        Fully computed SunData.
    """
    context = geocode_address(query.address, query.when)
    return compute_sun_data(context, step_minutes)

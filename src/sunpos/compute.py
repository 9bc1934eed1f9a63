"""Solar position computation — the PSA low-precision algorithm.

Four pure stages composed in a fixed pipeline:

    Instant -> JulianTime -> EclipticCoordinates -> EquatorialCoordinates
            -> SunCoordinates (with observer Location)

No stage validates its input. Intermediate angles are kept unreduced; the
trigonometric functions downstream handle periodicity.
"""

import math
from datetime import datetime, timedelta

from pytz import utc

from sunpos.models import (
    EclipticCoordinates,
    EquatorialCoordinates,
    Instant,
    JulianTime,
    Location,
    SunCoordinates,
    SunPathPoint,
)

RAD = math.pi / 180.0
EARTH_MEAN_RADIUS = 6371.01  # km
ASTRONOMICAL_UNIT = 149597890.0  # km
J2000 = 2451545.0  # Julian Day of 2000-01-01 12:00 UTC

_TWO_PI = 2 * math.pi


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (Python's // floors)."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _acos(x: float) -> float:
    """acos that returns NaN outside [-1, 1] instead of raising."""
    if not -1.0 <= x <= 1.0:
        return math.nan
    return math.acos(x)


def elapsed_julian_days(instant: Instant) -> JulianTime:
    """Days elapsed since J2000.0, plus the UTC time of day in decimal hours.

    Uses the closed-form integer Julian Day Number conversion for the
    proleptic Gregorian calendar.
    """
    decimal_hours = instant.hour + (instant.minute + instant.second / 60.0) / 60.0

    year, month, day = instant.year, instant.month, instant.day
    aux1 = _tdiv(month - 14, 12)
    aux2 = (
        _tdiv(1461 * (year + 4800 + aux1), 4)
        + _tdiv(367 * (month - 2 - 12 * aux1), 12)
        - _tdiv(3 * _tdiv(year + 4900 + aux1, 100), 4)
        + day
        - 32075
    )
    julian_date = float(aux2) - 0.5 + decimal_hours / 24.0
    return JulianTime(
        elapsed_julian_days=julian_date - J2000, decimal_hours=decimal_hours
    )


def ecliptic_coordinates(elapsed_days: float) -> EclipticCoordinates:
    """Ecliptic longitude and obliquity of the ecliptic (radians, unreduced)."""
    d = elapsed_days
    omega = 2.1429 - 0.0010394594 * d
    mean_longitude = 4.8950630 + 0.017202791698 * d
    mean_anomaly = 6.2400600 + 0.0172019699 * d
    longitude = (
        mean_longitude
        + 0.03341607 * math.sin(mean_anomaly)
        + 0.00034894 * math.sin(2 * mean_anomaly)
        - 0.0001134
        - 0.0000203 * math.sin(omega)
    )
    obliquity = 0.4090928 - 6.2140e-9 * d + 0.0000396 * math.cos(omega)
    return EclipticCoordinates(longitude=longitude, obliquity=obliquity)


def equatorial_coordinates(ecliptic: EclipticCoordinates) -> EquatorialCoordinates:
    """Rotate ecliptic coordinates by the obliquity into right ascension/declination."""
    sin_longitude = math.sin(ecliptic.longitude)
    y = math.cos(ecliptic.obliquity) * sin_longitude
    x = math.cos(ecliptic.longitude)
    right_ascension = math.atan2(y, x)
    if right_ascension < 0.0:
        right_ascension += _TWO_PI
    declination = math.asin(math.sin(ecliptic.obliquity) * sin_longitude)
    return EquatorialCoordinates(
        right_ascension=right_ascension, declination=declination
    )


def topocentric_coordinates(
    julian: JulianTime,
    equatorial: EquatorialCoordinates,
    location: Location,
) -> SunCoordinates:
    """Azimuth and zenith angle (degrees) for an observer, with parallax correction.

    Args:
        julian: Elapsed days since J2000.0 and UTC decimal hours.
        equatorial: Sun right ascension and declination (radians).
        location: Observer latitude/longitude (degrees).

    Returns:
        SunCoordinates with azimuth normalized into [0, 360).
    """
    gmst = (
        6.6974243242
        + 0.0657098283 * julian.elapsed_julian_days
        + julian.decimal_hours
    )
    lmst = (gmst * 15 + location.longitude) * RAD
    hour_angle = lmst - equatorial.right_ascension
    latitude = location.latitude * RAD

    cos_latitude = math.cos(latitude)
    sin_latitude = math.sin(latitude)
    cos_hour_angle = math.cos(hour_angle)
    declination = equatorial.declination

    # Rounding can push the argument past 1 near the subsolar point
    zenith_angle = _acos(
        cos_latitude * cos_hour_angle * math.cos(declination)
        + math.sin(declination) * sin_latitude
    )

    # atan2 keeps the quadrant; no acos + sign disambiguation needed
    y = -math.sin(hour_angle)
    x = math.tan(declination) * cos_latitude - sin_latitude * cos_hour_angle
    azimuth = math.atan2(y, x)
    if azimuth < 0.0:
        azimuth += _TWO_PI

    parallax = (EARTH_MEAN_RADIUS / ASTRONOMICAL_UNIT) * math.sin(zenith_angle)
    return SunCoordinates(
        azimuth=azimuth / RAD,
        zenith_angle=(zenith_angle + parallax) / RAD,
    )


def sun_position(instant: Instant, location: Location) -> SunCoordinates:
    """Apparent azimuth and zenith angle of the Sun.

    Pure and stateless: identical inputs always give identical outputs, and
    nothing is validated. Out-of-range locations or dates are run through the
    formula as-is.

    Args:
        instant: UTC civil timestamp.
        location: Observer latitude/longitude in degrees.

    Returns:
        SunCoordinates in degrees.
    """
    julian = elapsed_julian_days(instant)
    ecliptic = ecliptic_coordinates(julian.elapsed_julian_days)
    equatorial = equatorial_coordinates(ecliptic)
    return topocentric_coordinates(julian, equatorial, location)


def sun_path(
    start: datetime,
    location: Location,
    hours: float = 24,
    step_minutes: int = 10,
) -> tuple[SunPathPoint, ...]:
    """Sample the sun track from `start` over `hours`, one sun_position call per sample.

    Args:
        start: First sample time. Naive datetimes are taken as UTC.
        location: Observer latitude/longitude in degrees.
        hours: Length of the window. Both ends are included.
        step_minutes: Spacing between samples.

    Returns:
        Tuple of SunPathPoint in chronological order.

    Raises:
        ValueError: If step_minutes is not positive.
    """
    if step_minutes <= 0:
        raise ValueError(f"step_minutes must be positive, got {step_minutes}")

    start_utc = utc.localize(start) if start.tzinfo is None else start.astimezone(utc)
    n_steps = int(hours * 60 // step_minutes)

    points: list[SunPathPoint] = []
    for i in range(n_steps + 1):
        dt = start_utc + timedelta(minutes=i * step_minutes)
        pos = sun_position(Instant.from_datetime(dt), location)
        points.append(
            SunPathPoint(
                utc_dt=dt,
                azimuth=pos.azimuth,
                zenith_angle=pos.zenith_angle,
                elevation=pos.elevation,
            )
        )
    return tuple(points)

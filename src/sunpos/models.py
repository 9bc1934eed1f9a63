"""Data model definitions — explicit boundaries between input, compute, and render layers."""

from dataclasses import dataclass
from datetime import datetime

from pytz import utc


@dataclass(frozen=True)
class Instant:
    """Civil UTC timestamp. No timezone offset is applied, nothing is validated."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: float = 0.0  # Fractional seconds permitted

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """Build an Instant from a datetime.

        Aware datetimes are converted to UTC first. Naive datetimes are taken
        to already be in UTC.
        """
        if dt.tzinfo is not None:
            dt = dt.astimezone(utc)
        return cls(
            year=dt.year,
            month=dt.month,
            day=dt.day,
            hour=dt.hour,
            minute=dt.minute,
            second=dt.second + dt.microsecond / 1_000_000,
        )


@dataclass(frozen=True)
class Location:
    """Observer position on Earth. Not range-checked."""

    latitude: float  # Decimal degrees, north positive
    longitude: float  # Decimal degrees, east positive


@dataclass(frozen=True)
class SunCoordinates:
    """Apparent position of the Sun for one observer and instant."""

    azimuth: float  # Degrees in [0, 360), 0=N, 90=E, 180=S, 270=W
    zenith_angle: float  # Degrees from the local vertical, parallax corrected

    @property
    def elevation(self) -> float:
        """Solar altitude above the horizon (degrees)."""
        return 90.0 - self.zenith_angle


@dataclass(frozen=True)
class JulianTime:
    elapsed_julian_days: float  # Days since JD 2451545.0 (2000-01-01 12:00 UTC)
    decimal_hours: float  # UTC time of day in hours


@dataclass(frozen=True)
class EclipticCoordinates:
    """Ecliptic longitude and obliquity in radians, not reduced modulo 2π."""

    longitude: float
    obliquity: float


@dataclass(frozen=True)
class EquatorialCoordinates:
    right_ascension: float  # Radians in [0, 2π)
    declination: float  # Radians


@dataclass(frozen=True)
class SunPathPoint:
    """A single sample of the sun track."""

    utc_dt: datetime  # UTC datetime (with tzinfo=utc)
    azimuth: float
    zenith_angle: float
    elevation: float


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    address: str  # Free-form address string ("Marienplatz, München")
    when: str  # "YYYY-MM-DD HH:MM" local time string


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + timezone conversion. Input to sun computation."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    utc_dt: datetime  # UTC datetime (with tzinfo=utc)
    address_display: str  # Normalized address returned by geocoder (for display)
    timezone_name: str  # IANA zone the local time was interpreted in

    @property
    def location(self) -> Location:
        return Location(latitude=self.lat, longitude=self.lng)


@dataclass(frozen=True)
class SunData:
    """The sole input to renderers. Fully computed state."""

    context: ObserverContext
    position: SunCoordinates  # Sun at context.utc_dt
    path: tuple[SunPathPoint, ...]  # Local calendar day, every step_minutes

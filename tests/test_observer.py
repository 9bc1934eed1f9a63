import dataclasses
from datetime import datetime
from types import SimpleNamespace

import httpx
import pytest
from pytz import utc

from sunpos import observer
from sunpos.models import ObserverContext, QueryInput
from sunpos.observer import GeocodingError, compute_sun_data, geocode_address, localize, run

MUNICH_RESULT = [
    {
        "lat": "48.1374",
        "lon": "11.5755",
        "display_name": "Marienplatz, Altstadt-Lehel, München, Bayern, Deutschland",
    }
]


class _FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            request = httpx.Request("GET", "https://nominatim.openstreetmap.org/search")
            raise httpx.HTTPStatusError(
                "boom", request=request, response=httpx.Response(self.status_code)
            )

    def json(self):
        return self._payload


@pytest.fixture
def fake_nominatim(monkeypatch):
    calls: list[dict] = []

    def _install(payload, status_code=200):
        def fake_get(url, params=None, headers=None, timeout=None):
            calls.append({"url": url, "params": params, "headers": headers})
            return _FakeResponse(payload, status_code)

        monkeypatch.setattr(observer.httpx, "get", fake_get)
        return calls

    return _install


class TestLocalize:
    def test_summer_time_offset(self):
        utc_dt, tz_name = localize(48.1374, 11.5755, "2015-09-18 14:00")
        assert tz_name == "Europe/Berlin"
        assert utc_dt == datetime(2015, 9, 18, 12, 0, tzinfo=utc)

    def test_winter_time_offset(self):
        utc_dt, _ = localize(48.1374, 11.5755, "2015-01-18 14:00")
        assert utc_dt == datetime(2015, 1, 18, 13, 0, tzinfo=utc)

    @pytest.mark.parametrize("when", ["2015-03-29 02:30", "2015-10-25 02:30"])
    def test_dst_gap_and_overlap_rejected(self, when):
        with pytest.raises(GeocodingError):
            localize(48.1374, 11.5755, when)

    def test_bad_format(self):
        with pytest.raises(ValueError):
            localize(48.1374, 11.5755, "18.09.2015 14:00")

    def test_no_timezone(self, monkeypatch):
        monkeypatch.setattr(observer, "_tf", SimpleNamespace(timezone_at=lambda lat, lng: None))
        with pytest.raises(GeocodingError, match="Timezone not found"):
            localize(0.0, 0.0, "2015-09-18 14:00")


class TestGeocodeAddress:
    def test_resolves_context(self, fake_nominatim):
        calls = fake_nominatim(MUNICH_RESULT)
        ctx = geocode_address("Marienplatz, München", "2015-09-18 14:00")
        assert ctx.lat == pytest.approx(48.1374)
        assert ctx.lng == pytest.approx(11.5755)
        assert ctx.utc_dt == datetime(2015, 9, 18, 12, 0, tzinfo=utc)
        assert ctx.timezone_name == "Europe/Berlin"
        assert ctx.address_display.startswith("Marienplatz")
        assert calls[0]["params"]["q"] == "Marienplatz, München"

    def test_user_agent_from_environment(self, fake_nominatim, monkeypatch):
        monkeypatch.setenv("SUNPOS_USER_AGENT", "test-agent/0.1")
        calls = fake_nominatim(MUNICH_RESULT)
        geocode_address("Marienplatz", "2015-09-18 14:00")
        assert calls[0]["headers"]["User-Agent"] == "test-agent/0.1"

    def test_address_not_found(self, fake_nominatim):
        fake_nominatim([])
        with pytest.raises(GeocodingError, match="Address not found"):
            geocode_address("nowhere at all", "2015-09-18 14:00")

    def test_http_error_propagates(self, fake_nominatim):
        fake_nominatim([], status_code=503)
        with pytest.raises(httpx.HTTPStatusError):
            geocode_address("Marienplatz", "2015-09-18 14:00")


class TestComputeSunData:
    @pytest.fixture
    def context(self):
        return ObserverContext(
            lat=48.1374,
            lng=11.5755,
            utc_dt=datetime(2015, 9, 18, 12, 0, tzinfo=utc),
            address_display="Marienplatz",
            timezone_name="Europe/Berlin",
        )

    def test_position(self, context):
        sun_data = compute_sun_data(context)
        assert sun_data.context is context
        assert sun_data.position.azimuth == pytest.approx(197.7500531, abs=1e-6)
        assert sun_data.position.zenith_angle == pytest.approx(47.6005544, abs=1e-6)

    def test_path_covers_local_day(self, context):
        sun_data = compute_sun_data(context, step_minutes=10)
        assert len(sun_data.path) == 145
        # Local midnight CEST
        assert sun_data.path[0].utc_dt == datetime(2015, 9, 17, 22, 0, tzinfo=utc)
        assert sun_data.path[-1].utc_dt == datetime(2015, 9, 18, 22, 0, tzinfo=utc)
        highest = max(sun_data.path, key=lambda p: p.elevation)
        assert 150 < highest.azimuth < 210
        assert sun_data.path[0].elevation < 0

    def test_run(self, fake_nominatim):
        fake_nominatim(MUNICH_RESULT)
        query = QueryInput(address="Marienplatz", when="2015-09-18 14:00")
        sun_data = run(query, step_minutes=60)
        assert len(sun_data.path) == 25
        assert sun_data.position.azimuth == pytest.approx(197.7500531, abs=1e-6)

    @pytest.mark.parametrize(
        "utc_dt, n_points, first, last",
        [
            # Spring forward: 23-hour local day
            (
                datetime(2015, 3, 29, 12, 0, tzinfo=utc),
                24,
                datetime(2015, 3, 28, 23, 0, tzinfo=utc),
                datetime(2015, 3, 29, 22, 0, tzinfo=utc),
            ),
            # Fall back: 25-hour local day
            (
                datetime(2015, 10, 25, 12, 0, tzinfo=utc),
                26,
                datetime(2015, 10, 24, 22, 0, tzinfo=utc),
                datetime(2015, 10, 25, 23, 0, tzinfo=utc),
            ),
        ],
    )
    def test_path_follows_dst_day_length(self, context, utc_dt, n_points, first, last):
        dst_context = dataclasses.replace(context, utc_dt=utc_dt)
        sun_data = compute_sun_data(dst_context, step_minutes=60)
        assert len(sun_data.path) == n_points
        assert sun_data.path[0].utc_dt == first
        assert sun_data.path[-1].utc_dt == last

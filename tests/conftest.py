from datetime import datetime

import matplotlib
import pytest
from pytz import utc

matplotlib.use("Agg")

from sunpos.models import ObserverContext  # noqa: E402
from sunpos.observer import compute_sun_data  # noqa: E402


@pytest.fixture
def munich_context() -> ObserverContext:
    return ObserverContext(
        lat=48.1374,
        lng=11.5755,
        utc_dt=datetime(2015, 9, 18, 12, 0, tzinfo=utc),
        address_display="Marienplatz München",
        timezone_name="Europe/Berlin",
    )


@pytest.fixture
def munich_sun_data(munich_context):
    return compute_sun_data(munich_context, step_minutes=30)

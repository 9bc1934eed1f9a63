"""CLI entry point for sun position and sun-path chart generation.

Edit the where/when variables at the top, then run:
    uv run python src/sunpos/sunchart.py
"""

from dotenv import load_dotenv

load_dotenv()

from sunpos.models import QueryInput  # noqa: E402
from sunpos.observer import run  # noqa: E402
from sunpos.renderers.static import save_static_chart  # noqa: E402

where = "Marienplatz, München"
when = "2015-09-18 14:00"

sun_data = run(QueryInput(address=where, when=when))
pos = sun_data.position
print(f"[{sun_data.context.address_display}] {sun_data.context.utc_dt} UTC")
print(
    f"azimuth={pos.azimuth:.4f} zenith={pos.zenith_angle:.4f} "
    f"elevation={pos.elevation:.4f}"
)
path = save_static_chart(sun_data)
print(f"Saved: {path}")

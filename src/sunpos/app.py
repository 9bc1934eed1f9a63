"""SunPos — Streamlit app for the sun position at a given place and time."""

import datetime
import html

from dotenv import load_dotenv

load_dotenv()

import streamlit as st  # noqa: E402
from streamlit_js_eval import streamlit_js_eval  # noqa: E402

from sunpos.i18n import t  # noqa: E402
from sunpos.models import QueryInput  # noqa: E402
from sunpos.observer import GeocodingError, run  # noqa: E402
from sunpos.renderers.plotly_2d import render_plotly_chart  # noqa: E402

# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☀",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---
if "sun_data" not in st.session_state:
    st.session_state.sun_data = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None

st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #050a1a !important;
        color: #e8d5a3 !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    label, [data-testid="stWidgetLabel"] p, [data-testid="stMetricLabel"] p {
        color: #c9a96e !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

col1, col2, col3, col4 = st.columns([3, 2, 2, 1.5])
with col1:
    address = st.text_input(t("label_place", _lang), value="Marienplatz, München")
with col2:
    date_val = st.date_input(
        t("label_date", _lang),
        value=datetime.date.today(),
        min_value=datetime.date(1900, 1, 1),
    )
with col3:
    time_val = st.time_input(
        t("label_time", _lang), value=datetime.time(12, 0), step=600
    )
with col4:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    submitted = st.button(t("btn_locate_sun", _lang), key="submit_btn")

# --- Form submission handler ---
if submitted and address:
    when_str = f"{date_val.strftime('%Y-%m-%d')} {time_val.strftime('%H:%M')}"
    st.session_state.error_msg = None
    with st.spinner(t("loading_compute", _lang)):
        try:
            st.session_state.sun_data = run(QueryInput(address=address, when=when_str))
        except GeocodingError as e:
            st.session_state.sun_data = None
            st.session_state.error_msg = t("error_address", _lang).format(
                error=html.escape(str(e))
            )

if st.session_state.error_msg:
    st.error(st.session_state.error_msg)

sun_data = st.session_state.sun_data
if sun_data is None:
    if not st.session_state.error_msg:
        st.markdown(t("placeholder", _lang))
else:
    ctx = sun_data.context
    pos = sun_data.position
    st.caption(f"{ctx.address_display} · {ctx.utc_dt:%Y-%m-%d %H:%M} UTC ({ctx.timezone_name})")

    m1, m2, m3 = st.columns(3)
    m1.metric(t("metric_azimuth", _lang), f"{pos.azimuth:.2f}°")
    m2.metric(t("metric_zenith", _lang), f"{pos.zenith_angle:.2f}°")
    m3.metric(t("metric_elevation", _lang), f"{pos.elevation:.2f}°")
    if pos.elevation < 0:
        st.info(t("below_horizon", _lang))

    st.plotly_chart(
        render_plotly_chart(sun_data),
        use_container_width=True,
        config={"displayModeBar": False},
    )

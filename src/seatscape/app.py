"""SeatScape — Streamlit app for picking the sunny or shady side of a flight."""

import datetime

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from streamlit_js_eval import streamlit_js_eval  # noqa: E402

from seatscape.airports import (  # noqa: E402
    AirportLookupError,
    AirportNotFoundError,
    AirportResolver,
)
from seatscape.cities import (  # noqa: E402
    DEFAULT_THRESHOLD_KM,
    detect_city_pass_bys,
    load_city_catalog,
    sort_pass_bys,
)
from seatscape.compute import compute_recommendation  # noqa: E402
from seatscape.flights import (  # noqa: E402
    ScheduleError,
    fetch_flight_schedule,
    schedule_local_times,
)
from seatscape.i18n import t  # noqa: E402
from seatscape.renderers.plotly_2d import render_route_map, render_sun_profile  # noqa: E402
from seatscape.renderers.svg_2d import render_plane_svg  # noqa: E402
from seatscape.sun import EphemerisSunModel, sun_position  # noqa: E402
from seatscape.summary import headline, rationale, share_text  # noqa: E402
from seatscape.timeutils import format_local  # noqa: E402

# navigator.language is read once and cached in session_state.
# On the first run the value is None; the app reruns when it arrives.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="✦",
    layout="centered",
)

# --- Session state initialization ---

if "result" not in st.session_state:
    st.session_state.result = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None


@st.cache_resource
def _resolver() -> AirportResolver:
    return AirportResolver()


@st.cache_resource
def _catalog():
    return load_city_catalog()


@st.cache_resource
def _ephemeris() -> EphemerisSunModel:
    return EphemerisSunModel()


# --- Dark theme CSS (static) ---
st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    .result-card {
        border-top: 1px solid rgba(201,169,110,0.18);
        padding: 1.2rem 0.4rem;
        color: #e8d5a3;
    }
    .result-card h2 { color: #ffffff; margin-bottom: 0.2rem; }
    .chip {
        display: inline-block;
        padding: 0.15rem 0.6rem;
        margin: 0.15rem 0.2rem 0.15rem 0;
        border-radius: 999px;
        background: rgba(126, 200, 227, 0.15);
        font-size: 0.8rem;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

st.title(t("page_title", _lang))
st.caption(t("tagline", _lang))

# --- Input form ---
with st.form("inputs"):
    col_from, col_to = st.columns(2)
    origin_code = col_from.text_input(t("label_origin", _lang), value="DEL", max_chars=3)
    dest_code = col_to.text_input(t("label_dest", _lang), value="DXB", max_chars=3)

    col_date, col_time = st.columns(2)
    depart_date = col_date.date_input(
        t("label_date", _lang), value=datetime.date(2025, 8, 10)
    )
    depart_time = col_time.time_input(
        t("label_time", _lang), value=datetime.time(18, 30), step=300
    )

    flight_number = st.text_input(t("label_flight", _lang), value="")
    preference = st.radio(
        t("label_preference", _lang),
        options=["see", "avoid"],
        format_func=lambda p: t(f"pref_{p}", _lang),
        horizontal=True,
    )

    col_step, col_threshold = st.columns(2)
    sample_minutes = col_step.select_slider(
        t("label_step", _lang), options=[1, 2, 5, 10, 15, 20, 30], value=5
    )
    threshold_km = col_threshold.slider(
        t("label_threshold", _lang), 10, 200, int(DEFAULT_THRESHOLD_KM), step=5
    )
    precise = st.toggle(t("label_precise", _lang), value=False)
    submitted = st.form_submit_button(t("btn_compute", _lang), use_container_width=True)

if submitted:
    st.session_state.error_msg = None
    with st.spinner(t("loading_compute", _lang)):
        try:
            resolver = _resolver()
            origin = resolver.resolve(origin_code.strip())
            dest = resolver.resolve(dest_code.strip())
            depart_local = datetime.datetime.combine(depart_date, depart_time).strftime(
                "%Y-%m-%dT%H:%M"
            )
            arrive_local = None
            if flight_number.strip():
                schedule = fetch_flight_schedule(flight_number.strip())
                depart_local, arrive_local = schedule_local_times(
                    schedule, origin.tz, dest.tz
                )
            rec = compute_recommendation(
                origin,
                dest,
                depart_local,
                preference,
                arrive_local=arrive_local,
                sample_minutes=sample_minutes,
                places=_catalog(),
                sun_model=_ephemeris() if precise else sun_position,
            )
            pass_bys = detect_city_pass_bys(rec.samples, _catalog(), threshold_km)
            st.session_state.result = (origin, dest, preference, rec, pass_bys)
        except AirportNotFoundError as e:
            st.session_state.error_msg = t("error_airport", _lang).format(error=e)
            st.session_state.result = None
        except AirportLookupError as e:
            st.session_state.error_msg = t("error_lookup", _lang).format(error=e)
            st.session_state.result = None
        except ScheduleError as e:
            st.session_state.error_msg = t("error_schedule", _lang).format(error=e)
            st.session_state.result = None
        except ValueError as e:
            st.session_state.error_msg = t("error_input", _lang).format(error=e)
            st.session_state.result = None

if st.session_state.error_msg:
    st.error(st.session_state.error_msg)

if st.session_state.result is None:
    st.info(t("placeholder", _lang))
    st.stop()

origin, dest, preference, rec, pass_bys = st.session_state.result

# --- Result card ---
chips = [
    t(f"pref_{preference}", _lang),
    rationale(rec, preference),
]
if rec.sunrise is not None:
    chips.append(
        f"☀ {format_local(rec.sunrise.utc, origin.tz, '%H:%M')} · {rec.sunrise.side}"
        + (f" · {rec.sunrise.place}" if rec.sunrise.place else "")
    )
if rec.sunset is not None:
    chips.append(
        f"☾ {format_local(rec.sunset.utc, dest.tz, '%H:%M')} · {rec.sunset.side}"
        + (f" · {rec.sunset.place}" if rec.sunset.place else "")
    )
peak = f"{rec.peak_altitude_deg}°" if rec.peak_altitude_deg is not None else "—"
chips_html = "".join(f'<span class="chip">{c}</span>' for c in chips)
st.markdown(
    f"""
    <div class="result-card">
        <h2>{headline(rec)}</h2>
        <p>{origin.iata} → {dest.iata} · {rec.total_minutes} min ·
        peak {peak} · confidence {round(rec.confidence * 100)}%</p>
        {chips_html}
    </div>
    """,
    unsafe_allow_html=True,
)
st.code(share_text(rec, origin, dest, preference), language=None)

st.plotly_chart(render_sun_profile(rec, tz=origin.tz), use_container_width=True)

plane_index = 0
if len(rec.samples) > 1:
    plane_index = st.slider(
        t("label_scrubber", _lang), 0, len(rec.samples) - 1, 0
    )
st.markdown(render_plane_svg(rec.samples[plane_index]), unsafe_allow_html=True)
st.plotly_chart(
    render_route_map(rec, pass_bys, plane_index=plane_index), use_container_width=True
)

# --- Pass-by timeline ---
if pass_bys:
    st.subheader(t("section_passbys", _lang))
    mode = st.radio(
        "sort",
        options=["time", "distance"],
        format_func=lambda m: t(f"sort_{m}", _lang),
        horizontal=True,
        label_visibility="collapsed",
    )
    for p in sort_pass_bys(pass_bys, mode):
        when = format_local(p.time_utc, origin.tz, "%H:%M") if p.time_utc else "—"
        side = t("side_left", _lang) if p.side == "A" else t("side_right", _lang)
        st.markdown(f"`{when}` **{p.name}** · {side} · ~{p.distance_km} km")

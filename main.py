"""
Huvudapplikation för Streamlit löprundegenerator
"""

import asyncio
import logging
from datetime import date, time

import streamlit as st
from streamlit_folium import st_folium

# Importera moduler
from config import (
    DEFAULT_CENTER,
    DEFAULT_PACE,
    DEFAULT_PACE_VARIABILITY,
    DEFAULT_RUN_NAME,
    DEFAULT_RUN_TIME,
    DEFAULT_ZOOM,
    PACE_MAX,
    PACE_MIN,
    VARIABILITY_MAX,
    VARIABILITY_MIN,
)
from elevation import ElevationAnnotator, MapboxTerrainProvider, OpenElevationProvider
from export import build_track, create_gpx, gpx_filename
from geocoding import geocode_place
from models import AlignmentOutcome, DrawMode, PaceConfig, RunMetadata
from pace import profile_rows
from routing import RouteEditor
from routing_providers import create_router
from utils import format_duration, format_pace

DRAW_MODE_LABELS = {
    DrawMode.MANUAL: "Manuell",
    DrawMode.CIRCLE: "Cirkel",
    DrawMode.HEART: "Hjärta",
}


def get_secret(key):
    """Läs en nyckel ur st.secrets, None om den saknas"""
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        # Ingen secrets.toml alls
        return None


def create_editor():
    """Skapa ruttredigeraren med providers från st.secrets"""
    mapbox_token = get_secret("MAPBOX_TOKEN")
    router = create_router(mapbox_token, get_secret("ORS_API_KEY"))
    if router is None:
        return None

    terrain = MapboxTerrainProvider(mapbox_token) if mapbox_token else OpenElevationProvider()
    return RouteEditor(router, ElevationAnnotator(terrain))


def init_session_state():
    """Initiera session state"""
    if "editor" not in st.session_state:
        st.session_state.editor = create_editor()
    if "map_center" not in st.session_state:
        st.session_state.map_center = list(DEFAULT_CENTER)
    if "map_zoom" not in st.session_state:
        st.session_state.map_zoom = DEFAULT_ZOOM
    if "last_click" not in st.session_state:
        st.session_state.last_click = None
    if "last_search" not in st.session_state:
        st.session_state.last_search = ""
    if "fit_route" not in st.session_state:
        st.session_state.fit_route = True
    if "alignment_message" not in st.session_state:
        st.session_state.alignment_message = None


def show_alignment_outcome(outcome):
    """Spara meddelande om vägjusteringen till nästa körning"""
    messages = {
        AlignmentOutcome.TOO_MANY_POINTS: (
            "warning",
            f"För många punkter. Du kan bara justera upp till "
            f"{st.session_state.editor.max_waypoints} punkter åt gången."
        ),
        AlignmentOutcome.FAILED: ("error", "Kunde inte justera rutten mot vägnätet."),
    }
    st.session_state.alignment_message = messages.get(outcome)


def sidebar(editor):
    """Ritverktyg, platssökning, tempo och export"""
    with st.sidebar:
        st.header("Ritverktyg")
        draw_mode = st.radio(
            "Läge",
            list(DrawMode),
            format_func=lambda mode: DRAW_MODE_LABELS[mode],
            horizontal=True,
            key="draw_mode"
        )
        show_markers = st.toggle("Visa markörer", value=editor.show_markers)
        if show_markers != editor.show_markers:
            editor.set_show_markers(show_markers)

        st.divider()

        # Platssökning
        query = st.text_input("Sök plats", placeholder="T.ex. Prospect Park")
        if query and query != st.session_state.last_search:
            with st.spinner("Söker plats..."):
                coords = geocode_place(query, get_secret("MAPBOX_TOKEN"))
            st.session_state.last_search = query
            if coords:
                lon, lat = coords
                st.session_state.map_center = [lat, lon]
                st.session_state.fit_route = False
            else:
                st.error("Kunde inte hitta platsen")

        st.divider()

        st.header("Tempo")
        pace = st.slider("Snittempo (min/km)", PACE_MIN, PACE_MAX, DEFAULT_PACE, step=0.1)
        variability = st.slider(
            "Tempovariation (%)", VARIABILITY_MIN, VARIABILITY_MAX,
            DEFAULT_PACE_VARIABILITY, step=1.0
        )

        st.divider()

        st.header("Löprunda")
        run_name = st.text_input("Namn", value=DEFAULT_RUN_NAME)
        run_date = st.date_input("Datum", value=date.today())
        hours, minutes = (int(part) for part in DEFAULT_RUN_TIME.split(":"))
        run_time = st.time_input("Starttid", value=time(hours, minutes))
        description = st.text_area("Beskrivning", placeholder="Skön morgonrunda genom parken...")

        pace_config = PaceConfig(pace=pace, variability=variability)
        snapshot = editor.snapshot()
        if len(snapshot.path) >= 2:
            metadata = RunMetadata(
                name=run_name,
                date=run_date,
                time=run_time.strftime("%H:%M"),
                description=description
            )
            track = build_track(snapshot.path, snapshot.elevations, pace_config, metadata)
            st.download_button(
                label="Ladda ner GPX",
                data=create_gpx(track),
                file_name=gpx_filename(run_name),
                mime="application/gpx+xml",
                use_container_width=True
            )
        else:
            st.info("Rita en rutt med minst två punkter för att exportera")

    return DrawMode(draw_mode), pace_config


def summary(editor, pace_config):
    """Sammanfattning och diagram"""
    st.subheader("Sammanfattning")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Distans", f"{editor.distance / 1000:.2f} km")
    col2.metric("Tid", format_duration(editor.duration(pace_config.pace)))
    col3.metric("Höjdökning", f"{editor.elevation_gain:.0f} m")
    col4.metric("Snittempo", format_pace(pace_config.pace))

    snapshot = editor.snapshot()
    rows = profile_rows(snapshot.path, snapshot.elevations, pace_config.pace, pace_config.variability)
    if not rows:
        st.info("Välj punkter på kartan för att se tempo- och höjdprofil")
        return

    st.markdown("**Tempoprofil**")
    st.line_chart(rows, x="distance_km", y="pace")
    st.markdown("**Höjdprofil**")
    st.line_chart(rows, x="distance_km", y="elevation")


def main():
    """Huvudfunktion för Streamlit-appen"""
    st.set_page_config(
        page_title="Löprundegenerator",
        page_icon="🏃",
        layout="wide"
    )
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    init_session_state()

    st.title("Löprundegenerator")
    st.markdown("Rita en runda på kartan och ladda ner den som GPX med tider och höjd")

    editor = st.session_state.editor
    if editor is None:
        st.error("Ingen API-nyckel konfigurerad! Lägg till MAPBOX_TOKEN eller ORS_API_KEY i secrets.")
        st.stop()

    draw_mode, pace_config = sidebar(editor)

    if st.session_state.alignment_message:
        level, text = st.session_state.alignment_message
        getattr(st, level)(text)
        st.session_state.alignment_message = None

    # Kartan
    m = editor.overlay.render(
        st.session_state.map_center,
        st.session_state.map_zoom,
        fit_route=st.session_state.fit_route
    )
    map_state = st_folium(
        m,
        key="map",
        width=None,
        height=600,
        returned_objects=["last_clicked", "zoom"]
    )

    click = (map_state or {}).get("last_clicked")
    if click and click != st.session_state.last_click:
        st.session_state.last_click = click
        zoom = map_state.get("zoom") or st.session_state.map_zoom
        st.session_state.map_zoom = zoom
        st.session_state.map_center = [click["lat"], click["lng"]]
        st.session_state.fit_route = True
        with st.spinner("Justerar rutt..." if draw_mode is not DrawMode.MANUAL else "Hämtar höjddata..."):
            outcome = asyncio.run(editor.handle_click((click["lng"], click["lat"]), zoom, draw_mode))
        show_alignment_outcome(outcome)
        st.rerun()

    col_align, col_clear = st.columns(2)
    with col_align:
        if len(editor.path) >= 2:
            label = "Justerar..." if editor.is_aligning else "✨ Justera rutten mot vägar"
            if st.button(label, type="primary", disabled=editor.is_aligning, use_container_width=True):
                with st.spinner("Justerar rutt..."):
                    outcome = asyncio.run(editor.align_to_road())
                st.session_state.fit_route = True
                show_alignment_outcome(outcome)
                st.rerun()
    with col_clear:
        if st.button("Rensa", use_container_width=True):
            editor.clear()
            st.rerun()

    summary(editor, pace_config)

    # Footer
    st.divider()
    st.markdown(
        f"""
        <div style='text-align: center; color: gray; font-size: 0.8em;'>
        Skapad för löpare |
        Använder {editor.router.name} & OpenStreetMap
        </div>
        """,
        unsafe_allow_html=True
    )


if __name__ == "__main__":
    main()

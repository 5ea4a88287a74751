# streamlit_app.py
import streamlit as st
import html
import logging

import config
from analysis_session import AnalysisSession, fetch_backend_status, request_analysis
from display import as_percent, escape_markdown, ordered_twins, polarity_label, provider_label, resolution_label

# Configure basic logging for the Streamlit app (server-side)
logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

st.set_page_config(layout="wide", page_title="PlotTwin", page_icon="🎬")

# --- Custom CSS ---
st.markdown("""
<style>
    .twin-rank {
        font-size: 2.5rem;
        font-weight: 900;
        text-align: center;
        border-radius: 16px;
        background: linear-gradient(135deg, #7c3aed, #2563eb);
        color: white;
        padding: 0.5rem 0;
    }
    .match-badge {
        display: inline-block;
        padding: 2px 12px;
        border-radius: 999px;
        background: rgba(168, 85, 247, 0.2);
        color: #d8b4fe;
        font-weight: 700;
        font-size: 0.85rem;
    }
    .motif-chip {
        display: inline-block;
        margin: 2px 4px 2px 0;
        padding: 4px 10px;
        border-radius: 8px;
        background: rgba(30, 41, 59, 0.8);
        color: #cbd5e1;
        font-size: 0.75rem;
    }
</style>
""", unsafe_allow_html=True)


# --- Initialize Session State ---
if 'analysis_session' not in st.session_state:
    logger.info("Initializing Streamlit Session State: analysis_session")
    st.session_state.analysis_session = AnalysisSession()

# Re-checked on every run until the backend answers
if st.session_state.get('backend_status') is None:
    st.session_state.backend_status = fetch_backend_status()

session = st.session_state.analysis_session


# --- Rendering Helpers ---

def render_base_film(base_film):
    """Semantic profile card for the queried film."""
    with st.container(border=True):
        year = f" ({base_film.year})" if base_film.year else ""
        st.header(f"{escape_markdown(base_film.title)}{year}")
        profile = base_film.semantic_profile
        if profile is None:
            st.caption("No semantic profile returned for this film.")
            return

        col1, col2 = st.columns(2)
        col1.metric("❤️ Emotional Polarity", polarity_label(profile.emotional_polarity))
        col2.metric("🎯 Conflict Complexity", as_percent(profile.conflict_complexity))
        col3, col4 = st.columns(2)
        col3.metric("⚡ Narrative Pace", as_percent(profile.narrative_pace))
        col4.metric("🕰️ Resolution Type", resolution_label(profile.resolution_type))


def render_twin(twin):
    with st.container(border=True):
        rank_col, body_col = st.columns([1, 8])
        rank_col.markdown(f"<div class='twin-rank'>{twin.rank}</div>", unsafe_allow_html=True)
        with body_col:
            st.subheader(escape_markdown(twin.title))
            st.markdown(f"<span class='match-badge'>{as_percent(twin.similarity_score)} Match</span>", unsafe_allow_html=True)
            if twin.similarity_reason:
                st.write(twin.similarity_reason)
            if twin.shared_motifs:
                chips = "".join(f"<span class='motif-chip'>{html.escape(motif)}</span>" for motif in twin.shared_motifs)
                st.markdown(chips, unsafe_allow_html=True)
            if twin.wikipedia_url:
                st.link_button("View on Wikipedia →", twin.wikipedia_url)


def render_result(result):
    if result.base_film and result.base_film.plot_available:
        render_base_film(result.base_film)

    if result.error:
        with st.container(border=True):
            st.markdown("#### :red[Analysis Failed]")
            st.write(result.error)

    twins = ordered_twins(result)
    if twins:
        st.header("Narrative Twins")
        for twin in twins:
            render_twin(twin)


# --- UI Layout ---

status = st.session_state.backend_status
st.caption(f"✨ Powered by {provider_label(status.get('provider') if status else None)}")
st.title("🎬 PlotTwin")
st.markdown("Discover films with **similar narrative DNA**")

if status is None:
    st.warning(f"PlotTwin backend is not reachable at {config.API_BASE_URL}.")
elif not status.get("api_key_configured"):
    st.warning("The backend has no API key configured for its LLM provider. Requests will fail.")

# A form submits on Enter as well as on the button
with st.form("film_search_form"):
    input_col, button_col = st.columns([5, 1])
    film_input = input_col.text_input(
        "Film title",
        value=session.film_input,
        placeholder="Enter any film title...",
        label_visibility="collapsed",
        key="film_input_ui",
    )
    submitted = button_col.form_submit_button("🔍 Discover", disabled=session.loading, use_container_width=True)

# Mark the request as loading and rerun so the form is redrawn with the button disabled
if submitted and session.begin(film_input):
    st.rerun()

if session.loading:
    with st.spinner("Analyzing..."):
        session.run(request_analysis)

if session.error:
    st.error(session.error)

if session.result:
    render_result(session.result)

st.divider()
st.caption("🟢 Free semantic analysis · Pre-2025 films")

# --- How to run ---
# uvicorn fastapi_app:app --reload
# streamlit run app.py

"""
Bacterial growth simulator - Streamlit app.

Form on the left, milestones and growth chart on the right. All state lives
in the session's InteractionController; this script only lays it out.

Run with:
    streamlit run ui/app.py
"""

from pathlib import Path
import sys
import time
import streamlit as st

# Ensure project root is on sys.path to enable src imports
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.settings import load_settings
from src.utils_logging import configure_logging
from ui.state import get_session
from ui.components.input_form import render_input_form
from ui.components.placeholder import render_placeholder
from ui.components.results_display import render_results_display


st.set_page_config(page_title="Bakteerikasvun Simulaattori", page_icon="🦠", layout="wide")


@st.cache_resource
def _init_logging(log_dir: str, debug: bool) -> bool:
    # Once per server process; Streamlit reruns this script on every interaction
    configure_logging(Path(log_dir), debug=debug)
    return True


def main() -> None:
    settings = load_settings()
    _init_logging(str(settings.log_dir), settings.debug)

    session = get_session(st.session_state, settings)
    controller = session.controller

    st.title("🦠 Bakteerikasvun Simulaattori")
    st.caption(
        "Visualisoi bakteerien eksponentiaalista kasvua. Syötä jakaantumisnopeus ja katso, "
        "kuinka nopeasti populaatio kasvaa kahdesta bakteerista."
    )

    col_form, col_results = st.columns([1, 2])
    with col_form:
        render_input_form(controller, settings.default_doubling_time)

    with col_results:
        if controller.is_busy:
            wait = session.scheduler.time_until_next() or 0.0
            with st.spinner("Lasketaan..."):
                time.sleep(wait)
            session.scheduler.run_due()
        render_placeholder(controller)
        render_results_display(controller)

    st.divider()
    st.caption("Toteutettu Streamlitillä ja Plotlylla.")


if __name__ == "__main__":
    main()

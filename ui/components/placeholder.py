from __future__ import annotations

import streamlit as st

from .base_component import BaseComponent
from .results_display import icon_glyph
from src.growth_calculator import IconKind


class WaitingPlaceholder(BaseComponent):
    """Shown until the first successful calculation."""

    def render(self) -> None:
        if self.controller.result is not None:
            return
        with st.container(border=True):
            if self.controller.is_busy:
                st.write("Suoritetaan ensimmäistä laskentaa...")
                return
            st.markdown(f"## {icon_glyph(IconKind.BACTERIA)}")
            st.subheader("Odotetaan laskentaa")
            st.caption('Syötä jakaantumisnopeus ja paina "Laske kasvu" nähdäksesi tulokset.')


def render_placeholder(controller) -> None:
    WaitingPlaceholder(controller).render()

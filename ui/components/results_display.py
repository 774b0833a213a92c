from __future__ import annotations

import streamlit as st

from .base_component import BaseComponent
from src.growth_calculator import IconKind
from viz.plots import build_growth_figure, results_to_dataframe

ICON_GLYPHS = {
    IconKind.BACTERIA: "🦠",
    IconKind.CLOCK: "⏱️",
}


def icon_glyph(kind: IconKind) -> str:
    return ICON_GLYPHS.get(kind, "")


class ResultsDisplay(BaseComponent):
    """Milestone cards, growth bar chart and the checkpoint table."""

    def render(self) -> None:
        result = self.controller.result
        if result is None:
            return

        st.header("Virstanpylväät")
        cols = st.columns(len(result.milestones))
        for col, milestone in zip(cols, result.milestones):
            with col:
                with st.container(border=True):
                    st.metric(label=f"{icon_glyph(milestone.icon)} {milestone.label}", value=milestone.value)

        st.header("Kasvupylväät")
        st.plotly_chart(build_growth_figure(result), use_container_width=True)

        with st.expander("Taulukko", expanded=False):
            df = results_to_dataframe(result)
            st.dataframe(df, hide_index=True, use_container_width=True)


def render_results_display(controller) -> None:
    ResultsDisplay(controller).render()

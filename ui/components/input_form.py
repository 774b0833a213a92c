from __future__ import annotations

"""
Doubling-time input form.

One text field and one submit button. Validation happens in the controller;
this component only shows the controller's error message.
"""

import streamlit as st

from .base_component import BaseComponent


class InputForm(BaseComponent):
    """Form that submits the raw doubling-time text to the controller."""

    def __init__(self, controller, default_doubling_time: int = 20) -> None:
        super().__init__(controller)
        self.default_doubling_time = default_doubling_time

    def render(self) -> None:
        with st.form("growth_form", clear_on_submit=False):
            st.subheader("Syötä jakaantumisnopeus")
            raw = st.text_input(
                "Jakaantumisnopeus (minuutteina)",
                value=str(self.default_doubling_time),
                placeholder="esim. 20",
                key="doubling_time_input",
            )
            submitted = st.form_submit_button(
                "Laske kasvu",
                type="primary",
                disabled=self.controller.is_busy,
                use_container_width=True,
            )
        if submitted:
            self.controller.submit(raw)
        if self.controller.error_message:
            st.error(self.controller.error_message)


def render_input_form(controller, default_doubling_time: int = 20) -> None:
    InputForm(controller, default_doubling_time).render()

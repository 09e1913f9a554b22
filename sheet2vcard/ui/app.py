from __future__ import annotations

from pathlib import Path

import streamlit as st

from sheet2vcard.config.loader import ConfigError, resolve_config
from sheet2vcard.logging.init import set_level, setup_logging
from sheet2vcard.models.pipeline_result import DOWNLOAD_FILENAME, DOWNLOAD_MIME, StatusKind
from sheet2vcard.services.acquisition import first_file
from sheet2vcard.services.pipeline import processing_status
from sheet2vcard.ui.presenter import UiState, handle_upload, is_new_upload

"""Streamlit page: upload -> preview -> download contacts.vcf.

Run with ``streamlit run sheet2vcard/ui/app.py`` or ``sheet2vcard-ui``.
The upload widget handles drag & drop (highlight + no browser navigation).
"""

STATE_KEY = "ui_state"

logger = setup_logging()

try:
    cfg = resolve_config()
except ConfigError as e:
    logger.error(f"config: {e}")
    st.error(f"Configuration error: {e}")
    st.stop()

set_level(cfg.log_level)
st.set_page_config(page_title=cfg.page_title)
st.title(cfg.page_title)

state: UiState = st.session_state.get(STATE_KEY, UiState())

uploaded = st.file_uploader(
    "Drag and drop your Excel file here, or browse",
    accept_multiple_files=True,
)
if is_new_upload(state, uploaded):
    with st.spinner(processing_status(first_file(uploaded).name).text):
        state = handle_upload(state, uploaded, Path(cfg.error_log_directory))
    st.session_state[STATE_KEY] = state

show_status = {
    StatusKind.INFO: st.info,
    StatusKind.SUCCESS: st.success,
    StatusKind.ERROR: st.error,
}[state.status.kind]
show_status(state.status.text)

if state.counter_text is not None:
    st.markdown(f"**{state.counter_text}**")

if state.preview_html is not None:
    st.markdown(state.preview_html, unsafe_allow_html=True)

st.download_button(
    "Download VCF",
    data=state.download.data if state.download is not None else b"",
    file_name=DOWNLOAD_FILENAME,
    mime=DOWNLOAD_MIME,
    disabled=not state.download_enabled,
)

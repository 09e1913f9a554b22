from __future__ import annotations

import sys
from pathlib import Path

from streamlit.web import cli as stcli

"""Console script wrapper around ``streamlit run``."""

APP_PATH = Path(__file__).with_name("app.py")


def main() -> None:
    sys.argv = ["streamlit", "run", str(APP_PATH), *sys.argv[1:]]
    sys.exit(stcli.main())

from __future__ import annotations

"""Logging utilities.

Set up a consistent logging configuration to both console and a file
in the `logs/` directory. Both the Streamlit app and the CLI runner call
`configure_logging` once at startup.
"""

import logging
from pathlib import Path


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(log_dir: Path, debug: bool = False) -> None:
    """Configure root logging for the application.

    - Creates the log directory if missing
    - Streams logs to both stdout and `logs/run.log`
    - Uses DEBUG level if `debug=True`, otherwise INFO
    - Replaces handlers from a previous call (Streamlit reruns the script)
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "run.log"

    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file, mode="w", encoding="utf-8"),
        ],
        force=True,
    )

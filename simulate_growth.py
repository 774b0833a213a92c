#!/usr/bin/env python3
from __future__ import annotations

"""
Command-line runner for the bacterial growth simulator.

Responsibilities:
- Load settings (YAML/JSON) and configure logging to console and `logs/run.log`
- Submit the doubling time through the same InteractionController the UI uses
- Print the two milestones and the checkpoint table
- Optionally save a log-scale bar chart PNG under `output/plots/`

Exit codes: 0 on success, 2 when the doubling time is rejected.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from src.settings import load_settings
from src.ui_logic import ImmediateScheduler, InteractionController
from src.utils_logging import configure_logging


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for the runner.

    `--doubling-time` is taken as raw text and validated exactly like the
    form field, so `"20min"` is accepted as 20 and `"abc"` is rejected.
    """
    p = argparse.ArgumentParser(description="Bacterial growth simulator – exponential doubling at fixed checkpoints")
    p.add_argument(
        "--doubling-time",
        type=str,
        default=None,
        help="Doubling time in minutes (default: value from settings, 20)",
    )
    p.add_argument("--settings", type=str, default=None, help="Path to a settings YAML/JSON file")
    p.add_argument("--debug", action="store_true")
    p.add_argument(
        "--visualize",
        action="store_true",
        help="Save a bar chart of the results under output/plots/",
    )
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = load_settings(args.settings)
    configure_logging(settings.log_dir, debug=args.debug or settings.debug)
    log = logging.getLogger("runner")

    raw = args.doubling_time if args.doubling_time is not None else str(settings.default_doubling_time)

    controller = InteractionController(scheduler=ImmediateScheduler(), busy_clear_delay=0.0)
    controller.submit(raw)
    result = controller.result
    if controller.error_message or result is None:
        log.error("Rejected doubling time %r", raw)
        print(f"Error: {controller.error_message}", file=sys.stderr)
        return 2

    # Local import keeps pandas/matplotlib out of argument parsing
    from viz.plots import results_to_dataframe

    for milestone in result.milestones:
        print(f"{milestone.label}: {milestone.value}")
    print()
    df = results_to_dataframe(result)
    print(df.drop(columns=["Populaatio"]).to_string(index=False))

    if args.visualize:
        try:
            from viz.plots import save_growth_bar_chart
        except Exception as e:
            log.error("Visualization dependencies missing or import failed: %s", e)
            raise

        out_path = save_growth_bar_chart(result)
        log.info("Saved growth chart to %s", out_path)
        print(f"\nChart: {out_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

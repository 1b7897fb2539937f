# ColumnPlot
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Entry point for the standalone column chart window."""

from __future__ import annotations

import logging
import os
import sys

from columnplot.core.logging_config import setup_logging

log = logging.getLogger("columnplot.main")


def main(argv: list[str] | None = None) -> int:
    """Show a chart for the CSV in ``argv[1]`` (or sample rows) until closed.

    ``CP_LOG_DIR`` adds a rotating log file in that directory.
    """
    argv = list(sys.argv if argv is None else argv)
    csv_path = argv[1] if len(argv) > 1 else None

    setup_logging(console_level=logging.INFO, log_dir=os.environ.get("CP_LOG_DIR") or None)
    log.info("Starting ColumnPlot with data: %s", csv_path or "sample rows")

    from columnplot.app.launcher import ColumnPlotLauncher, load_rows

    rows = load_rows(csv_path) if csv_path else None
    try:
        launcher = ColumnPlotLauncher(rows, argv=argv)
        status = launcher.run()
    except Exception:
        log.critical("ColumnPlot crashed", exc_info=True)
        raise
    log.info("ColumnPlot exited with status %s", status)
    return status


if __name__ == "__main__":  # pragma: no cover - import guard
    sys.exit(main())

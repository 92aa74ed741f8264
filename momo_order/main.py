"""Entry point for the momo-order Textual app."""

from __future__ import annotations

import logging
from pathlib import Path

from textual.logging import TextualHandler

from momo_order.config import DEBUG_LOG_PATH
from momo_order.order_app import MomoOrderApp

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.DEBUG) -> None:
    """Send app logs to the Textual devtools console and the debug log file."""
    handlers: list[logging.Handler] = [TextualHandler()]
    file_error: OSError | None = None
    log_path = Path(DEBUG_LOG_PATH)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    except OSError as exc:
        file_error = exc

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, handlers=handlers)
    logging.getLogger("momo_order").setLevel(level)
    if file_error is not None:
        # Still reaches the devtools console.
        logger.warning("debug_log_unavailable path=%s error=%r", log_path, file_error)


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    MomoOrderApp().run()


if __name__ == "__main__":
    main()

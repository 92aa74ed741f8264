from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

import pytest
from textual.logging import TextualHandler

from momo_order import main


@pytest.fixture
def captured_handlers(monkeypatch: pytest.MonkeyPatch) -> Iterator[list[logging.Handler]]:
    handlers: list[logging.Handler] = []

    def fake_basic_config(**kwargs: Any) -> None:
        handlers.extend(kwargs["handlers"])

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    yield handlers
    for handler in handlers:
        handler.close()


def test_logs_to_devtools_and_debug_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, captured_handlers: list[logging.Handler]
) -> None:
    log_path = tmp_path / "logs" / "momo-order-debug.log"
    monkeypatch.setattr(main, "DEBUG_LOG_PATH", str(log_path))

    main.configure_logging(level=logging.INFO)

    assert isinstance(captured_handlers[0], TextualHandler)
    assert isinstance(captured_handlers[1], logging.FileHandler)
    assert log_path.parent.is_dir()


def test_unwritable_debug_file_is_reported(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
    captured_handlers: list[logging.Handler],
) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    monkeypatch.setattr(main, "DEBUG_LOG_PATH", str(blocker / "debug.log"))

    with caplog.at_level(logging.WARNING, logger="momo_order.main"):
        main.configure_logging(level=logging.INFO)

    assert [type(handler) for handler in captured_handlers] == [TextualHandler]
    assert any("debug_log_unavailable" in record.getMessage() for record in caplog.records)

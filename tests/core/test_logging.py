"""Tests for structlog configuration.

Kept minimal; structlog's own suite covers the processors. The rendering
tests check that stdlib records from the package reach the structlog
renderer on stderr.
"""

import json
import logging

import structlog

from pmdispatch.core.logging import CliLogHandler, configure_structlog
from pmdispatch.detector import detect


def _json_lines(err: str) -> list[dict]:
    return [json.loads(line) for line in err.splitlines() if line.startswith("{")]


class TestConfigureStructlog:
    def test_configure_does_not_raise_in_debug_mode(self) -> None:
        configure_structlog(debug=True)

    def test_configure_does_not_raise_in_quiet_mode(self) -> None:
        configure_structlog(debug=False)

    def test_logger_usable_after_configure(self) -> None:
        configure_structlog(debug=True)
        logger = structlog.get_logger("test")
        logger.info("test message", key="value")

    def test_root_level_follows_debug_flag(self) -> None:
        configure_structlog(debug=True)
        assert logging.getLogger().level == logging.DEBUG
        configure_structlog(debug=False)
        assert logging.getLogger().level == logging.WARNING

    def test_configure_multiple_times_keeps_one_handler(self) -> None:
        configure_structlog(debug=True)
        configure_structlog(debug=False)
        handlers = [h for h in logging.getLogger().handlers if isinstance(h, CliLogHandler)]
        assert len(handlers) == 1


class TestRendering:
    def test_detector_warning_goes_through_json_renderer(self, tmp_repo, capsys) -> None:
        (tmp_repo / "package.json").write_text('{"packageManager": "deno@1.0.0"}')
        configure_structlog(debug=False)

        detect(tmp_repo)

        captured = capsys.readouterr()
        assert captured.out == ""
        records = _json_lines(captured.err)
        assert records[-1]["event"] == "Unknown packageManager: deno@1.0.0"
        assert records[-1]["level"] == "warning"
        assert records[-1]["logger"] == "pmdispatch.detector.orchestrator"
        assert "timestamp" in records[-1]

    def test_structlog_logger_shares_renderer(self, capsys) -> None:
        configure_structlog(debug=False)
        structlog.get_logger("pmdispatch.test").warning("agent missing", agent="bun")

        record = _json_lines(capsys.readouterr().err)[-1]
        assert record["event"] == "agent missing"
        assert record["agent"] == "bun"
        assert record["logger"] == "pmdispatch.test"

    def test_debug_records_filtered_when_quiet(self, capsys) -> None:
        configure_structlog(debug=False)
        logging.getLogger("pmdispatch.test").debug("hidden")
        assert "hidden" not in capsys.readouterr().err

    def test_debug_records_shown_in_debug_mode(self, capsys) -> None:
        configure_structlog(debug=True)
        logging.getLogger("pmdispatch.test").debug("resolved %s", "pnpm")
        assert "resolved pnpm" in capsys.readouterr().err

"""Tests for the logging helpers."""

import logging

from design_engine.utils.logging import LogFormatter, PerformanceLogger, log_exception


class TestLogException:
    def test_records_message_and_traceback(self, caplog):
        logger = logging.getLogger("design_engine.tests")
        try:
            raise ValueError("bad value")
        except ValueError as e:
            with caplog.at_level(logging.ERROR, logger="design_engine.tests"):
                log_exception(logger, e, "Parsing failed")

        record = caplog.records[-1]
        assert record.getMessage() == "Parsing failed: bad value"
        assert record.exc_info[0] is ValueError


class TestPerformanceLogger:
    def test_records_duration(self):
        perf = PerformanceLogger(logging.getLogger("design_engine.tests"), "Test")
        perf.start("stage")
        duration = perf.end("stage")
        assert duration >= 0
        assert perf.durations["stage"] == duration

    def test_end_without_start(self, caplog):
        perf = PerformanceLogger(logging.getLogger("design_engine.tests"), "Test")
        with caplog.at_level(logging.WARNING, logger="design_engine.tests"):
            assert perf.end("never") == 0.0
        assert "No start time found for never" in caplog.text

    def test_clear(self):
        perf = PerformanceLogger(logging.getLogger("design_engine.tests"), "Test")
        perf.start("a")
        perf.end("a")
        perf.clear()
        assert perf.durations == {}


class TestFormatter:
    def test_plain_formatting(self):
        formatter = LogFormatter(colored=False, fmt="[%(levelname)s] %(message)s")
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
        assert formatter.format(record) == "[WARNING] careful"

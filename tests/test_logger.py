# File: tests/test_logger.py
import logging
import sys

from script_scout.logger import LOGGER_NAME, configure


def test_stream_selection():
    lg = configure(level="DEBUG", stream="stderr")
    assert [h.stream for h in lg.handlers] == [sys.stderr]
    assert lg.level == logging.DEBUG

    lg = configure(stream="stdout")
    assert [h.stream for h in lg.handlers] == [sys.stdout]
    assert lg is logging.getLogger(LOGGER_NAME)
    assert lg.propagate is False


def test_file_handler_is_added(tmp_path):
    log_file = tmp_path / "scan.log"
    lg = configure(log_file=log_file, stream="stderr")
    lg.info("hello")
    for handler in lg.handlers:
        handler.flush()
    assert len(lg.handlers) == 2
    assert "hello" in log_file.read_text(encoding="utf-8")
    for handler in lg.handlers:
        handler.close()

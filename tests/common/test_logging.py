import logging
import pytest
from trafficnet.common.logging import log_execution_time, setup_logger

def test_setup_logger_adds_single_handler():
    logger = setup_logger("trafficnet.test.handlers")
    setup_logger("trafficnet.test.handlers")
    assert len(logger.handlers) == 1

def test_setup_logger_accepts_level_names():
    logger = setup_logger("trafficnet.test.levels", "debug")
    assert logger.level == logging.DEBUG

    setup_logger("trafficnet.test.levels", logging.WARNING)
    assert logger.level == logging.WARNING

def test_log_execution_time_returns_result(caplog):
    logger = logging.getLogger("trafficnet.test.timing")

    @log_execution_time(logger)
    def add(a, b):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="trafficnet.test.timing"):
        assert add(1, 2) == 3
    assert "add executed in" in caplog.text

def test_log_execution_time_logs_and_reraises(caplog):
    logger = logging.getLogger("trafficnet.test.failing")

    @log_execution_time(logger)
    def fail():
        raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR, logger="trafficnet.test.failing"):
        with pytest.raises(RuntimeError):
            fail()
    assert "fail failed: boom" in caplog.text

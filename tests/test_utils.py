"""
Tests for the per-run logger.
"""

import logging

import pytest

from transfer_issue_action.utils import RUN_LOGGER_NAME, RunLogger, make_run_logger


@pytest.mark.unit
class TestMakeRunLogger:
    """Test that each run gets its own level."""

    def test_debug_flag_sets_level(self) -> None:
        assert make_run_logger(debug=True).level == logging.DEBUG
        assert make_run_logger().level == logging.INFO

    def test_new_logger_does_not_change_earlier_one(self) -> None:
        first = make_run_logger(debug=True)
        second = make_run_logger(debug=False)

        assert first is not second
        assert first.isEnabledFor(logging.DEBUG)
        assert not second.isEnabledFor(logging.DEBUG)

    def test_set_level_stays_on_the_adapter(self) -> None:
        first = make_run_logger(debug=True)
        second = make_run_logger(debug=True)

        second.setLevel(logging.WARNING)

        assert first.getEffectiveLevel() == logging.DEBUG
        assert second.getEffectiveLevel() == logging.WARNING
        assert logging.getLogger(RUN_LOGGER_NAME).level == logging.DEBUG

    def test_debug_records_follow_the_run_level(self, caplog: pytest.LogCaptureFixture) -> None:
        debug_log = make_run_logger(debug=True)
        quiet_log = make_run_logger(debug=False)

        with caplog.at_level(logging.DEBUG):
            debug_log.debug("from debug run")
            quiet_log.debug("from quiet run")
            quiet_log.info("quiet run info")

        messages = [record.message for record in caplog.records]
        assert "from debug run" in messages
        assert "from quiet run" not in messages
        assert "quiet run info" in messages

    def test_wraps_the_shared_run_logger(self) -> None:
        run_logger = make_run_logger()

        assert isinstance(run_logger, RunLogger)
        assert run_logger.logger is logging.getLogger(RUN_LOGGER_NAME)

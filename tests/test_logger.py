"""Application logger setup."""

import logging

from codepoet.utils.logger import LIBRARY_LOGGERS, get_logger, quiet_libraries, setup_logger


def test_file_handler_writes_and_setup_is_idempotent(tmp_path) -> None:
    log_file = tmp_path / "nested" / "app.log"

    log = setup_logger("codepoet-test-file", log_file=str(log_file), log_level="debug")
    again = setup_logger("codepoet-test-file", log_file=str(log_file))

    assert again is log
    assert len(log.handlers) == 2
    assert log.propagate is False

    log.debug("poem committed")
    for handler in log.handlers:
        handler.flush()
    assert "poem committed" in log_file.read_text(encoding="utf-8")

    for handler in list(log.handlers):
        handler.close()
        log.removeHandler(handler)


def test_empty_log_file_means_stdout_only() -> None:
    log = setup_logger("codepoet-test-stdout", log_file="")

    assert len(log.handlers) == 1
    assert isinstance(log.handlers[0], logging.StreamHandler)


def test_library_loggers_are_capped() -> None:
    quiet_libraries(logging.ERROR)

    for name in LIBRARY_LOGGERS:
        assert logging.getLogger(name).level == logging.ERROR

    quiet_libraries(logging.WARNING)


def test_get_logger_is_a_child_of_the_app_logger() -> None:
    assert get_logger("performance").name == "codepoet.performance"

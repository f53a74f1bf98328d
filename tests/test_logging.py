import logging
from types import SimpleNamespace

import pytest
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from optbind.parser import OptionParser
from optbind.settings import ParserSettings
from optbind.utils import running_in_container, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_cli_mode_uses_rich(restore_root_logger):
    setup_logging(mode="cli")
    (handler,) = restore_root_logger.handlers
    assert isinstance(handler, RichHandler)
    assert handler.level == logging.WARNING


def test_json_mode(restore_root_logger):
    setup_logging(mode="json", console_log_level=logging.INFO)
    (handler,) = restore_root_logger.handlers
    assert isinstance(handler.formatter, JsonFormatter)
    assert handler.level == logging.INFO


def test_mode_from_environment(restore_root_logger, monkeypatch):
    monkeypatch.setenv("OPTBIND_LOG_MODE", "json")
    setup_logging()
    (handler,) = restore_root_logger.handlers
    assert isinstance(handler.formatter, JsonFormatter)


def test_container_defaults_to_json(restore_root_logger, monkeypatch):
    monkeypatch.delenv("OPTBIND_LOG_MODE", raising=False)
    monkeypatch.setattr("optbind.utils.running_in_container", lambda: True)
    setup_logging()
    (handler,) = restore_root_logger.handlers
    assert isinstance(handler.formatter, JsonFormatter)


def test_outside_container_defaults_to_rich(restore_root_logger, monkeypatch):
    monkeypatch.delenv("OPTBIND_LOG_MODE", raising=False)
    monkeypatch.setattr("optbind.utils.running_in_container", lambda: False)
    setup_logging()
    (handler,) = restore_root_logger.handlers
    assert isinstance(handler, RichHandler)


def test_running_in_container_without_cgroup(monkeypatch):
    def missing(*args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr("optbind.utils.open", missing, raising=False)
    assert running_in_container() is False


def test_invalid_mode(restore_root_logger):
    with pytest.raises(ValueError):
        setup_logging(mode="xml")


def test_file_handler(restore_root_logger, tmp_path):
    log_file = tmp_path / "optbind.log"
    setup_logging(mode="cli", log_filename=str(log_file), json_log_to_file=True)
    file_handlers = [
        handler
        for handler in restore_root_logger.handlers
        if isinstance(handler, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    assert isinstance(file_handlers[0].formatter, JsonFormatter)
    logging.getLogger("optbind").debug("written to file")
    file_handlers[0].flush()
    assert "written to file" in log_file.read_text()
    file_handlers[0].close()


def test_ignored_unknown_option_is_logged(caplog):
    parser = OptionParser()
    parser.add_option("-v", "--verbose", type=bool)
    with caplog.at_level(logging.DEBUG, logger="optbind"):
        parser.parse(
            ["--bind", "-v"],
            SimpleNamespace(),
            ParserSettings(ignore_unknown_arguments=True),
        )
    assert "Ignoring unknown option '--bind'" in caplog.text

import logging

from src.utils.logging import SUCCESS, StatusFormatter, color_supported, setup_root_logger


def _record(level, msg="hello"):
    return logging.LogRecord("test", level, __file__, 1, msg, None, None)


def test_plain_tags():
    formatter = StatusFormatter(color=False)
    assert formatter.format(_record(logging.INFO)) == "[INFO] hello"
    assert formatter.format(_record(SUCCESS)) == "[ OK ] hello"
    assert formatter.format(_record(logging.WARNING)) == "[WARN] hello"
    assert formatter.format(_record(logging.ERROR)) == "[ERR ] hello"


def test_colored_tags():
    line = StatusFormatter(color=True).format(_record(logging.WARNING))
    assert line == "\033[1;33m[WARN]\033[0m hello"


def test_no_color_env(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    assert not color_supported()


def test_setup_leaves_other_loggers_alone(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    other = logging.getLogger("urllib3")
    other.setLevel(logging.NOTSET)
    log_file = tmp_path / "logs" / "bootstrap.log"

    try:
        setup_root_logger(log_file, "DEBUG", color=False)

        assert other.level == logging.NOTSET
        assert root.level == logging.DEBUG
        assert log_file.parent.is_dir()
        assert [type(h).__name__ for h in root.handlers] == ["StreamHandler", "RotatingFileHandler"]
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

import pytest

from keto.util.logger import Logger, LOG_LEVELS, DEFAULT_LOG_LEVEL


@pytest.fixture(autouse=True)
def reset_level():
    yield
    Logger.LOG_LEVEL = DEFAULT_LOG_LEVEL
    Logger("test")


def test_logger_default_state():
    assert Logger.LOG_LEVEL == DEFAULT_LOG_LEVEL


def test_logger_creation():
    for i in LOG_LEVELS:
        Logger.LOG_LEVEL = i
        log = Logger("test")
        assert log is not None
        assert log.LOG_LEVEL == i


def test_logger_fail():
    for i in [-1, 100, 23, 42]:
        Logger.LOG_LEVEL = i
        assert Logger.LOG_LEVEL == i

        with pytest.raises(ValueError):
            Logger("test")


def test_level_setter():
    log = Logger("test")

    log.level = "debug"
    assert log.level == 10

    log.level = "2"
    assert log.level == 30

    log.level = "quiet"
    assert log.level == 0

    with pytest.raises(ValueError):
        log.level = 7


def test_level_logging(capsys):
    Logger.LOG_LEVEL = 3
    log = Logger("test-output")

    log.error("%s: %s", "error", "msg")
    log.warning("warning")
    log.warn("warn", prefix=False)
    log.info("info")
    log.debug("debug")
    log.success("success")
    log.question("question")

    out = capsys.readouterr().out.splitlines()
    assert out == ["[-] error: msg",
                   "[!] warning",
                   "warn",
                   "[~] info",
                   "[+] success",
                   "[?] question"]

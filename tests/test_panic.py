from spandiag.panic import BACKTRACE_ENV_VAR, Panic, format_backtrace

HELP_TEXT = "set the `SPANDIAG_BACKTRACE=1` environment variable to display a backtrace."


def test_panic(monkeypatch):
    monkeypatch.delenv(BACKTRACE_ENV_VAR, raising=False)
    panic = Panic("ruh roh raggy")
    assert str(panic) == "ruh roh raggy"
    assert panic.__cause__ is None
    assert panic.code() is None
    assert panic.severity() is None
    assert panic.help() == HELP_TEXT
    assert panic.url() is None
    assert panic.source_code() is None
    assert panic.labels() is None
    assert panic.related() is None
    assert panic.diagnostic_source() is None


def test_default_message(monkeypatch):
    monkeypatch.delenv(BACKTRACE_ENV_VAR, raising=False)
    assert str(Panic()) == "Something went wrong"


def test_backtrace_disabled_by_default(monkeypatch):
    monkeypatch.delenv(BACKTRACE_ENV_VAR, raising=False)
    assert format_backtrace() == ""


def test_backtrace_disabled_by_zero(monkeypatch):
    monkeypatch.setenv(BACKTRACE_ENV_VAR, "0")
    assert format_backtrace() == ""


def test_backtrace_enabled(monkeypatch):
    monkeypatch.setenv(BACKTRACE_ENV_VAR, "1")
    out = format_backtrace()
    assert out.startswith("\n   0: - test_backtrace_enabled")
    assert __file__ in out


def test_panic_message_includes_backtrace(monkeypatch):
    monkeypatch.setenv(BACKTRACE_ENV_VAR, "full")
    text = str(Panic("boom"))
    assert text.startswith("boom\n")
    assert "at " in text


def test_panic_keeps_message_and_help(monkeypatch):
    monkeypatch.delenv(BACKTRACE_ENV_VAR, raising=False)
    panic = Panic("boom")
    assert panic.message == "boom"
    assert str(panic) == "boom"
    assert panic.help() == HELP_TEXT
    assert panic.severity() is None
    assert isinstance(panic, Exception)
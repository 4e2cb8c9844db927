import pytest
from pydantic import ValidationError

from rados_probe.config import Settings, get_settings


def test_settings_defaults_match_bench_contract(monkeypatch):
    for name in (
        "RADOS_BENCH_SECONDS",
        "RADOS_BENCH_THREADS",
        "RADOS_BENCH_OBJECT_SIZE",
        "RADOS_PROBE_TIMEOUT",
        "RADOS_PROBE_REQUIRE_ROOT",
        "RADOS_PROBE_REQUIRED_TOOLS",
        "RADOS_BIN",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()
    assert settings.bench_seconds == 10
    assert settings.bench_threads == 1
    assert settings.object_size == 65536
    assert settings.timeout_seconds == 30
    assert settings.require_root is True
    assert settings.required_tools == ("timeout",)
    assert settings.rados_bin == "rados"


def test_settings_from_env_overrides(monkeypatch):
    monkeypatch.setenv("RADOS_BENCH_SECONDS", "5")
    monkeypatch.setenv("RADOS_PROBE_TIMEOUT", "20")
    monkeypatch.setenv("RADOS_PROBE_REQUIRE_ROOT", "false")
    monkeypatch.setenv("RADOS_PROBE_REQUIRED_TOOLS", "rados, timeout,awk")

    settings = Settings.from_env()
    assert settings.bench_seconds == 5
    assert settings.timeout_seconds == 20
    assert settings.require_root is False
    assert settings.required_tools == ("rados", "timeout", "awk")


def test_settings_reject_zero_duration(monkeypatch):
    monkeypatch.setenv("RADOS_BENCH_SECONDS", "0")
    with pytest.raises(ValidationError):
        Settings.from_env()


def test_settings_are_immutable():
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.bench_seconds = 60

    assert isinstance(settings.required_tools, tuple)
    with pytest.raises(AttributeError):
        settings.required_tools.append("awk")


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("RADOS_BIN", "/usr/local/bin/rados")
    s1 = get_settings()
    s2 = get_settings()
    assert s1 is s2
    assert s1.rados_bin == "/usr/local/bin/rados"

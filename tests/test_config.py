"""Tests for environment driven configuration"""

import pytest

from pod_recycler.config import Config, DEFAULT_RECONNECT_DELAY_SECONDS

ENV_VARS = ["KUBECONFIG", "RECONNECT_DELAY_SECONDS", "DRY_RUN", "LOG_LEVEL", "LOG_FORMAT", "METRICS_PORT"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = Config()

    assert cfg.kube_config_path is None
    assert cfg.reconnect_delay_seconds == DEFAULT_RECONNECT_DELAY_SECONDS == 5.0
    assert cfg.dry_run is False
    assert cfg.log_level == "INFO"
    assert cfg.log_format == "json"
    assert cfg.metrics_port is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("KUBECONFIG", "/tmp/kubeconfig")
    monkeypatch.setenv("RECONNECT_DELAY_SECONDS", "1.5")
    monkeypatch.setenv("DRY_RUN", "TRUE")
    monkeypatch.setenv("LOG_FORMAT", "console")
    monkeypatch.setenv("METRICS_PORT", "9102")

    cfg = Config()

    assert cfg.kube_config_path == "/tmp/kubeconfig"
    assert cfg.reconnect_delay_seconds == 1.5
    assert cfg.dry_run is True
    assert cfg.log_format == "console"
    assert cfg.metrics_port == 9102


def test_empty_kubeconfig_means_in_cluster(monkeypatch):
    monkeypatch.setenv("KUBECONFIG", "")

    assert Config().kube_config_path is None


def test_negative_delay_rejected(monkeypatch):
    monkeypatch.setenv("RECONNECT_DELAY_SECONDS", "-1")

    with pytest.raises(ValueError):
        Config()

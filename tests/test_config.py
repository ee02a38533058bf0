"""Tests for environment-driven object store configuration."""

import pytest

from storage_provisioner.services.config import ObjectStoreConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "OBJECT_STORE_ENDPOINT",
        "OBJECT_STORE_REGION",
        "OBJECT_STORE_SERVICE_NAME",
        "OBJECT_STORE_TIMEOUT_SECONDS",
        "OBJECT_STORE_SIGN_REQUESTS",
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults(monkeypatch):
    monkeypatch.setenv("OBJECT_STORE_ENDPOINT", "https://om.example.com/")
    monkeypatch.setenv("AWS_REGION", "eu-west-1")

    config = ObjectStoreConfig.from_env()

    assert config.endpoint == "https://om.example.com"
    assert config.region_name == "eu-west-1"
    assert config.service_name == "s3"
    assert config.timeout_seconds == 30.0
    assert config.sign_requests is True


def test_explicit_region_wins(monkeypatch):
    monkeypatch.setenv("OBJECT_STORE_ENDPOINT", "https://om.example.com")
    monkeypatch.setenv("OBJECT_STORE_REGION", "us-east-2")
    monkeypatch.setenv("AWS_REGION", "eu-west-1")
    assert ObjectStoreConfig.from_env().region_name == "us-east-2"


def test_missing_endpoint(monkeypatch):
    with pytest.raises(ValueError, match="OBJECT_STORE_ENDPOINT"):
        ObjectStoreConfig.from_env()


def test_signing_requires_region(monkeypatch):
    monkeypatch.setenv("OBJECT_STORE_ENDPOINT", "https://om.example.com")
    with pytest.raises(ValueError, match="OBJECT_STORE_REGION"):
        ObjectStoreConfig.from_env()


def test_unsigned_without_region(monkeypatch):
    monkeypatch.setenv("OBJECT_STORE_ENDPOINT", "http://localhost:9878")
    monkeypatch.setenv("OBJECT_STORE_SIGN_REQUESTS", "false")
    monkeypatch.setenv("OBJECT_STORE_TIMEOUT_SECONDS", "5")

    config = ObjectStoreConfig.from_env()

    assert config.sign_requests is False
    assert config.region_name is None
    assert config.timeout_seconds == 5.0


@pytest.mark.parametrize(
    "name,value",
    [("OBJECT_STORE_TIMEOUT_SECONDS", "soon"), ("OBJECT_STORE_SIGN_REQUESTS", "maybe")],
)
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv("OBJECT_STORE_ENDPOINT", "https://om.example.com")
    monkeypatch.setenv("AWS_REGION", "eu-west-1")
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        ObjectStoreConfig.from_env()

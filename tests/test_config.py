"""Tests for environment-driven configuration."""

from __future__ import annotations

import os

from talent_api.config import FORM_FIELD_LIMIT_BYTES, RESUME_LIMIT_BYTES, load_config


def test_defaults(monkeypatch):
    for name in ("MAIL_BACKEND", "CLEANUP_DELAY_SECONDS", "SEED_DEMO_JOBS", "MAX_RESUME_BYTES"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config["MAIL_BACKEND"] == "console"
    assert config["CLEANUP_DELAY_SECONDS"] == 60
    assert config["SESSION_TTL_SECONDS"] == 24 * 60 * 60
    assert config["MAX_RESUME_BYTES"] == RESUME_LIMIT_BYTES
    assert config["SEED_DEMO_JOBS"] is True
    assert os.path.isabs(config["PUBLIC_DIR"])


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MAIL_BACKEND", "SMTP")
    monkeypatch.setenv("MAIL_PORT", "2525")
    monkeypatch.setenv("MAIL_USE_TLS", "false")
    monkeypatch.setenv("SEED_DEMO_JOBS", "false")
    monkeypatch.setenv("CLEANUP_DELAY_SECONDS", " ")

    config = load_config()

    assert config["MAIL_BACKEND"] == "smtp"
    assert config["MAIL_PORT"] == 2525
    assert config["MAIL_USE_TLS"] is False
    assert config["SEED_DEMO_JOBS"] is False
    assert config["CLEANUP_DELAY_SECONDS"] == 60


def test_app_without_seed_jobs(make_app, notifier):
    client = make_app(notifier, SEED_DEMO_JOBS=False).test_client()
    assert client.get("/api/jobs").get_json() == []


def test_form_field_limit_default(monkeypatch):
    monkeypatch.delenv("MAX_FORM_MEMORY_SIZE", raising=False)
    assert load_config()["MAX_FORM_MEMORY_SIZE"] == FORM_FIELD_LIMIT_BYTES

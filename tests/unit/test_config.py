"""
Unit tests for settings
"""

import pytest
from pydantic import ValidationError

from core.config import Settings
from core.logging import job_tag
from models.base import JobMode, Region


def test_defaults(test_settings):
    assert test_settings.API_BASE_URL == "http://localhost:3000"
    assert test_settings.REGIONS == [Region.US, Region.EU, Region.KR, Region.TW]
    assert test_settings.MAX_ATTEMPTS == 3
    assert test_settings.BACKOFF_BASE_MS == 1000
    assert test_settings.JOB_MODE == JobMode.DAILY
    assert test_settings.ADMIN_API_KEY is None


def test_timeout_depends_on_mode(test_settings):
    assert test_settings.request_timeout() == 7200.0
    assert test_settings.request_timeout(JobMode.DAILY) == 7200.0
    assert test_settings.request_timeout(JobMode.WEEKLY) == 21600.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "https://leaderboard.example.com")
    monkeypatch.setenv("REGIONS", '["eu", "us"]')
    monkeypatch.setenv("JOB_MODE", "weekly")
    monkeypatch.setenv("MAX_ATTEMPTS", "5")

    config = Settings(_env_file=None)

    assert config.API_BASE_URL == "https://leaderboard.example.com"
    assert config.REGIONS == [Region.EU, Region.US]
    assert config.JOB_MODE == JobMode.WEEKLY
    assert config.MAX_ATTEMPTS == 5
    assert config.request_timeout() == 21600.0


def test_unknown_region_rejected(monkeypatch):
    monkeypatch.setenv("REGIONS", '["us", "cn"]')

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_job_tag():
    assert job_tag(JobMode.DAILY) == "[DAILY]"
    assert job_tag("weekly") == "[WEEKLY]"

"""
Unit tests for the run_pipeline entry point
"""

import logging

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from core.config import Settings
from models.base import JobMode
from scripts import run_pipeline

BASE_URL = "http://remote.test"


class TestBuildClient:
    """Test the shared HTTP client setup"""

    @pytest.mark.asyncio
    async def test_admin_key_header_when_configured(self):
        config = Settings(_env_file=None, ADMIN_API_KEY="s3cret", API_BASE_URL="http://api.example")

        async with run_pipeline.build_client(config, JobMode.DAILY) as client:
            assert client.headers["Content-Type"] == "application/json"
            assert client.headers["X-Admin-API-Key"] == "s3cret"
            assert str(client.base_url).rstrip("/") == "http://api.example"
            assert client.timeout.read == 7200.0

    @pytest.mark.asyncio
    async def test_no_admin_key_header_when_unset(self, caplog):
        caplog.set_level(logging.WARNING, logger="scripts.run_pipeline")
        config = Settings(_env_file=None, ADMIN_API_KEY=None)

        async with run_pipeline.build_client(config, JobMode.WEEKLY) as client:
            assert client.headers["Content-Type"] == "application/json"
            assert "X-Admin-API-Key" not in client.headers
            assert client.timeout.read == 21600.0

        assert any("ADMIN_API_KEY is not set" in r.getMessage() for r in caplog.records)


class TestRunPipeline:
    """Test one job run end to end against the fake remote"""

    @pytest.mark.asyncio
    async def test_success_exits_zero(self, healthy_remote, test_settings):
        client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(healthy_remote.handler))

        with patch.object(run_pipeline, "build_client", return_value=client):
            code = await run_pipeline.run_pipeline(test_settings, JobMode.DAILY)

        assert code == 0
        assert healthy_remote.count("POST", "/admin/refresh-views") == 1

    @pytest.mark.asyncio
    async def test_failed_run_exits_one(self, remote, test_settings):
        remote.add("GET", "/wow/advanced/seasons", [])
        client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(remote.handler))

        with patch.object(run_pipeline, "build_client", return_value=client):
            code = await run_pipeline.run_pipeline(test_settings, JobMode.DAILY)

        assert code == 1


class TestMain:
    """Test argument parsing and the process exit code"""

    def test_mode_flag(self):
        assert run_pipeline.parse_args(["--mode", "weekly"]).mode == "weekly"
        assert run_pipeline.parse_args([]).mode is None

    def test_returns_run_exit_code(self):
        with patch.object(run_pipeline, "setup_logging"), \
                patch.object(run_pipeline, "run_pipeline", AsyncMock(return_value=0)) as run:
            assert run_pipeline.main(["--mode", "weekly"]) == 0

        assert run.await_args.args[1] == JobMode.WEEKLY

    def test_escaped_exception_returns_one(self, caplog):
        with patch.object(run_pipeline, "setup_logging"), \
                patch.object(run_pipeline, "run_pipeline", AsyncMock(side_effect=RuntimeError("boom"))):
            assert run_pipeline.main(["--mode", "daily"]) == 1

        assert any("Unexpected error: boom" in r.getMessage() for r in caplog.records)

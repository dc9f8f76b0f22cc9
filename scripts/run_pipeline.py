"""
Script to run the leaderboard refresh pipeline once

Exit code 0 when the run succeeded, 1 otherwise.
"""

import argparse
import asyncio
import json
import logging
import os
import sys

# Add current directory to path to allow imports from core, pipeline, etc.
sys.path.append(os.getcwd())

import httpx

from core.config import Settings, settings
from core.logging import job_tag, setup_logging
from models.base import JobMode
from pipeline.reporter import ResultReporter, create_pipeline

logger = logging.getLogger(__name__)


def build_client(config: Settings, mode: JobMode) -> httpx.AsyncClient:
    headers = {"Content-Type": "application/json"}
    if config.ADMIN_API_KEY:
        headers["X-Admin-API-Key"] = config.ADMIN_API_KEY
    else:
        logger.warning("ADMIN_API_KEY is not set; admin endpoints may reject requests")

    return httpx.AsyncClient(
        base_url=config.API_BASE_URL,
        headers=headers,
        timeout=config.request_timeout(mode)
    )


async def run_pipeline(config: Settings, mode: JobMode) -> int:
    """Run one pipeline job and return the process exit code"""
    tag = job_tag(mode)
    logger.info(f"{tag} API Base URL: {config.API_BASE_URL} (environment: {config.ENVIRONMENT})")

    async with build_client(config, mode) as client:
        reporter = create_pipeline(client, config, mode=mode)
        result = await reporter.run()

    logger.info(f"{tag} Result: {json.dumps(result.to_dict(), default=str)}")

    if result.ok:
        logger.info(f"{tag} Automation completed successfully")
    else:
        logger.error(f"{tag} Automation failed")
    return ResultReporter.exit_code(result)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the leaderboard refresh pipeline once")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in JobMode],
        default=None,
        help="daily: latest period, weekly: previous period (default: JOB_MODE)"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(settings.LOG_LEVEL)
    mode = JobMode(args.mode or settings.JOB_MODE)

    try:
        return asyncio.run(run_pipeline(settings, mode))
    except Exception as e:
        logger.exception(f"{job_tag(mode)} Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

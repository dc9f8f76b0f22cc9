"""
Run reporting: timing, the final result object and the process exit code.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx

from core.config import Settings
from core.exceptions import OrchestratorException
from core.logging import job_tag
from models.base import JobMode, RunStatus
from pipeline.client import RequestExecutor, SleepFunc
from pipeline.fetcher import RegionFetcher
from pipeline.resolver import SeasonResolver
from pipeline.runner import PipelineRunner
from schemas.pipeline import PipelineRunResult

logger = logging.getLogger(__name__)


class ResultReporter:
    """Wrap one pipeline run and turn its outcome into a PipelineRunResult"""

    def __init__(
        self,
        runner: PipelineRunner,
        clock: Callable[[], float] = time.monotonic
    ):
        self.runner = runner
        self.clock = clock

    @property
    def tag(self) -> str:
        return self.runner.tag

    async def run(self) -> PipelineRunResult:
        """
        Run the pipeline and report.

        Never raises for a failed run: the failure is returned as an
        ``error`` result carrying the terminating error message.
        """
        started_at = datetime.now(timezone.utc)
        start = self.clock()
        logger.info(f"{self.tag} Starting automation at {started_at.isoformat()}")

        try:
            results = await self.runner.run()

        except OrchestratorException as e:
            return self._finish(start, RunStatus.ERROR, error=e.message)

        except Exception as e:
            logger.exception(f"{self.tag} Unexpected error in pipeline")
            return self._finish(start, RunStatus.ERROR, error=str(e) or type(e).__name__)

        return self._finish(start, RunStatus.SUCCESS, results=results)

    def _finish(self, start: float, status: RunStatus, results=None, error=None) -> PipelineRunResult:
        duration = round(self.clock() - start, 3)
        finished_at = datetime.now(timezone.utc).isoformat()

        if status == RunStatus.SUCCESS:
            logger.info(f"{self.tag} Automation completed successfully at {finished_at}")
            logger.info(f"{self.tag} Total duration: {duration} seconds")
        else:
            logger.error(f"{self.tag} Automation failed at {finished_at}")
            logger.error(f"{self.tag} Total duration: {duration} seconds")
            logger.error(f"{self.tag} Error: {error}")

        return PipelineRunResult(status=status, duration=duration, results=results, error=error)

    @staticmethod
    def exit_code(result: PipelineRunResult) -> int:
        return 0 if result.ok else 1


def create_pipeline(
    client: httpx.AsyncClient,
    config: Settings,
    mode: Optional[JobMode] = None,
    sleep: Optional[SleepFunc] = None
) -> ResultReporter:
    """Wire executor, resolver, fetcher, runner and reporter for one job"""
    mode = JobMode(mode or config.JOB_MODE)

    executor = RequestExecutor(
        client,
        max_attempts=config.MAX_ATTEMPTS,
        backoff_base_ms=config.BACKOFF_BASE_MS,
        timeout=config.request_timeout(mode),
        tag=job_tag(mode),
        sleep=sleep
    )
    resolver = SeasonResolver(executor, api_prefix=config.PUBLIC_API_PREFIX, mode=mode)
    fetcher = RegionFetcher(executor, regions=config.REGIONS, api_prefix=config.PUBLIC_API_PREFIX)

    return ResultReporter(PipelineRunner(executor, resolver, fetcher))

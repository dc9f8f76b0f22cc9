# ============================================================================
# File: pipeline/runner.py
# Description: Sequences the fetch and maintenance steps of one pipeline run
# ============================================================================
"""
Pipeline Runner - Orchestrates fetch, import and database maintenance.

State machine:

    Fetching → Importing → Clearing → CleaningUp → Vacuuming → Refreshing → Completed

with ``Failed`` reachable from every non-terminal state. Steps run strictly
in order and each one starts only after the previous one succeeded.

Failure policy:
- Region failures inside the fetch step are recorded by RegionFetcher
  and never stop the run
- Any other failure (season resolution or a maintenance step) aborts
  the remaining steps and propagates to the caller
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from core.exceptions import PipelineStepError
from models.base import PipelineState, PipelineStep
from pipeline.client import RequestExecutor
from pipeline.fetcher import RegionFetcher
from pipeline.resolver import SeasonResolver
from schemas.pipeline import FetchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaintenanceStep:
    """One remote maintenance trigger"""
    state: PipelineState
    step: PipelineStep
    endpoint: str
    title: str
    description: str
    done: str
    with_season: bool = False


MAINTENANCE_STEPS: List[MaintenanceStep] = [
    MaintenanceStep(
        PipelineState.IMPORTING, PipelineStep.IMPORT,
        "/admin/import-all-leaderboard-json",
        "Importing leaderboard data",
        "import leaderboard data", "imported leaderboard data",
    ),
    MaintenanceStep(
        PipelineState.CLEARING, PipelineStep.CLEAR,
        "/admin/clear-output",
        "Clearing output directory",
        "clear output directory", "cleared output directory",
    ),
    MaintenanceStep(
        PipelineState.CLEANING_UP, PipelineStep.CLEANUP,
        "/admin/cleanup-leaderboard",
        "Cleaning up leaderboard data",
        "cleanup leaderboard data", "cleaned up leaderboard data",
        with_season=True,
    ),
    MaintenanceStep(
        PipelineState.VACUUMING, PipelineStep.VACUUM,
        "/admin/vacuum-full",
        "Performing VACUUM FULL",
        "perform VACUUM FULL", "completed VACUUM FULL",
    ),
    MaintenanceStep(
        PipelineState.REFRESHING, PipelineStep.REFRESH,
        "/admin/refresh-views",
        "Refreshing materialized views",
        "refresh materialized views", "refreshed materialized views",
    ),
]


class PipelineRun:
    """State machine of a single run; every call to PipelineRunner.run() gets its own"""

    def __init__(self, tag: str = ""):
        self.tag = tag
        self.state = PipelineState.FETCHING
        self.history: List[PipelineState] = [self.state]

    def transition(self, new_state: PipelineState):
        if self.state.is_terminal:
            raise RuntimeError(f"Pipeline already finished in state {self.state.value}")
        logger.debug(f"{self.tag} Pipeline state {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)


class PipelineRunner:
    """
    Runs the six pipeline steps in order.

    Responsibilities:
    - Resolve the target season/period and fetch every region
    - Trigger import, clear, cleanup, vacuum and refresh on the remote service
    - Record each run's states in its own PipelineRun
    - Stop at the first failed step
    """

    def __init__(
        self,
        executor: RequestExecutor,
        resolver: SeasonResolver,
        fetcher: RegionFetcher
    ):
        self.executor = executor
        self.resolver = resolver
        self.fetcher = fetcher
        self.last_run: Optional[PipelineRun] = None

    @property
    def tag(self) -> str:
        return self.executor.tag

    @property
    def state(self) -> Optional[PipelineState]:
        """State of the most recently started run"""
        return self.last_run.state if self.last_run else None

    @property
    def history(self) -> List[PipelineState]:
        return list(self.last_run.history) if self.last_run else []

    async def run(self) -> Dict[str, Any]:
        """
        Run the full pipeline once.

        Returns:
            Step outputs keyed by step name: the FetchResult under ``fetch``
            and each maintenance response under its step name

        Raises:
            ResolutionError: No season or period to work on
            TransientRemoteError: A season lookup failed after retries
            PipelineStepError: A maintenance step failed after retries
        """
        run = PipelineRun(self.tag)
        self.last_run = run
        results: Dict[str, Any] = {}

        try:
            # --------------------------------------------------
            # STEP 1: FETCH
            # --------------------------------------------------
            logger.info(f"{self.tag} === STEP 1: Fetching leaderboard data ===")
            fetch_result = await self.fetch()
            results[PipelineStep.FETCH.value] = fetch_result

            # --------------------------------------------------
            # STEPS 2-6: REMOTE MAINTENANCE
            # --------------------------------------------------
            for number, maintenance in enumerate(MAINTENANCE_STEPS, start=2):
                run.transition(maintenance.state)
                logger.info(f"{self.tag} === STEP {number}: {maintenance.title} ===")
                results[maintenance.step.value] = await self.trigger(maintenance, fetch_result)

            run.transition(PipelineState.COMPLETED)
            return results

        except Exception:
            run.transition(PipelineState.FAILED)
            raise

    async def fetch(self) -> FetchResult:
        target = await self.resolver.resolve()
        return await self.fetcher.fetch(target)

    async def trigger(
        self,
        maintenance: MaintenanceStep,
        fetch_result: Optional[FetchResult] = None
    ) -> Any:
        """Call one maintenance endpoint; a failed call raises PipelineStepError"""
        if maintenance.with_season and fetch_result is None:
            raise PipelineStepError(
                maintenance.step.value,
                f"Cannot {maintenance.description} without a resolved season",
                context={"endpoint": maintenance.endpoint}
            )

        payload = None
        if maintenance.with_season:
            payload = {"season_id": fetch_result.season_id}
            logger.info(f"{self.tag} Starting to {maintenance.description} for season {fetch_result.season_id}")
        else:
            logger.info(f"{self.tag} Starting to {maintenance.description}")

        result = await self.executor.call("POST", maintenance.endpoint, payload)

        if result.is_fatal:
            logger.error(f"{self.tag} Failed to {maintenance.description}: {result.error}")
            raise PipelineStepError(
                maintenance.step.value,
                result.error,
                context={"endpoint": maintenance.endpoint},
                original_exception=result.exception
            )

        logger.info(f"{self.tag} Successfully {maintenance.done}")
        return result.data

"""
Season and period resolution.

Finds the (season, period) pair a run works on:
- daily: the latest period of the latest season
- weekly: the period before that, falling back to the last period of
  the previous season when the latest season has only one period
"""

import logging
from typing import Any, List, Sequence

from core.exceptions import ResolutionError
from models.base import JobMode
from pipeline.client import RequestExecutor
from schemas.pipeline import Period, Season, SeasonInfo, SeasonPeriod

logger = logging.getLogger(__name__)


def latest(items: Sequence[Any], key: str) -> Any:
    """Item with the highest ``key``; the first one seen wins a tie"""
    best = items[0]
    for item in items[1:]:
        if getattr(item, key) > getattr(best, key):
            best = item
    return best


class SeasonResolver:
    """Resolve the season and period to fetch"""

    def __init__(
        self,
        executor: RequestExecutor,
        api_prefix: str = "/wow/advanced",
        mode: JobMode = JobMode.DAILY
    ):
        self.executor = executor
        self.api_prefix = api_prefix.rstrip("/")
        self.mode = JobMode(mode)

    @property
    def tag(self) -> str:
        return self.executor.tag

    async def list_seasons(self) -> List[Season]:
        data = await self.executor.request("GET", f"{self.api_prefix}/seasons")
        if not data:
            raise ResolutionError("No seasons found")
        return [Season.model_validate(item) for item in data]

    async def list_periods(self, season_id: int) -> List[Period]:
        data = await self.executor.request("GET", f"{self.api_prefix}/season-info/{season_id}")
        info = SeasonInfo.model_validate(data or {})
        if not info.periods:
            raise ResolutionError(
                f"No periods found for season {season_id}",
                context={"season_id": season_id}
            )
        return info.periods

    async def resolve(self) -> SeasonPeriod:
        """
        Resolve the target pair for the configured mode.

        Raises:
            ResolutionError: No seasons, or no periods for the chosen season
            TransientRemoteError: A lookup call failed after retries
        """
        try:
            seasons = await self.list_seasons()
            if self.mode == JobMode.WEEKLY:
                return await self._resolve_previous(seasons)
            return await self._resolve_latest(seasons)
        except Exception as e:
            logger.error(
                f"{self.tag} Failed to get {self.mode.value} season and period: "
                f"{getattr(e, 'message', str(e))}"
            )
            raise

    async def _resolve_latest(self, seasons: List[Season]) -> SeasonPeriod:
        season = latest(seasons, "season_id")
        logger.info(f"{self.tag} Latest season found: {season.season_id} ({season.season_name})")

        period = latest(await self.list_periods(season.season_id), "period_id")
        logger.info(f"{self.tag} Latest period found: {period.period_id}")

        return SeasonPeriod(season_id=season.season_id, period_id=period.period_id)

    async def _resolve_previous(self, seasons: List[Season]) -> SeasonPeriod:
        ordered = sorted(seasons, key=lambda s: s.season_id, reverse=True)
        season = ordered[0]
        logger.info(f"{self.tag} Latest season found: {season.season_id} ({season.season_name})")

        periods = sorted(
            await self.list_periods(season.season_id),
            key=lambda p: p.period_id,
            reverse=True
        )

        if len(periods) > 1:
            period_id = periods[1].period_id
            logger.info(f"{self.tag} Using previous period from current season: {period_id}")
            return SeasonPeriod(season_id=season.season_id, period_id=period_id)

        # Only one period so far: take the last period of the previous season
        if len(ordered) < 2:
            raise ResolutionError(
                "No previous season available",
                context={"season_id": season.season_id}
            )

        previous = ordered[1]
        logger.info(
            f"{self.tag} Current season has only 1 period, using previous season: "
            f"{previous.season_id} ({previous.season_name})"
        )
        period = latest(await self.list_periods(previous.season_id), "period_id")
        logger.info(f"{self.tag} Using last period from previous season: {period.period_id}")

        return SeasonPeriod(season_id=previous.season_id, period_id=period.period_id)

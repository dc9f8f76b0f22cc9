"""
Per-region leaderboard fetch.

Regions are fetched one at a time in their configured order. A region
that still fails after retries is recorded as an error outcome and the
fetch moves on; a missing region never aborts the run.
"""

import logging
from typing import Iterable, List, Optional

from core.exceptions import RegionFetchError
from models.base import Region, RegionStatus
from pipeline.client import RequestExecutor
from schemas.pipeline import FetchResult, RegionOutcome, SeasonPeriod

logger = logging.getLogger(__name__)

DEFAULT_REGIONS = (Region.US, Region.EU, Region.KR, Region.TW)


class RegionFetcher:
    """Fetch leaderboard snapshots for every region of a season/period"""

    def __init__(
        self,
        executor: RequestExecutor,
        regions: Optional[Iterable[Region]] = None,
        api_prefix: str = "/wow/advanced"
    ):
        self.executor = executor
        if regions is None:
            regions = DEFAULT_REGIONS
        self.regions: List[Region] = [Region(r) for r in regions]
        self.api_prefix = api_prefix.rstrip("/")

    @property
    def tag(self) -> str:
        return self.executor.tag

    def endpoint(self, target: SeasonPeriod, region: Region) -> str:
        return (
            f"{self.api_prefix}/mythic-leaderboard/"
            f"{target.season_id}/{target.period_id}?region={region.value}"
        )

    async def fetch(self, target: SeasonPeriod) -> FetchResult:
        """
        Fetch every region for ``target``.

        Returns:
            FetchResult with one outcome per region, in region order
        """
        logger.info(
            f"{self.tag} Starting leaderboard data fetch for season "
            f"{target.season_id}, period {target.period_id}"
        )

        outcomes = []
        for region in self.regions:
            outcomes.append(await self.fetch_region(target, region))

        result = FetchResult(
            season_id=target.season_id,
            period_id=target.period_id,
            results=outcomes
        )

        if result.failed_regions:
            logger.warning(
                f"{self.tag} Fetch finished with failed regions: "
                f"{', '.join(result.failed_regions)}"
            )
        return result

    async def fetch_region(self, target: SeasonPeriod, region: Region) -> RegionOutcome:
        logger.info(f"{self.tag} Fetching data for region: {region.value}")

        result = await self.executor.call("GET", self.endpoint(target, region))

        if result.is_fatal:
            # The only place a failed call is tolerated
            result = result.downgrade()
            error = RegionFetchError(
                result.error,
                context={
                    "region": region.value,
                    "season_id": target.season_id,
                    "period_id": target.period_id
                },
                original_exception=result.exception
            )
            logger.error(
                f"{self.tag} Failed to fetch data for region {region.value}: {error.message}",
                extra={"error_context": error.to_dict()}
            )
            return RegionOutcome(region=region, status=RegionStatus.ERROR, error=error.message)

        logger.info(f"{self.tag} Successfully fetched data for region {region.value}")
        return RegionOutcome(region=region, status=RegionStatus.SUCCESS, data=result.data)

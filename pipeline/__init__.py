"""
Pipeline components for the leaderboard refresh job.

Modules:
    client: RequestExecutor, bounded retry with exponential backoff
    resolver: SeasonResolver, picks the season/period to fetch
    fetcher: RegionFetcher, per-region fetch with partial-failure tolerance
    runner: PipelineRunner, the ordered fetch → import → clear → cleanup → vacuum → refresh sequence
    reporter: ResultReporter, timing, final result and exit code

Architecture:
    ResultReporter wraps PipelineRunner, which calls SeasonResolver once,
    then RegionFetcher, then the five maintenance triggers in order. All
    remote calls go through one RequestExecutor.

    Only RegionFetcher tolerates failure (per region). Every other
    failure ends the run.

Usage:
    from pipeline.reporter import create_pipeline

Example:
    async with httpx.AsyncClient(base_url=settings.API_BASE_URL) as client:
        reporter = create_pipeline(client, settings)
        result = await reporter.run()

    print(result.to_dict())
"""

__all__ = [
    "RequestExecutor",
    "SeasonResolver",
    "RegionFetcher",
    "PipelineRunner",
    "ResultReporter",
    "create_pipeline",
]

"""
Pydantic schemas for remote calls and pipeline results.

Schemas:
    pipeline: RetryableCall, CallResult, Season, Period, SeasonInfo,
              SeasonPeriod, RegionOutcome, FetchResult, PipelineRunResult

Usage:
    from schemas.pipeline import FetchResult, PipelineRunResult

Validation:
    Remote payloads (seasons, season info) are validated on the way in;
    unknown fields are ignored. Result objects serialize with the
    ``seasonId`` / ``periodId`` keys the job report uses.
"""

__all__ = [
    "RetryableCall",
    "CallResult",
    "Season",
    "Period",
    "SeasonInfo",
    "SeasonPeriod",
    "RegionOutcome",
    "FetchResult",
    "PipelineRunResult",
]

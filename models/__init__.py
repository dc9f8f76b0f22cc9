"""
Enumerations shared across the pipeline.

Models:
    base: Region, JobMode, OutcomeStatus, RegionStatus, RunStatus,
          PipelineStep and PipelineState

Usage:
    from models.base import Region, PipelineStep

Example:
    for region in (Region.US, Region.EU):
        print(region.value)
"""

from models.base import (
    Region,
    JobMode,
    OutcomeStatus,
    RegionStatus,
    RunStatus,
    PipelineStep,
    PipelineState,
)

__all__ = [
    "Region",
    "JobMode",
    "OutcomeStatus",
    "RegionStatus",
    "RunStatus",
    "PipelineStep",
    "PipelineState",
]

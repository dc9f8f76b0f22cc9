"""
Shared enums for the leaderboard refresh pipeline
"""

import enum


# ============================================================================
# ENUMS
# ============================================================================

class Region(str, enum.Enum):
    """Leaderboard server regions, in fetch order"""
    US = "us"
    EU = "eu"
    KR = "kr"
    TW = "tw"


class JobMode(str, enum.Enum):
    """Which season/period a run targets"""
    DAILY = "daily"      # latest period of the latest season
    WEEKLY = "weekly"    # the period before the latest one


class OutcomeStatus(str, enum.Enum):
    """Tagged outcome of a single remote call"""
    SUCCESS = "success"
    RECOVERABLE_ERROR = "recoverable_error"
    FATAL_ERROR = "fatal_error"


class RegionStatus(str, enum.Enum):
    """Recorded status of one region fetch"""
    SUCCESS = "success"
    ERROR = "error"


class RunStatus(str, enum.Enum):
    """Overall pipeline run status"""
    SUCCESS = "success"
    ERROR = "error"


class PipelineStep(str, enum.Enum):
    """Pipeline steps, in execution order"""
    FETCH = "fetch"
    IMPORT = "import"
    CLEAR = "clear"
    CLEANUP = "cleanup"
    VACUUM = "vacuum"
    REFRESH = "refresh"


class PipelineState(str, enum.Enum):
    """PipelineRunner state machine states"""
    FETCHING = "fetching"
    IMPORTING = "importing"
    CLEARING = "clearing"
    CLEANING_UP = "cleaning_up"
    VACUUMING = "vacuuming"
    REFRESHING = "refreshing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineState.COMPLETED, PipelineState.FAILED)

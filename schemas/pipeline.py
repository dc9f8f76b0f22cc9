"""
Pydantic schemas for remote calls, resolved seasons and pipeline results
"""

from pydantic import BaseModel, Field, validator
from typing import Optional, List, Dict, Any

from models.base import OutcomeStatus, Region, RegionStatus, RunStatus


# ============================================================================
# Remote Call
# ============================================================================

class RetryableCall(BaseModel):
    """
    One remote call description, built fresh for every request.

    Attempts are numbered 1..max_attempts; the delay before retry n
    is ``2^n * backoff_base_ms`` milliseconds.
    """

    method: str
    endpoint: str
    payload: Optional[Dict[str, Any]] = None
    max_attempts: int = Field(3, ge=1)
    timeout: float = Field(7200.0, gt=0)  # seconds, per attempt

    @validator("method")
    def normalize_method(cls, v):
        """HTTP methods are sent upper-case"""
        return v.strip().upper()

    def backoff_ms(self, attempt: int, base_ms: int = 1000) -> int:
        """Delay in milliseconds to wait after failed attempt ``attempt``"""
        return (2 ** attempt) * base_ms

    class Config:
        frozen = True


class CallResult(BaseModel):
    """
    Tagged outcome of a remote call.

    ``fatal_error`` is what every failed call produces. Only the region
    fetcher turns it into ``recoverable_error`` via :meth:`downgrade`.
    """

    status: OutcomeStatus
    data: Any = None
    error: Optional[str] = None
    exception: Optional[Exception] = Field(None, exclude=True)

    @classmethod
    def success(cls, data: Any) -> "CallResult":
        return cls(status=OutcomeStatus.SUCCESS, data=data)

    @classmethod
    def fatal(cls, exc: Exception) -> "CallResult":
        message = getattr(exc, "message", None) or str(exc)
        return cls(status=OutcomeStatus.FATAL_ERROR, error=message, exception=exc)

    @property
    def is_success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def is_fatal(self) -> bool:
        return self.status == OutcomeStatus.FATAL_ERROR

    def downgrade(self) -> "CallResult":
        """Return a copy with a fatal error marked recoverable"""
        if not self.is_fatal:
            return self
        return CallResult(
            status=OutcomeStatus.RECOVERABLE_ERROR,
            error=self.error,
            exception=self.exception,
        )

    class Config:
        arbitrary_types_allowed = True
        frozen = True


# ============================================================================
# Seasons
# ============================================================================

class Season(BaseModel):
    """Season as listed by the seasons endpoint"""
    season_id: int
    season_name: Optional[str] = None

    class Config:
        extra = "ignore"


class Period(BaseModel):
    """Period within a season"""
    period_id: int

    class Config:
        extra = "ignore"


class SeasonInfo(BaseModel):
    """Season-info payload; only the periods matter here"""
    periods: List[Period] = Field(default_factory=list)

    @validator("periods", pre=True)
    def none_to_empty(cls, v):
        return v or []

    class Config:
        extra = "ignore"


class SeasonPeriod(BaseModel):
    """Resolved (season, period) pair a run works on"""
    season_id: int = Field(..., alias="seasonId")
    period_id: int = Field(..., alias="periodId")

    class Config:
        populate_by_name = True
        frozen = True


# ============================================================================
# Results
# ============================================================================

class RegionOutcome(BaseModel):
    """Result of fetching one region; immutable once recorded"""
    region: Region
    status: RegionStatus
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == RegionStatus.SUCCESS

    class Config:
        frozen = True
        use_enum_values = True


class FetchResult(BaseModel):
    """Outcome of the fetch step: every region, in fetch order"""
    season_id: int = Field(..., alias="seasonId")
    period_id: int = Field(..., alias="periodId")
    results: List[RegionOutcome] = Field(default_factory=list)

    @property
    def failed_regions(self) -> List[str]:
        return [r.region for r in self.results if not r.ok]

    @property
    def succeeded_regions(self) -> List[str]:
        return [r.region for r in self.results if r.ok]

    class Config:
        populate_by_name = True


class PipelineRunResult(BaseModel):
    """
    The single artifact of a run.

    Successful runs carry ``results`` keyed by step name; failed runs
    carry only the terminating ``error`` message.
    """
    status: RunStatus
    duration: float
    results: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-ready dict, ``results`` or ``error`` but never both"""
        out: Dict[str, Any] = {
            "status": RunStatus(self.status).value,
            "duration": self.duration,
        }
        if self.ok:
            out["results"] = {
                step: value.model_dump(mode="json", by_alias=True)
                if isinstance(value, BaseModel) else value
                for step, value in (self.results or {}).items()
            }
        else:
            out["error"] = self.error
        return out

    class Config:
        use_enum_values = True

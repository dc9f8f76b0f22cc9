"""
Orchestrator exceptions.

    OrchestratorException
    ├── TransientRemoteError   remote call failed on every attempt
    ├── ResolutionError        no season or period to work on
    ├── RegionFetchError       recorded on a region outcome, never raised
    └── PipelineStepError      maintenance step failed, aborts the run
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class OrchestratorException(Exception):
    """
    Base exception carrying a message, a context dict and the wrapped cause.

    ``message`` is what ends up in the run result; ``context`` only goes
    to the logs.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception
        self.context = {**(context or {}), "error_timestamp": datetime.now(timezone.utc).isoformat()}
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        text = f"{type(self).__name__}: {self.message}"
        if self.context:
            text += " | Context: " + ", ".join(f"{k}={v}" for k, v in self.context.items())
        if self.original_exception:
            text += f" | Caused by: {type(self.original_exception).__name__}: {self.original_exception}"
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Structured form for ``extra={"error_context": ...}`` log records"""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "context": self.context,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Remote Call Errors
# ============================================================================

class TransientRemoteError(OrchestratorException):
    """Raised by RequestExecutor once the last attempt fails"""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, context, original_exception)
        self.status_code = status_code
        if status_code is not None:
            self.context["status_code"] = status_code


# ============================================================================
# Pipeline Errors
# ============================================================================

class ResolutionError(OrchestratorException):
    pass


class RegionFetchError(OrchestratorException):
    pass


class PipelineStepError(OrchestratorException):
    """Maintenance step failure; ``message`` is the underlying remote error"""

    def __init__(
        self,
        step: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message, {**(context or {}), "step": step}, original_exception)
        self.step = step

"""
Unit tests for the exception hierarchy
"""

from core.exceptions import (
    OrchestratorException,
    PipelineStepError,
    RegionFetchError,
    ResolutionError,
    TransientRemoteError,
)


def test_hierarchy():
    for cls in (TransientRemoteError, ResolutionError, RegionFetchError, PipelineStepError):
        assert issubclass(cls, OrchestratorException)


def test_step_error_keeps_underlying_message():
    cause = TransientRemoteError("POST /admin/vacuum-full returned HTTP 500", status_code=500)
    error = PipelineStepError("vacuum", cause.message, original_exception=cause)

    assert error.message == "POST /admin/vacuum-full returned HTTP 500"
    assert error.step == "vacuum"
    assert error.context["step"] == "vacuum"
    assert error.__cause__ is cause


def test_to_dict():
    original = ConnectionError("reset by peer")
    error = TransientRemoteError(
        "reset by peer",
        context={"method": "GET", "endpoint": "/seasons"},
        original_exception=original,
        status_code=None
    )

    data = error.to_dict()

    assert data["error_type"] == "TransientRemoteError"
    assert data["message"] == "reset by peer"
    assert data["context"]["endpoint"] == "/seasons"
    assert "error_timestamp" in data["context"]
    assert data["original_error"] == "reset by peer"


def test_str_includes_context():
    error = ResolutionError("No periods found for season 4", context={"season_id": 4})

    text = str(error)

    assert text.startswith("ResolutionError: No periods found for season 4")
    assert "season_id=4" in text

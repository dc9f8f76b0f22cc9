"""
Core utilities and configuration for the leaderboard refresh orchestrator.

This package provides foundational components used throughout the pipeline:

Modules:
    config: Application configuration and environment variable management
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import Settings
    from core.exceptions import TransientRemoteError, PipelineStepError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging("INFO")
"""

__all__ = [
    "settings",
    "Settings",
    "setup_logging",
    # Exceptions
    "OrchestratorException",
    "TransientRemoteError",
    "ResolutionError",
    "RegionFetchError",
    "PipelineStepError",
]

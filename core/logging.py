"""
Logging configuration
"""

import logging
import sys


def setup_logging(level: str = "INFO"):
    """Configure application logging"""
    
    log_level = getattr(logging, level.upper(), logging.INFO)
    
    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True,
    )
    
    # httpx logs every request at INFO; the executor already does
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    
    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {level.upper()} level")


def job_tag(mode) -> str:
    """Log prefix for a job mode, e.g. ``[DAILY]``"""
    value = getattr(mode, "value", mode)
    return f"[{str(value).upper()}]"

"""
Application configuration using Pydantic Settings
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List, Optional

from models.base import JobMode, Region


class Settings(BaseSettings):
    """Application settings with environment variable support"""
    
    # Remote service
    API_BASE_URL: str = "http://localhost:3000"
    PUBLIC_API_PREFIX: str = "/wow/advanced"
    ADMIN_API_KEY: Optional[str] = None
    
    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    
    # Pipeline
    JOB_MODE: JobMode = JobMode.DAILY
    REGIONS: List[Region] = Field(
        default_factory=lambda: [Region.US, Region.EU, Region.KR, Region.TW]
    )
    
    # Retry / timeouts
    MAX_ATTEMPTS: int = Field(3, ge=1)
    BACKOFF_BASE_MS: int = Field(1000, ge=0)
    REQUEST_TIMEOUT_SECONDS: float = Field(7200.0, gt=0)          # 2 hours
    WEEKLY_REQUEST_TIMEOUT_SECONDS: float = Field(21600.0, gt=0)  # 6 hours
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
    
    def request_timeout(self, mode: Optional[JobMode] = None) -> float:
        """Per-attempt timeout in seconds for the given job mode"""
        mode = mode or self.JOB_MODE
        if mode == JobMode.WEEKLY:
            return self.WEEKLY_REQUEST_TIMEOUT_SECONDS
        return self.REQUEST_TIMEOUT_SECONDS


settings = Settings()

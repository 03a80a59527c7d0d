"""Application configuration and environment settings"""
from typing import List, Optional
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    # Competition settings
    YEAR: int = Field(2025, description="Competition year to report on")
    LEADERBOARDS: List[int] = Field(
        default_factory=lambda: [649161, 1027450],
        description="Private leaderboard ids reported when none are given on the command line"
    )
    UNLOCK_HOUR: int = Field(6, description="Local hour at which each day's puzzle unlocks")
    TIMEZONE: Optional[str] = Field(None, description="IANA zone for unlock instants, system local if unset")

    # Cache settings
    CACHE_FILE: str = Field(".aoc.json", description="File holding the latest snapshot per leaderboard")
    CACHE_TTL_MINUTES: int = Field(15, description="Minutes a cached snapshot stays fresh")

    # Remote service settings
    BASE_URL: str = Field("https://adventofcode.com", description="Leaderboard service root URL")
    REQUEST_TIMEOUT: float = Field(30.0, description="HTTP timeout in seconds")

    # Session credentials
    AOC_SESSION: Optional[str] = Field(None, description="Session cookie, overrides the secrets file")
    SECRETS_FILE: str = Field("secrets.json", description="Encrypted secrets store")
    SECRETS_KEY_FILE: str = Field(".secrets.key", description="Key used to decrypt the secrets store")

    LOG_LEVEL: str = Field("INFO", description="Logging level for the command line tool")

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        """Reference timezone for unlock instants, None means system local"""
        if not self.TIMEZONE:
            return None
        return ZoneInfo(self.TIMEZONE)

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True
    )

settings = Settings()

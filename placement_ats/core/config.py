"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = True

    # Match score weights (skills / profile completeness / academics)
    skills_weight: float = 0.5
    completeness_weight: float = 0.2
    academic_weight: float = 0.3

    # Skills component when the job lists no required skills
    neutral_skills_score: int = 70

    # Recommendation bands on the overall score
    excellent_threshold: int = 80
    good_threshold: int = 60
    moderate_threshold: int = 40

    # Document handling
    min_resume_text_length: int = 50
    resume_raw_text_limit: int = 2000
    jd_description_limit: int = 1000
    max_upload_size_mb: int = 5

    @property
    def max_upload_size_bytes(self) -> int:
        """Upload limit in bytes"""
        return self.max_upload_size_mb * 1024 * 1024

    @model_validator(mode="after")
    def check_weights(self):
        total = self.skills_weight + self.completeness_weight + self.academic_weight
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Score weights must sum to 1.0, got {total:.3f}")
        return self

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_prefix="ATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()

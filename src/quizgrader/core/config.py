"""
Configuration management for the quiz grader.
Settings come from the environment and an optional .env file via Pydantic BaseSettings.
"""

import os
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings and configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field("Quiz Grader", description="Application name")
    app_version: str = Field("1.0.0", description="Application version")
    debug: bool = Field(False, description="Debug mode")
    log_level: str = Field("INFO", description="Logging level")
    enable_docs: bool = Field(True, description="Enable Swagger/OpenAPI documentation")

    # API
    api_host: str = Field("0.0.0.0", description="API host")
    api_port: int = Field(8000, description="API port")
    cors_origins: list[str] = Field(["*"], description="CORS allowed origins")

    # Rate Limiting
    rate_limit_per_minute: int = Field(120, description="Rate limit per minute per IP")

    # Storage
    storage_backend: Literal["memory", "chroma"] = Field(
        "memory", description="Question store: in-process dict or ChromaDB"
    )
    questions_file: Optional[str] = Field(
        None, description="JSON file with questions to load at startup"
    )
    seed_sample_questions: bool = Field(True, description="Load the built-in sample questions")
    chroma_persist_dir: str = Field("./chroma_db", description="ChromaDB persistence directory")
    chroma_collection_questions: str = Field("questions", description="Questions collection name")

    # Monitoring
    enable_metrics: bool = Field(True, description="Enable Prometheus metrics endpoint")

    # Security
    csp_strict: bool = Field(False, description="Enable strict Content Security Policy")


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


def validate_settings(settings: Settings) -> list[str]:
    """
    Validate settings and return list of issues.

    Returns:
        List of validation issues (empty if all valid)
    """
    issues = []

    if settings.rate_limit_per_minute <= 0:
        issues.append("Rate limit must be positive")

    if settings.api_port <= 0 or settings.api_port > 65535:
        issues.append("API port must be between 1 and 65535")

    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if settings.log_level.upper() not in valid_levels:
        issues.append(f"Invalid log level: {settings.log_level}. Valid options: {valid_levels}")

    if settings.questions_file and not os.path.exists(settings.questions_file):
        issues.append(f"Questions file not found: {settings.questions_file}")

    if settings.storage_backend == "chroma" and not settings.chroma_collection_questions.strip():
        issues.append("Chroma collection name cannot be empty")

    return issues

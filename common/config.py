from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractionConfig(BaseModel):
    max_upload_bytes: int = 20 * 1024 * 1024
    timeout_s: float = 30.0
    allowed_extensions: tuple[str, ...] = ("pdf", "docx", "odt", "txt")
    allowed_media_types: tuple[str, ...] = (
        "application/pdf",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.oasis.opendocument.text",
        "text/plain",
        "application/octet-stream",
    )


class ScoringConfig(BaseModel):
    shingle_size: int = Field(default=3, ge=1)
    min_tokens: int = Field(default=12, ge=1)


class ReportConfig(BaseModel):
    snippet_length: int = Field(default=600, ge=0)


class AnalysisConfig(BaseModel):
    extraction: ExtractionConfig = ExtractionConfig()
    scoring: ScoringConfig = ScoringConfig()
    report: ReportConfig = ReportConfig()


class RuntimeSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ANTIPLAGIAT_", env_file=".env", extra="ignore"
    )

    config_path: Path = Path("config/config.yaml")
    log_level: str = "INFO"


def load_yaml_config(path: Path | None = None) -> AnalysisConfig:
    """
    Load config/config.yaml (or the given path) into an AnalysisConfig.
    A missing file yields the built-in defaults.
    """
    path = Path(path or settings.config_path)
    if not path.exists():
        return AnalysisConfig()
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return AnalysisConfig(**raw)


settings = RuntimeSettings()
yaml_config = load_yaml_config()

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .text_preprocessing import CaseMode


PROJECT_ROOT = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DATATIPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Text pipeline
    case_mode: CaseMode = CaseMode.UNCHANGED
    delimiter: str = " "

    # Benchmarking
    benchmark_repetitions: int = 100
    benchmark_warmup: int = 5

    # Model summaries
    significance_alpha: float = 0.05

    # Storage
    cache_dir: Path = PROJECT_ROOT / ".cache" / "datatips"
    output_dir: Path = PROJECT_ROOT / "output"

    # Service metadata
    service_name: str = "datatips"
    environment: str = "dev"


settings = Settings()

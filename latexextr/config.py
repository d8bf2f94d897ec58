from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_CORS_ORIGIN = "https://latex-extr.netlify.app"


class Settings(BaseModel):
    temp_dir: Path = Field(Path("temp"), description="Uploads and intermediate LaTeX files")
    output_dir: Path = Field(Path("latex_files"), description="Rendered expression files")
    pandoc_binary: str = Field("pandoc", description="Pandoc executable name or path")
    pandoc_timeout: float = Field(120.0, gt=0, description="Seconds before a conversion is aborted")
    cors_allow_origins: list[str] = Field(default_factory=lambda: [DEFAULT_CORS_ORIGIN])
    port: int = Field(3000, description="Port for the HTTP service")


def _origins_from_env() -> list[str] | None:
    raw = (os.getenv("LATEXEXTR_CORS_ALLOW_ORIGINS") or "").strip()
    if not raw:
        return None
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or None


def load_settings() -> Settings:
    """Build settings from ``LATEXEXTR_*`` environment variables and ``PORT``."""
    values: dict = {}
    if os.getenv("LATEXEXTR_TEMP_DIR"):
        values["temp_dir"] = os.environ["LATEXEXTR_TEMP_DIR"]
    if os.getenv("LATEXEXTR_OUTPUT_DIR"):
        values["output_dir"] = os.environ["LATEXEXTR_OUTPUT_DIR"]
    if os.getenv("LATEXEXTR_PANDOC"):
        values["pandoc_binary"] = os.environ["LATEXEXTR_PANDOC"]
    if os.getenv("LATEXEXTR_PANDOC_TIMEOUT"):
        values["pandoc_timeout"] = os.environ["LATEXEXTR_PANDOC_TIMEOUT"]
    if os.getenv("PORT"):
        values["port"] = os.environ["PORT"]

    origins = _origins_from_env()
    if origins:
        values["cors_allow_origins"] = origins

    return Settings(**values)

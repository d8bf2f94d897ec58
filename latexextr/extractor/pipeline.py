"""
Ties the pieces together: pandoc conversion, math extraction, cleanup and
rendering, plus the temp-file bookkeeping for a single uploaded document.
"""
from __future__ import annotations

import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import aiofiles
from loguru import logger

from latexextr.config import Settings, load_settings
from latexextr.converters.pandoc import aconvert_to_latex
from latexextr.extractor.math_extractor import extract_math_expressions
from latexextr.extractor.models import ConversionFailed
from latexextr.extractor.normalizer import clean_expression, render_output


@dataclass(frozen=True)
class ExtractionResult:
    raw: Tuple[str, ...]
    cleaned: Tuple[str, ...]
    output: str

    def to_dict(self) -> dict:
        return {
            "raw": list(self.raw),
            "cleaned": list(self.cleaned),
            "output": self.output,
        }


def extract_and_clean(source_text: str) -> ExtractionResult:
    raw = extract_math_expressions(source_text)
    cleaned = [clean_expression(expr) for expr in raw]
    return ExtractionResult(raw=tuple(raw), cleaned=tuple(cleaned), output=render_output(cleaned))


def process_latex(source_text: str) -> str:
    """LaTeX text in, rendered expression document out."""
    return extract_and_clean(source_text).output


def ensure_directories(settings: Settings) -> None:
    try:
        Path(settings.temp_dir).mkdir(parents=True, exist_ok=True)
        Path(settings.output_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConversionFailed(f"Could not create working directories: {e}") from e


def cleanup_files(paths: Iterable[Path]) -> None:
    """Delete intermediate files. Missing files are fine; other failures are logged."""
    for path in paths:
        try:
            os.unlink(path)
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.error(f"Failed to delete {path}: {e}")


class DocumentJob:
    """File bookkeeping for one uploaded document.

    The upload lives at ``upload_path``; pandoc writes LaTeX to
    ``<temp_dir>/<job_id>_bulk.txt`` and the rendered expressions go to
    ``<output_dir>/<job_id>.txt``. Working files are keyed by ``job_id`` so
    concurrent uploads sharing a filename never touch each other;
    ``file_name`` is only the name offered back to the client.
    """

    def __init__(
        self,
        upload_path: Optional[Path],
        original_filename: Optional[str],
        settings: Optional[Settings] = None,
        job_id: Optional[str] = None,
    ):
        if not upload_path or not original_filename:
            raise ConversionFailed("Invalid file upload data")

        self.settings = settings or load_settings()
        base_name = os.path.basename(original_filename)
        self.file_name = os.path.splitext(base_name)[0] or base_name
        self.job_id = job_id or uuid.uuid4().hex
        self.upload_path = Path(upload_path)
        self.latex_path = Path(self.settings.temp_dir) / f"{self.job_id}_bulk.txt"
        self.output_path = Path(self.settings.output_dir) / f"{self.job_id}.txt"

    async def aprocess(self) -> Path:
        logger.info(f"[{self.file_name}] Converting {self.upload_path} to LaTeX...")
        await aconvert_to_latex(
            self.upload_path,
            self.latex_path,
            pandoc_binary=self.settings.pandoc_binary,
            timeout=self.settings.pandoc_timeout,
        )
        latex_content = await self.read_latex_file()

        result = extract_and_clean(latex_content)
        logger.info(f"[{self.file_name}] Extracted {len(result.cleaned)} expression(s).")

        await self.write_output_file(result.output)
        return self.output_path

    async def read_latex_file(self) -> str:
        try:
            async with aiofiles.open(self.latex_path, "r", encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConversionFailed(f"Could not read converted LaTeX for {self.file_name}: {e}") from e

    async def write_output_file(self, content: str) -> None:
        try:
            async with aiofiles.open(self.output_path, "w", encoding="utf-8") as f:
                await f.write(content)
        except OSError as e:
            raise ConversionFailed(f"Could not write output for {self.file_name}: {e}") from e

    def cleanup_paths(self) -> List[Path]:
        return [self.upload_path, self.latex_path, self.output_path]

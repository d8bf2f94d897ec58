"""Thin wrapper around the pandoc CLI for document -> LaTeX conversion."""
from __future__ import annotations

import asyncio
import shutil
import subprocess
from pathlib import Path
from typing import Union

from loguru import logger

from latexextr.extractor.models import ConversionFailed

PathLike = Union[str, Path]


def pandoc_available(pandoc_binary: str = "pandoc") -> bool:
    return shutil.which(pandoc_binary) is not None


def build_command(input_path: PathLike, output_path: PathLike, pandoc_binary: str = "pandoc") -> list[str]:
    return [pandoc_binary, str(input_path), "-o", str(output_path), "--to=latex"]


def convert_to_latex(
    input_path: PathLike,
    output_path: PathLike,
    pandoc_binary: str = "pandoc",
    timeout: float = 120.0,
) -> Path:
    """Convert ``input_path`` to LaTeX text at ``output_path``.

    Pandoc sometimes reports problems on stderr while still exiting 0, so any
    stderr mentioning ``error`` is treated as a failure too.
    """
    cmd = build_command(input_path, output_path, pandoc_binary)
    logger.debug(f"Running {' '.join(cmd)}")
    try:
        proc = subprocess.run(
            cmd,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        logger.error(f"pandoc executable '{pandoc_binary}' not found; install pandoc.")
        raise ConversionFailed(
            f"Failed to convert {input_path} to LaTeX: pandoc executable '{pandoc_binary}' not found"
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise ConversionFailed(
            f"Failed to convert {input_path} to LaTeX: pandoc timed out after {timeout:g}s"
        ) from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise ConversionFailed(
            f"Failed to convert {input_path} to LaTeX: {stderr or f'exit status {exc.returncode}'}"
        ) from exc

    stderr = (proc.stderr or "").strip()
    if stderr and "error" in stderr:
        raise ConversionFailed(f"Failed to convert {input_path} to LaTeX: {stderr}")
    if stderr:
        logger.warning(f"pandoc: {stderr}")

    return Path(output_path)


async def aconvert_to_latex(
    input_path: PathLike,
    output_path: PathLike,
    pandoc_binary: str = "pandoc",
    timeout: float = 120.0,
) -> Path:
    return await asyncio.to_thread(
        convert_to_latex, input_path, output_path, pandoc_binary, timeout
    )

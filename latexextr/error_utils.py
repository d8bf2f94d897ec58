from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Any

from latexextr.extractor.models import (
    ConversionFailed,
    InvalidInputError,
    MathExtractorError,
)


@dataclass
class ErrorInfo:
    """Normalized information about a processing failure.

    Used in CLI logs and JSON output so failures are easy to aggregate.
    """

    code: str
    message: str
    stage: str
    exception_type: str

    def to_details_dict(self) -> dict[str, Any]:
        return {
            "reason": self.message,
            "reason_code": self.code,
            "error_stage": self.stage,
            "exception_type": self.exception_type,
        }


def _root_cause(exc: BaseException) -> BaseException:
    seen = set()
    while exc.__cause__ is not None and id(exc) not in seen:
        seen.add(id(exc))
        exc = exc.__cause__
    return exc


def classify_processing_error(exc: Exception) -> ErrorInfo:
    """Map a raw exception to a structured ErrorInfo.

    Classification uses the exception type, its cause chain and a few
    well-known message fragments produced by this package.
    """

    msg = str(exc) or exc.__class__.__name__
    etype = exc.__class__.__name__
    lower_msg = msg.lower()
    cause = _root_cause(exc)

    if isinstance(exc, InvalidInputError):
        return ErrorInfo(
            code="invalid_input",
            message=msg,
            stage="extract",
            exception_type=etype,
        )

    if isinstance(exc, ConversionFailed):
        if "no file uploaded" in lower_msg:
            return ErrorInfo(
                code="no_file_uploaded",
                message="No file uploaded. Please select a file.",
                stage="upload",
                exception_type=etype,
            )

        if "invalid file upload data" in lower_msg:
            return ErrorInfo(
                code="invalid_upload",
                message="Upload is missing its temporary path or original filename.",
                stage="upload",
                exception_type=etype,
            )

        if isinstance(cause, FileNotFoundError) and "pandoc" in lower_msg:
            return ErrorInfo(
                code="pandoc_not_found",
                message="pandoc is not installed or not on PATH.",
                stage="convert",
                exception_type=etype,
            )

        if isinstance(cause, subprocess.TimeoutExpired) or "timed out" in lower_msg:
            return ErrorInfo(
                code="pandoc_timeout",
                message=msg,
                stage="convert",
                exception_type=etype,
            )

        if isinstance(cause, (OSError, UnicodeDecodeError)):
            return ErrorInfo(
                code="filesystem_error",
                message=msg,
                stage="io",
                exception_type=etype,
            )

        return ErrorInfo(
            code="conversion_failed",
            message=msg,
            stage="convert",
            exception_type=etype,
        )

    if isinstance(exc, MathExtractorError):
        return ErrorInfo(
            code="extractor_error",
            message=msg,
            stage="extract",
            exception_type=etype,
        )

    if isinstance(exc, OSError):
        return ErrorInfo(
            code="filesystem_error",
            message=msg,
            stage="io",
            exception_type=etype,
        )

    return ErrorInfo(
        code="unexpected_error",
        message=msg,
        stage="unknown",
        exception_type=etype,
    )

import re
from dataclasses import dataclass


class MathExtractorError(Exception):
    """Base exception for all latexextr related errors."""
    pass


class InvalidInputError(MathExtractorError, TypeError):
    """Raised when the extractor or normalizer receives something other than text."""
    pass


class ConversionFailed(MathExtractorError):
    """Raised for any failure around the core: conversion, upload, filesystem."""
    pass


@dataclass(frozen=True)
class DelimiterPattern:
    """One recognized math delimiter convention.

    ``regex`` may define a single capture group for the inner content. When it
    does not (or the group matched nothing) the full match is kept.
    """
    name: str
    regex: re.Pattern

    def scan(self, text: str) -> list:
        found = []
        for match in self.regex.finditer(text):
            inner = match.group(1) if self.regex.groups else None
            if inner:
                found.append(inner)
            elif match.group(0):
                found.append(match.group(0))
        return found


def ensure_text(value, what: str = "source text") -> str:
    if not isinstance(value, str):
        raise InvalidInputError(
            f"Expected {what} to be str, got {type(value).__name__}"
        )
    return value

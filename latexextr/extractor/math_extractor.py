from __future__ import annotations

from typing import Callable, List

from loguru import logger

from latexextr.extractor.models import ensure_text
from latexextr.extractor.patterns import PATTERNS_BY_NAME


def scan_inline_parens(text: str) -> List[str]:
    r"""``\( ... \)`` spans, delimiters included."""
    return PATTERNS_BY_NAME["paren"].scan(text)


def scan_display_brackets(text: str) -> List[str]:
    r"""Inner content of ``\[ ... \]``, across lines."""
    return PATTERNS_BY_NAME["bracket"].scan(text)


def scan_dollar_math(text: str) -> List[str]:
    """Inner content of single-dollar math.

    ``$$...$$`` display blocks are not special-cased: each ``$$`` pair is
    an empty match and is kept as the literal ``"$$"``.
    """
    return PATTERNS_BY_NAME["dollar"].scan(text)


def scan_equation_env(text: str) -> List[str]:
    return PATTERNS_BY_NAME["equation"].scan(text)


def scan_align_env(text: str) -> List[str]:
    return PATTERNS_BY_NAME["align"].scan(text)


def scan_multline_env(text: str) -> List[str]:
    return PATTERNS_BY_NAME["multline"].scan(text)


SCAN_PASSES: tuple[Callable[[str], List[str]], ...] = (
    scan_inline_parens,
    scan_display_brackets,
    scan_dollar_math,
    scan_equation_env,
    scan_align_env,
    scan_multline_env,
)


def extract_math_expressions(source_text: str) -> List[str]:
    """Find every math expression in ``source_text``.

    Each scan pass runs over the whole text independently, so a span may be
    reported by more than one pass. Results are grouped by pass in the order
    of ``SCAN_PASSES``; within a pass they appear left to right.
    """
    text = ensure_text(source_text)

    expressions: List[str] = []
    for scan in SCAN_PASSES:
        found = scan(text)
        if found:
            logger.debug(f"{scan.__name__}: {len(found)} match(es)")
        expressions.extend(found)
    return expressions

import re
from typing import Iterable, List

from latexextr.extractor.models import InvalidInputError, ensure_text

# An escaped \% is a literal percent sign, not a comment.
_COMMENT_PATTERN = re.compile(r"(?<!\\)%.*$", re.MULTILINE)

# Only the braced form is matched; a bare \nonumber or \quad is left alone.
_LAYOUT_COMMANDS = ("label", "nonumber", "tag", "qquad", "quad", "vspace", "hspace")
_LAYOUT_COMMAND_PATTERN = re.compile(
    r"\\(" + "|".join(_LAYOUT_COMMANDS) + r")\{[^}]*\}"
)

_BLANK_LINE_PATTERN = re.compile(r"^\s*[\r\n]", re.MULTILINE)

OUTPUT_SEPARATOR = "\n\n"


def strip_comments(text: str) -> str:
    return _COMMENT_PATTERN.sub("", text)


def strip_layout_commands(text: str) -> str:
    return _LAYOUT_COMMAND_PATTERN.sub("", text)


def strip_blank_lines(text: str) -> str:
    return _BLANK_LINE_PATTERN.sub("", text)


def clean_expression(raw: str) -> str:
    """Normalize one extracted expression.

    Removes ``%`` comments, braced layout commands such as ``\\label{...}``,
    and blank lines, then trims the result. Backslashes are left single here;
    doubling happens in :func:`render_output`.
    """
    text = ensure_text(raw, "expression")
    text = strip_comments(text)
    text = strip_layout_commands(text)
    text = strip_blank_lines(text)
    return text.strip()


def render_output(cleaned: Iterable[str]) -> str:
    """Join cleaned expressions into the final text document.

    Every backslash is doubled, each entry trimmed, and entries are separated
    by one blank line.
    """
    if isinstance(cleaned, str):
        raise InvalidInputError("Expected a sequence of expressions, not a single string")
    try:
        items = list(cleaned)
    except TypeError as e:
        raise InvalidInputError(
            f"Expected a sequence of expressions, got {type(cleaned).__name__}"
        ) from e

    rendered: List[str] = []
    for expr in items:
        text = ensure_text(expr, "expression")
        rendered.append(text.replace("\\", "\\\\").strip())
    return OUTPUT_SEPARATOR.join(rendered)

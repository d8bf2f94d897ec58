import re
from typing import Dict, Tuple

from latexextr.extractor.models import DelimiterPattern


def _environment(name: str) -> DelimiterPattern:
    return DelimiterPattern(
        name=name,
        regex=re.compile(
            r"\\begin\{" + name + r"\}(.*?)\\end\{" + name + r"\}", re.DOTALL
        ),
    )


# Scan order matters: results are grouped per pattern in this order.
#   1. \( ... \)        full match kept (no capture group)
#   2. \[ ... \]        inner content, spans lines
#   3. $ ... $          inner content, single line
#   4-6. equation / align / multline environments, inner content, span lines
DELIMITER_PATTERNS: Tuple[DelimiterPattern, ...] = (
    DelimiterPattern(name="paren", regex=re.compile(r"\\\(.*?\\\)")),
    DelimiterPattern(name="bracket", regex=re.compile(r"\\\[(.*?)\\\]", re.DOTALL)),
    DelimiterPattern(name="dollar", regex=re.compile(r"\$(.*?)\$")),
    _environment("equation"),
    _environment("align"),
    _environment("multline"),
)

PATTERNS_BY_NAME: Dict[str, DelimiterPattern] = {p.name: p for p in DELIMITER_PATTERNS}

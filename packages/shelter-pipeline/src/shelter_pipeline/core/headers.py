from __future__ import annotations

import re

_HALF_WIDTH_OFFSET = 0xFEE0

# U+FF01..U+FF5E mirror ASCII 0x21..0x7E
_HEADER_TRANSLATION: dict[int, int | None] = {
    code: code - _HALF_WIDTH_OFFSET for code in range(0xFF01, 0xFF5F)
}
_HEADER_TRANSLATION.update(
    {
        ord("（"): ord("("),
        ord("）"): ord(")"),
        ord("："): ord(":"),
        ord("・"): None,
        0xFEFF: None,
    }
)
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_header(label: str) -> str:
    """Canonicalize a column label so header spellings from different dataset revisions compare equal.

    Full-width ASCII becomes half-width, every whitespace character (U+3000
    included) is removed, parentheses and colons are unified and the middle
    dot separator is dropped. Applying it twice gives the same result.
    """
    return _WHITESPACE_RE.sub("", label.translate(_HEADER_TRANSLATION))

"""
Page format grammar.

A format is either a named paper size or a custom ``<n><unit>x<n><unit>``
size. Custom sizes are matched against the lower-cased string.

The legacy pattern uses the character class ``[in|cm]``, which matches a
single one of ``i n | c m`` rather than the unit strings. It is the default
for compatibility with existing clients; strict mode requires literal
``in``/``cm`` units.
"""

import re

NAMED_PAGE_SIZES = (
    "letter",
    "legal",
    "tabloid",
    "ledger",
    "a0",
    "a1",
    "a2",
    "a3",
    "a4",
    "a5",
    "a6",
)

LEGACY_CUSTOM_SIZE = re.compile(r"^\d+[in|cm]x\d+[in|cm]$")
STRICT_CUSTOM_SIZE = re.compile(r"^\d+(in|cm)x\d+(in|cm)$")


def custom_size_pattern(strict: bool = False) -> re.Pattern[str]:
    return STRICT_CUSTOM_SIZE if strict else LEGACY_CUSTOM_SIZE


def is_custom_size(fmt: str, strict: bool = False) -> bool:
    """True if the (already lower-cased) format is a custom WxH size."""
    return custom_size_pattern(strict).fullmatch(fmt) is not None


def is_valid_format(fmt: str, strict: bool = False) -> bool:
    fmt = fmt.lower()
    return fmt in NAMED_PAGE_SIZES or is_custom_size(fmt, strict)

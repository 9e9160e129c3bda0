"""XML name character classes and name checks."""

from __future__ import annotations

_NAME_START_RANGES = (
    (0xC0, 0xD6),
    (0xD8, 0xF6),
    (0xF8, 0x2FF),
    (0x370, 0x37D),
    (0x37F, 0x1FFF),
    (0x200C, 0x200D),
    (0x2070, 0x218F),
    (0x2C00, 0x2FEF),
    (0x3001, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFFD),
    (0x10000, 0xEFFFF),
)

_NAME_EXTRA_RANGES = (
    (ord("0"), ord("9")),
    (0xB7, 0xB7),
    (0x300, 0x36F),
    (0x203F, 0x2040),
)


def _in_ranges(code: int, ranges: tuple[tuple[int, int], ...]) -> bool:
    return any(low <= code <= high for low, high in ranges)


def is_name_start_char(c: str) -> bool:
    """Whether ``c`` may start an XML name."""
    if c in ":_" or ("A" <= c <= "Z") or ("a" <= c <= "z"):
        return True
    return _in_ranges(ord(c), _NAME_START_RANGES)


def is_name_char(c: str) -> bool:
    """Whether ``c`` may appear inside an XML name."""
    if is_name_start_char(c) or c in "-.":
        return True
    return _in_ranges(ord(c), _NAME_EXTRA_RANGES)


def is_name(name: str) -> bool:
    """Whether ``name`` matches the XML ``Name`` production."""
    if not name or not is_name_start_char(name[0]):
        return False
    return all(is_name_char(c) for c in name[1:])


def is_nc_name(name: str) -> bool:
    """Whether ``name`` is an XML name without any colon."""
    return is_name(name) and ":" not in name
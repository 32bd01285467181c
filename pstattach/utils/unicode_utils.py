"""Text decoding utilities for archive property values."""

from typing import Union

# Tried in order before falling back to UTF-8 with replacement
FALLBACK_ENCODINGS = ("utf-8", "windows-1252")


def decode_text(value: Union[str, bytes, bytearray, None]) -> str:
    """
    Decode a raw property value to a Unicode string.

    Args:
        value: Raw value as returned by the archive reader

    Returns:
        Decoded Unicode string, empty for None

    Examples:
        >>> decode_text(b"Caf\\xc3\\xa9")
        'Café'
        >>> decode_text(b"Caf\\xe9")
        'Café'
        >>> decode_text(None)
        ''
    """
    if value is None:
        return ""

    if isinstance(value, str):
        return value

    raw = bytes(value).rstrip(b"\x00")
    for encoding in FALLBACK_ENCODINGS:
        try:
            return raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue

    return raw.decode("utf-8", errors="replace")


def contains_ignore_case(text: str, search_text: str) -> bool:
    """
    Check whether text contains search_text, ignoring case.

    Both sides are compared in their uppercased form.

    Examples:
        >>> contains_ignore_case("Invoices2023", "invoices")
        True
        >>> contains_ignore_case("Personal", "invoices")
        False
    """
    return search_text.upper() in text.upper()

"""
Parsing helpers for values scraped from upstream screeners.
"""

from stockthemes.services.base import ParseError

# Characters that render like '/' in group names
_SLASH_LOOKALIKES = ("\uff0f", "\u2044", "\u2215", "\u29f8")


def parse_percentage(raw: str) -> float:
    """
    Parse strings like "+3.21%", "−1.05%" or "1,234%" into floats.

    Raises:
        ParseError: if the cleaned string is not a number
    """
    normalized = (
        raw.strip()
        .replace("\u2212", "-")  # mathematical minus
        .replace("+", "")
        .replace("%", "")
        .replace(",", "")
    )
    try:
        return float(normalized)
    except ValueError:
        raise ParseError("parse_percentage", "Failed to parse percentage", raw) from None


def normalize_name(raw: str) -> str:
    """
    Canonical form of a sector/industry name.

    Slash look-alikes become '/', any whitespace run becomes one space,
    and each word (split on space or '/') is title-cased.
    """
    text = raw
    for ch in _SLASH_LOOKALIKES:
        text = text.replace(ch, "/")

    text = "".join(" " if ch.isspace() else ch for ch in text)
    text = " ".join(part for part in text.split(" ") if part)

    result = []
    capitalize_next = True
    for ch in text:
        if ch in (" ", "/"):
            result.append(ch)
            capitalize_next = True
        elif capitalize_next:
            result.append(ch.upper())
            capitalize_next = False
        else:
            result.append(ch.lower())

    return "".join(result)

"""
Name Transformers

Utilities for normalizing player names for search and sorting.
"""

import unicodedata
from typing import Optional


def normalize_name(name: Optional[str]) -> str:
    """
    Normalize a name by removing diacritics and converting to lowercase.

    Lets a table search for "doncic" find "Luka Dončić", and keeps
    accented names in alphabetical order when sorting.

    Examples:
        >>> normalize_name("Nikola Jokić")
        'nikola jokic'
        >>> normalize_name("LeBron James")
        'lebron james'
        >>> normalize_name(None)
        ''
    """
    if not name:
        return ""

    # Decompose unicode characters (e.g., é → e + combining accent)
    normalized = unicodedata.normalize("NFD", name)

    # Remove combining diacritical marks
    ascii_name = "".join(c for c in normalized if unicodedata.category(c) != "Mn")

    return ascii_name.lower().strip()


def full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    """Join first and last name, tolerating either being missing."""
    return f"{first_name or ''} {last_name or ''}".strip()

"""Normalized comparison keys for names that must be unique regardless of case or accents."""

import unicodedata


def name_key(name: str) -> str:
    """Drop letter case and diacritics, keeping every other difference.

    "Ciencia Ficción" and "ciencia ficcion" share a key, while "Sci-Fi" and
    "Sci Fi" do not.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped.casefold())

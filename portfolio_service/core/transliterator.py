# core/transliterator.py

"""
Romanised Nepali to Devanagari conversion.
"""

import re
from typing import Dict, List, Optional

from indic_transliteration import sanscript
from indic_transliteration.sanscript import transliterate as sanscript_transliterate

WORD_MAPPINGS: Dict[str, str] = {
    "k": "के",
    "kasto": "कस्तो",
    "chha": "छ",
    "halkhabar": "हालखबर",
    "malaai": "मलाई",
    "sanchai": "सञ्चै",
    "khana": "खाना",
    "paani": "पानी",
}

SUGGESTION_LIMIT = 16
DID_YOU_MEAN_LIMIT = 2

_PARENTHESISED = re.compile(r"(\([^)]*\))")
_WHITESPACE = re.compile(r"(\s+)")
_PARENS = re.compile(r"[()]")


def to_devanagari(text: str) -> str:
    return sanscript_transliterate(text, sanscript.ITRANS, sanscript.DEVANAGARI)


def to_itrans(word: str) -> str:
    return sanscript_transliterate(word, sanscript.DEVANAGARI, sanscript.ITRANS)


def map_words(segment: str, mappings: Dict[str, str] = WORD_MAPPINGS) -> str:
    """Replace known words, leaving unknown words and whitespace as typed"""
    tokens = _WHITESPACE.split(segment)
    return "".join(mappings.get(token.lower(), token) if token.strip() else token for token in tokens)


def transliterate(text: str, use_itrans: bool = True) -> str:
    """
    Convert romanised text to Devanagari

    Text inside parentheses is passed through without the parentheses.

    Args:
        text: Romanised input
        use_itrans: Use ITRANS rules; otherwise only mapped words are converted

    Returns:
        Devanagari text
    """
    out: List[str] = []
    for segment in _PARENTHESISED.split(text):
        if segment.startswith("(") and segment.endswith(")"):
            out.append(segment[1:-1])
        elif use_itrans:
            out.append(to_devanagari(segment))
        else:
            out.append(map_words(segment))
    return "".join(out)


def last_token(text: str) -> str:
    parts = text.strip().split()
    return _PARENS.sub("", parts[-1].lower()) if parts else ""


def token_before_trailing_space(text: str) -> Optional[str]:
    """The word just completed by a trailing space, or None without one"""
    if not text or not text[-1].isspace():
        return None
    return last_token(text[:-1])


def replace_last_word(text: str, replacement: str) -> str:
    parts = text.split() or [""]
    parts[-1] = replacement
    return " ".join(parts) + " "

"""Text normalization utilities for query and record matching."""
import re
import unicodedata
from typing import Dict, Iterable, List, Optional


# Spelling variants rewritten to a canonical keyword before scoring
BUILTIN_SYNONYMS: Dict[str, List[str]] = {
    "salon": ["saloon"],
}

# Words dropped from natural language queries
STOPWORDS = {"in", "at", "near", "around", "by", "the", "a", "an", "for", "with", "to", "from", "and", "or"}

# Words that introduce a place ("cafes near koramangala")
LOCATION_PREPOSITIONS = {"in", "at", "near", "around", "by"}


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize text for matching: lowercase, strip accents, collapse whitespace.

    Punctuation is kept so substring checks against addresses and tags
    behave like plain lowercase comparisons.
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFD", str(text))
    text = "".join(c for c in text if unicodedata.category(c) != "Mn")
    text = text.lower()
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def merge_synonyms(extra: Optional[Dict[str, Iterable[str]]] = None) -> Dict[str, List[str]]:
    """Combine the built-in synonym table with a caller supplied one."""
    merged = {key: list(values) for key, values in BUILTIN_SYNONYMS.items()}
    for key, values in (extra or {}).items():
        canonical = normalize_text(key)
        merged.setdefault(canonical, [])
        for value in values:
            variant = normalize_text(value)
            if variant and variant != canonical and variant not in merged[canonical]:
                merged[canonical].append(variant)
    return merged


def apply_synonyms(text: str, synonyms: Dict[str, List[str]]) -> str:
    """
    Rewrite every synonym occurrence to its canonical keyword.

    Longer variants are replaced first so multi-word synonyms win over
    their single-word parts.
    """
    if not text:
        return ""

    pairs = [
        (variant, canonical)
        for canonical, variants in synonyms.items()
        for variant in variants
    ]
    pairs.sort(key=lambda pair: len(pair[0]), reverse=True)

    for variant, canonical in pairs:
        pattern = r"\b" + re.escape(variant) + r"\b"
        text = re.sub(pattern, canonical, text)
    return text


def process_natural_language_query(query: str) -> str:
    """
    Drop connector words from a query while keeping place names.

    Words following "in", "at", "near", "around" or "by" are treated as
    location terms and survive even if they are stop words themselves.

    Args:
        query: Raw user query

    Returns:
        Space separated remaining words
    """
    if not query:
        return ""

    words = [w for w in query.replace(",", " ").split() if w]

    possible_locations: List[str] = []
    location_mode = False
    for i, word in enumerate(words):
        lowered = word.lower()
        if lowered in LOCATION_PREPOSITIONS and i < len(words) - 1:
            possible_locations.append(words[i + 1])
            location_mode = True
        elif location_mode and lowered not in STOPWORDS:
            possible_locations.append(lowered)
        else:
            location_mode = False

    kept = [
        w for w in words
        if w.lower() not in STOPWORDS or w in possible_locations
    ]
    return " ".join(kept)


def extract_location_term(query: str, location_terms: Iterable[str]) -> Optional[str]:
    """Return the first known neighbourhood mentioned in the query."""
    normalized = normalize_text(query)
    if not normalized:
        return None
    for term in location_terms:
        if term and term.lower() in normalized:
            return term.lower()
    return None


def query_words(query: str, min_length: int = 1) -> List[str]:
    """Split a normalized query into words longer than min_length - 1 characters."""
    return [w for w in normalize_text(query).split(" ") if len(w) >= min_length]

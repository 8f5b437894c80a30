"""Search suggestions using RapidFuzz."""
from typing import Dict, List, Optional, Sequence, Tuple
from rapidfuzz import fuzz, process
from rapidfuzz.utils import default_process

from localfind.core.config import SUGGESTION_CITY, SUGGESTION_THRESHOLD
from localfind.core.models import LocationRecord, Suggestion
from localfind.gazetteers.base import GazetteerProvider
from localfind.gazetteers.static import StaticGazetteer


# Shown when the search box is empty
DEFAULT_SUGGESTIONS = [
    Suggestion("Best restaurants in Bangalore", "Restaurants", "default"),
    Suggestion("Yoga classes near me", "Fitness", "default"),
    Suggestion("Haircut salons in Indiranagar", "Salons", "default"),
]


def fuzzy_match(
    query: str,
    choices: Sequence[str],
    threshold: float = SUGGESTION_THRESHOLD,
    limit: int = 5
) -> List[Tuple[str, float, int]]:
    """
    Perform fuzzy matching between query and choices.

    Combines token sort, partial and weighted ratios and keeps the best
    score per choice, so both typos ("biryni") and prefixes ("sal") match.

    Args:
        query: Query string to match
        choices: Candidate strings
        threshold: Minimum similarity score (0-1)
        limit: Maximum number of results to return

    Returns:
        List of tuples (matched_string, score, index) sorted by score descending
    """
    if not query or not query.strip() or not choices:
        return []

    combined: Dict[int, Tuple[str, float, int]] = {}
    for scorer in (fuzz.token_sort_ratio, fuzz.partial_ratio, fuzz.WRatio):
        results = process.extract(
            query,
            choices,
            scorer=scorer,
            processor=default_process,
            limit=limit,
            score_cutoff=threshold * 100
        )
        for match, score, idx in results:
            score_normalized = score / 100.0
            if idx not in combined or combined[idx][1] < score_normalized:
                combined[idx] = (match, score_normalized, idx)

    # Sort by score descending, then by choice order
    sorted_results = sorted(combined.values(), key=lambda x: (-x[1], x[2]))

    return sorted_results[:limit]


def _top_categories(records: Sequence[LocationRecord], limit: int = 5) -> List[str]:
    best = sorted(records, key=lambda r: -r.effective_rating())[:limit]
    categories = []
    for record in best:
        if record.category and record.category not in categories:
            categories.append(record.category)
    return categories


def suggest(
    query: Optional[str],
    records: Sequence[LocationRecord],
    gazetteer: Optional[GazetteerProvider] = None,
    limit: int = 8,
    threshold: float = SUGGESTION_THRESHOLD
) -> List[Suggestion]:
    """
    Build search suggestions for a partially typed query.

    Without a query, returns the default suggestions plus "Top rated ..."
    entries for the categories of the best rated records. Otherwise matches
    record names, categories and known cities.

    Args:
        query: What the user has typed so far
        records: Records the suggestions are drawn from
        gazetteer: City table (defaults to the built-in one)
        limit: Maximum number of suggestions
        threshold: Minimum similarity score (0-1)

    Returns:
        List of Suggestion objects, best first
    """
    if not query or not query.strip():
        suggestions = list(DEFAULT_SUGGESTIONS)
        suggestions.extend(
            Suggestion(f"Top rated {category.lower()}", category, "category")
            for category in _top_categories(records)
        )
        return suggestions[:limit]

    gazetteer = gazetteer or StaticGazetteer()

    candidates: List[Tuple[str, Suggestion]] = []
    seen = set()

    def add(label: str, suggestion: Suggestion):
        key = suggestion.suggestion.lower()
        if key in seen:
            return
        seen.add(key)
        candidates.append((label, suggestion))

    for record in records:
        if record.name:
            add(record.name, Suggestion(record.name, record.category, "name"))
    for record in records:
        if record.category:
            add(record.category, Suggestion(f"{record.category} in {SUGGESTION_CITY}", record.category, "category"))
    for city, _ in gazetteer.entries():
        add(city, Suggestion(f"Places in {city.title()}", None, "city"))

    labels = [label for label, _ in candidates]
    matches = fuzzy_match(query, labels, threshold=threshold, limit=limit)

    results = []
    for _, score, idx in matches:
        suggestion = candidates[idx][1]
        results.append(Suggestion(suggestion.suggestion, suggestion.category, suggestion.source, round(score, 3)))
    return results

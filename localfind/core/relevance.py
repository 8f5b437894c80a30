"""Relevance scoring strategies for free-text queries."""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from localfind.core.config import COVERAGE_THRESHOLD, LOCATION_TERM_BOOST, LOCATION_TERMS
from localfind.core.models import LocationRecord, RelevanceResult
from localfind.core.normalization import (
    apply_synonyms,
    extract_location_term,
    merge_synonyms,
    normalize_text,
    process_natural_language_query,
    query_words,
)


class RelevanceScorer(ABC):
    """Scores how well a record matches a query and decides what is a match."""

    name: str = "base"

    @abstractmethod
    def score(self, query: str, record: LocationRecord) -> RelevanceResult:
        """
        Score a record against a query.

        An empty query is the "no query" case and scores 0.

        Args:
            query: Free text query
            record: Record to score

        Returns:
            RelevanceResult with a non-negative score
        """
        pass

    @abstractmethod
    def is_match(self, result: RelevanceResult) -> bool:
        """Whether a scored record stays in a query-filtered result set."""
        pass


class KeywordRelevanceScorer(RelevanceScorer):
    """
    Additive keyword scoring used for ranking search results.

    Signals are independent and add up:
        +5 query in name, +3 in description, +4 in category,
        +2 per tag containing (or contained by) the query,
        +10 when a neighbourhood named in the query appears in the address,
        and per query word longer than 3 characters +2 name, +1 description,
        +1 if any tag contains it.
    """

    name = "keyword"

    NAME_WEIGHT = 5
    DESCRIPTION_WEIGHT = 3
    CATEGORY_WEIGHT = 4
    TAG_WEIGHT = 2
    WORD_NAME_WEIGHT = 2
    WORD_DESCRIPTION_WEIGHT = 1
    WORD_TAG_WEIGHT = 1
    MIN_WORD_LENGTH = 4

    def __init__(
        self,
        synonyms: Optional[Dict[str, Iterable[str]]] = None,
        location_terms: Optional[List[str]] = None,
        location_boost: float = LOCATION_TERM_BOOST
    ):
        """
        Initialize scorer.

        Args:
            synonyms: Extra {keyword: [synonyms]} table, merged with salon/saloon
            location_terms: Neighbourhood names recognised in queries
            location_boost: Score added when the neighbourhood is in the address
        """
        self.synonyms = merge_synonyms(synonyms)
        self.location_terms = LOCATION_TERMS if location_terms is None else location_terms
        self.location_boost = location_boost

    def _prepare(self, text: Optional[str]) -> str:
        return apply_synonyms(normalize_text(text), self.synonyms)

    def score(self, query: str, record: LocationRecord) -> RelevanceResult:
        normalized_query = self._prepare(query)
        if not normalized_query:
            return RelevanceResult()

        name = self._prepare(record.name)
        description = self._prepare(record.description)
        category = self._prepare(record.category)
        address = normalize_text(record.address)
        tags = [(tag, self._prepare(tag)) for tag in record.tags or [] if tag]

        score = 0.0

        if normalized_query in name:
            score += self.NAME_WEIGHT
        if normalized_query in description:
            score += self.DESCRIPTION_WEIGHT
        if normalized_query in category:
            score += self.CATEGORY_WEIGHT

        matched_tags = [
            original for original, tag in tags
            if tag and (tag in normalized_query or normalized_query in tag)
        ]
        score += self.TAG_WEIGHT * len(matched_tags)

        location_term = extract_location_term(normalized_query, self.location_terms)
        if location_term and location_term in address:
            score += self.location_boost

        for word in normalized_query.split(" "):
            if len(word) < self.MIN_WORD_LENGTH:
                continue
            if word in name:
                score += self.WORD_NAME_WEIGHT
            if word in description:
                score += self.WORD_DESCRIPTION_WEIGHT
            if any(word in tag for _, tag in tags):
                score += self.WORD_TAG_WEIGHT

        return RelevanceResult(score=score, matched_tags=matched_tags)

    def is_match(self, result: RelevanceResult) -> bool:
        return result.score > 0


class WordCoverageRelevanceScorer(RelevanceScorer):
    """
    Word coverage scoring used for marketplace text search.

    Coverage is the share of query words (3+ characters, connector words
    removed) found anywhere in the record. Records at or under the threshold
    are not matches. The score starts at the coverage ratio and adds field
    bonuses so title and location hits rank first.
    """

    name = "word_coverage"

    MIN_WORD_LENGTH = 3

    def __init__(self, threshold: float = COVERAGE_THRESHOLD):
        self.threshold = threshold

    def query_words(self, query: str) -> List[str]:
        processed = process_natural_language_query(normalize_text(query))
        return query_words(processed, self.MIN_WORD_LENGTH)

    def score(self, query: str, record: LocationRecord) -> RelevanceResult:
        words = self.query_words(query)
        if not words:
            return RelevanceResult()

        title = normalize_text(record.name)
        description = normalize_text(record.description)
        category = normalize_text(record.category)
        location = normalize_text(record.address)
        seller = normalize_text(record.seller_name)
        tags = [normalize_text(tag) for tag in record.tags or [] if tag]

        listing_text = " ".join([title, description, category, location, seller, " ".join(tags)])

        total = len(words)
        matched_words = [w for w in words if w in listing_text]
        coverage = len(matched_words) / total

        title_matches = sum(1 for w in words if w in title)
        location_matches = sum(1 for w in words if w in location)
        seller_matches = sum(1 for w in words if w in seller)
        tag_matches = sum(1 for w in words if any(w in tag for tag in tags))

        score = coverage
        score += (title_matches / total) * 0.5
        score += (location_matches / total) * 0.4
        score += (seller_matches / total) * 0.3
        score += (tag_matches / total) * 0.5

        if len(matched_words) == total:
            score += 0.5

        for first, second in zip(words, words[1:]):
            if f"{first} {second}" in listing_text:
                score += 0.4

        if total >= 2 and self._has_field_crossing(words, title, location, description, tags):
            score += 0.6

        matched_tags = [
            original for original in record.tags or []
            if original and any(w in normalize_text(original) for w in words)
        ]

        return RelevanceResult(score=score, matched_tags=matched_tags, coverage=coverage)

    @staticmethod
    def _has_field_crossing(words, title, location, description, tags) -> bool:
        """Different query words hit different fields (title + location, tags + location, ...)."""
        title_words = title.split()
        location_words = location.split()
        description_words = description.split()
        tag_words = [part for tag in tags for part in tag.split()]

        in_title = any(w in title_words for w in words)
        in_location_or_description = any(
            w in location_words or w in description_words for w in words
        )
        in_tags = any(w in tag_words for w in words)
        in_location = any(w in location_words for w in words)

        return (in_title and (in_location_or_description or in_tags)) or (in_tags and in_location)

    def is_match(self, result: RelevanceResult) -> bool:
        if result.coverage is None:
            return True
        return result.coverage > self.threshold

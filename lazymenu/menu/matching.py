"""Tiered substring matching over the master candidate list.

Every query change re-ranks the full master list; results are never derived
from a previous match list, so deleting query characters brings filtered-out
candidates back in their input positions.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import IntEnum


@dataclass(frozen=True)
class Candidate:
    """One input line and its position in the master list."""

    index: int
    text: str


class MatchTier(IntEnum):
    EXACT = 0
    PREFIX = 1
    SUBSTRING = 2


def build_candidates(lines: Iterable[str]) -> tuple[Candidate, ...]:
    """Freeze input lines into the insertion-ordered master list."""
    return tuple(Candidate(index, text) for index, text in enumerate(lines))


def _fold(text: str, case_sensitive: bool) -> str:
    return text if case_sensitive else text.casefold()


def _tier_for(folded_text: str, folded_query: str) -> MatchTier | None:
    if folded_text == folded_query:
        return MatchTier.EXACT
    if folded_text.startswith(folded_query):
        return MatchTier.PREFIX
    if folded_query in folded_text:
        return MatchTier.SUBSTRING
    return None


def classify(text: str, query: str, case_sensitive: bool = True) -> MatchTier | None:
    """Return the tier ``text`` falls into for ``query``, or ``None`` if it misses."""
    return _tier_for(_fold(text, case_sensitive), _fold(query, case_sensitive))


def filter_matches(
    candidates: Sequence[Candidate],
    query: str,
    case_sensitive: bool = True,
) -> list[Candidate]:
    """Rank ``candidates`` against ``query``: exact, then prefix, then substring.

    Order inside each tier follows the master list. Candidates that do not
    contain the query at all are dropped. With an empty query, empty candidates
    are exact matches and everything else is a prefix match.
    """
    folded_query = _fold(query, case_sensitive)
    tiers: dict[MatchTier, list[Candidate]] = {tier: [] for tier in MatchTier}
    for candidate in candidates:
        tier = _tier_for(_fold(candidate.text, case_sensitive), folded_query)
        if tier is not None:
            tiers[tier].append(candidate)
    return [candidate for tier in MatchTier for candidate in tiers[tier]]


__all__ = [
    "Candidate",
    "MatchTier",
    "build_candidates",
    "classify",
    "filter_matches",
]

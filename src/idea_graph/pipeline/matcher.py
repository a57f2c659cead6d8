"""
Name matcher: pairs extracted items with existing graph nodes of the same type.

Similarity is a normalized edit distance over names that are lower-cased,
stripped of type suffix words ("Login Screen" ~ "Login") and punctuation.
Assignment is greedy best-first and one-to-one: each existing node and each
extracted item take part in at most one match.

The similarity function is swappable; pass any ``(a, b) -> float`` in
[0, 1] to NameMatcher.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..config import config
from ..logging import get_logger
from ..models.merge import ExistingEntitySummary, ExtractedItem, NodeMatch
from ..models.nodes import NodeType

logger = get_logger(__name__)

SimilarityFn = Callable[[str, str], float]

CONTAINMENT_SCORE = 0.85
MATCHABLE_TYPES = frozenset({
    NodeType.IDEA,
    NodeType.FEATURE,
    NodeType.SCREEN,
    NodeType.TECH_STACK,
})

_TYPE_SUFFIXES = re.compile(r'\b(screen|page|feature|view|component|module)\b')
_PUNCTUATION = re.compile(r'[^a-z0-9\s]')
_WHITESPACE = re.compile(r'\s+')


def normalize_name(name: str) -> str:
    lowered = name.lower()
    lowered = _TYPE_SUFFIXES.sub('', lowered)
    lowered = _PUNCTUATION.sub('', lowered)
    return _WHITESPACE.sub(' ', lowered).strip()


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit insert/delete/substitute costs."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        current = [i]
        for j, char_b in enumerate(b, 1):
            cost = 0 if char_a == char_b else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """
    Similarity of two names in [0, 1].

    Identical after normalization -> 1.0; one contained in the other ->
    0.85; otherwise 1 - distance / longer length. Names that normalize to
    nothing (``"Page"``, ``"#"``) only match their own lower-cased text.
    """
    na, nb = normalize_name(a), normalize_name(b)
    if not na or not nb:
        raw_a, raw_b = a.strip().lower(), b.strip().lower()
        return 1.0 if raw_a and raw_a == raw_b else 0.0
    if na == nb:
        return 1.0
    if na in nb or nb in na:
        return CONTAINMENT_SCORE
    return 1.0 - levenshtein(na, nb) / max(len(na), len(nb))


@dataclass
class MatchOutcome:
    """Matched pairs plus the extracted items left over."""

    matches: list[NodeMatch] = field(default_factory=list)
    unmatched: list[ExtractedItem] = field(default_factory=list)


class NameMatcher:
    """
    Matches extracted items against an existing-node snapshot.

    Only same-type pairs scoring at or above the threshold are candidates.
    Prompt and note nodes never match.
    """

    def __init__(
        self,
        threshold: float | None = None,
        similarity_fn: SimilarityFn = similarity,
    ):
        """
        Args:
            threshold: Minimum similarity for a candidate pair (default from config)
            similarity_fn: Name similarity; scores are clamped to [0, 1]
        """
        self.threshold = config.NAME_MATCH_THRESHOLD if threshold is None else threshold
        self.similarity_fn = similarity_fn

    def match(
        self,
        extracted: Sequence[ExtractedItem],
        existing: Sequence[ExistingEntitySummary],
    ) -> MatchOutcome:
        candidates: list[tuple[float, int, int]] = []
        for ext_index, item in enumerate(extracted):
            if item.type not in MATCHABLE_TYPES:
                continue
            for node_index, node in enumerate(existing):
                if node.type != item.type:
                    continue
                score = min(max(self.similarity_fn(item.name, node.name), 0.0), 1.0)
                if score >= self.threshold:
                    candidates.append((score, ext_index, node_index))

        # Highest score first; ties resolved by input order
        candidates.sort(key=lambda c: (-c[0], c[1], c[2]))

        taken_extracted: set[int] = set()
        taken_existing: set[str] = set()
        outcome = MatchOutcome()

        for score, ext_index, node_index in candidates:
            node = existing[node_index]
            if ext_index in taken_extracted or node.id in taken_existing:
                continue
            taken_extracted.add(ext_index)
            taken_existing.add(node.id)
            outcome.matches.append(
                NodeMatch(
                    extracted_name=extracted[ext_index].name,
                    existing_node_id=node.id,
                    confidence=score,
                )
            )

        outcome.unmatched = [
            item for index, item in enumerate(extracted) if index not in taken_extracted
        ]

        logger.debug(
            'matcher.matched',
            extracted=len(extracted),
            existing=len(existing),
            matches=len(outcome.matches),
        )
        return outcome


def match(
    extracted: Sequence[ExtractedItem],
    existing: Sequence[ExistingEntitySummary],
) -> MatchOutcome:
    """Match with the default similarity function and threshold."""
    return NameMatcher().match(extracted, existing)

"""
Relevance ranker: scores candidate features/screens against a text fragment.

Scoring is deterministic token overlap expanded by a fixed synonym table,
so "build the login flow" still finds "User Authentication". No AI calls.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..config import config
from ..models.nodes import FeatureNodeData, ScreenNodeData

T = TypeVar('T')

DIRECT_WEIGHT = 1.0
SYNONYM_WEIGHT = 0.6
DETAIL_WEIGHT = 0.7

SYNONYM_GROUPS: tuple[tuple[str, ...], ...] = (
    ('auth', 'authentication', 'login', 'signup', 'register', 'password', 'session', 'oauth'),
    ('database', 'db', 'schema', 'table', 'model', 'data model', 'migration', 'orm', 'rls'),
    ('dashboard', 'analytics', 'stats', 'metrics', 'chart', 'graph', 'reporting'),
    ('ui', 'interface', 'component', 'layout', 'screen', 'page', 'view', 'design'),
    ('api', 'endpoint', 'route', 'rest', 'graphql', 'server', 'backend'),
    ('payment', 'billing', 'stripe', 'subscription', 'checkout', 'pricing', 'plan'),
    ('search', 'filter', 'query', 'sort', 'facet', 'index'),
    ('upload', 'file', 'image', 'media', 'storage', 'blob', 'asset'),
    ('notification', 'email', 'alert', 'push', 'message', 'sms'),
    ('test', 'testing', 'spec', 'coverage', 'unit', 'integration', 'e2e'),
    ('deploy', 'hosting', 'ci', 'cd', 'pipeline', 'vercel', 'docker'),
    ('user', 'profile', 'account', 'settings', 'preferences'),
    ('team', 'workspace', 'organization', 'collaboration', 'invite', 'member', 'role'),
    ('editor', 'rich text', 'markdown', 'content', 'publish', 'draft'),
    ('list', 'listing', 'catalog', 'inventory', 'product', 'item'),
    ('navigation', 'nav', 'sidebar', 'menu', 'header', 'footer', 'breadcrumb'),
    ('form', 'input', 'validation', 'submit', 'field'),
    ('onboarding', 'setup', 'wizard', 'tutorial', 'walkthrough'),
)

_NON_TOKEN = re.compile(r'[^a-z0-9\s-]')


@dataclass(frozen=True)
class ScoredItem(Generic[T]):
    item: T
    score: float


def tokenize(text: str) -> list[str]:
    """Lower-case words of two or more characters; hyphens stay inside words."""
    return [t for t in _NON_TOKEN.sub(' ', text.lower()).split() if len(t) > 1]


def synonyms_for(token: str) -> set[str]:
    """The token plus every member of each synonym group it overlaps."""
    result = {token}
    for group in SYNONYM_GROUPS:
        if any(token in word or word in token for word in group):
            result.update(group)
    return result


def score_text(prompt_tokens: set[str], prompt_synonyms: set[str], candidate_text: str) -> float:
    """Weighted fraction of the candidate's tokens found in the prompt, capped at 1."""
    tokens = tokenize(candidate_text)
    if not tokens:
        return 0.0

    direct = sum(1 for t in tokens if t in prompt_tokens)
    synonym = sum(1 for t in tokens if t not in prompt_tokens and t in prompt_synonyms)
    score = (direct * DIRECT_WEIGHT + synonym * SYNONYM_WEIGHT) / len(tokens)
    return min(score, 1.0)


def rank(
    prompt_text: str,
    candidates: Sequence[T],
    min_score: float | None = None,
    *,
    name: Callable[[T], str],
    detail: Callable[[T], str] | None = None,
) -> list[ScoredItem[T]]:
    """
    Rank candidates by relevance to ``prompt_text``.

    A candidate's score is the larger of its name score and 0.7 times its
    detail (summary/purpose) score, so a weak description never dilutes a
    strong name match.

    Args:
        prompt_text: Text the candidates are compared against
        candidates: Items to score
        min_score: Drop candidates scoring below this (default from config)
        name: Reads the candidate's name
        detail: Reads the candidate's secondary descriptive text

    Returns:
        Scored candidates at or above ``min_score``, highest first; ties
        keep input order
    """
    threshold = config.RELEVANCE_MIN_SCORE if min_score is None else min_score

    prompt_tokens = set(tokenize(prompt_text))
    prompt_synonyms: set[str] = set()
    for token in prompt_tokens:
        prompt_synonyms |= synonyms_for(token)

    scored: list[ScoredItem[T]] = []
    for candidate in candidates:
        score = score_text(prompt_tokens, prompt_synonyms, name(candidate))
        detail_text = detail(candidate) if detail else ''
        if detail_text:
            score = max(score, score_text(prompt_tokens, prompt_synonyms, detail_text) * DETAIL_WEIGHT)
        if score >= threshold:
            scored.append(ScoredItem(item=candidate, score=score))

    scored.sort(key=lambda entry: entry.score, reverse=True)
    return scored


def rank_features(
    prompt_text: str,
    features: Sequence[FeatureNodeData],
    min_score: float | None = None,
) -> list[ScoredItem[FeatureNodeData]]:
    return rank(
        prompt_text,
        features,
        min_score,
        name=lambda f: f.feature_name,
        detail=lambda f: f.summary,
    )


def rank_screens(
    prompt_text: str,
    screens: Sequence[ScreenNodeData],
    min_score: float | None = None,
) -> list[ScoredItem[ScreenNodeData]]:
    return rank(
        prompt_text,
        screens,
        min_score,
        name=lambda s: s.screen_name,
        detail=lambda s: s.purpose,
    )

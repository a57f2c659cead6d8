"""
Heuristic content extraction over conversation text.

Provides three independent scanners:
- features: bullet or numbered items directly under a feature-like heading
- tech mentions: word-boundary patterns mapped to canonical technology names
- tasks: marker-prefixed lines (TODO, FIXME, ...) and checkbox lines

The pattern vocabulary lives in ExtractionPatterns so callers can tune
recall without touching the scanners. None of the scanners raise; no
match yields an empty list.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from ..models.nodes import TechCategory

MIN_FEATURE_LENGTH = 4
MAX_FEATURE_LENGTH = 199
MAX_FEATURES = 20

MAX_TECH_MENTIONS = 15

MIN_TASK_LENGTH = 6
MAX_TASK_LENGTH = 199
MAX_TASKS = 15


@dataclass(frozen=True)
class TechPattern:
    """A canonical technology name, the regex that finds it and its category."""

    name: str
    pattern: str
    category: TechCategory = TechCategory.OTHER
    case_sensitive: bool = False

    def compile(self) -> re.Pattern[str]:
        flags = 0 if self.case_sensitive else re.IGNORECASE
        return re.compile(rf'(?<![\w.]){self.pattern}(?![\w])', flags)


@dataclass(frozen=True)
class TechMention:
    name: str
    category: TechCategory


_F = TechCategory.FRONTEND
_B = TechCategory.BACKEND
_D = TechCategory.DATABASE
_H = TechCategory.HOSTING
_O = TechCategory.OTHER

DEFAULT_TECH_PATTERNS: tuple[TechPattern, ...] = (
    # Frontend frameworks
    TechPattern('React', r'React', _F),
    TechPattern('Next.js', r'Next\.js', _F),
    TechPattern('Vue', r'Vue(?:\.js)?', _F),
    TechPattern('Angular', r'Angular', _F),
    TechPattern('Svelte', r'Svelte(?:Kit)?', _F),
    TechPattern('Remix', r'Remix', _F, case_sensitive=True),
    TechPattern('Astro', r'Astro', _F, case_sensitive=True),
    # Backend runtimes and frameworks
    TechPattern('Node.js', r'Node\.js', _B),
    TechPattern('Express', r'Express', _B, case_sensitive=True),
    TechPattern('Fastify', r'Fastify', _B),
    TechPattern('Hono', r'Hono', _B),
    TechPattern('Bun', r'Bun', _B, case_sensitive=True),
    TechPattern('Deno', r'Deno', _B),
    # Databases and data layers
    TechPattern('PostgreSQL', r'(?:PostgreSQL|Postgres)', _D),
    TechPattern('MySQL', r'MySQL', _D),
    TechPattern('MongoDB', r'MongoDB', _D),
    TechPattern('Redis', r'Redis', _D),
    TechPattern('SQLite', r'SQLite', _D),
    TechPattern('Supabase', r'Supabase', _D),
    TechPattern('Firebase', r'Firebase', _D),
    TechPattern('Prisma', r'Prisma', _D),
    TechPattern('Drizzle', r'Drizzle', _D),
    # Languages
    TechPattern('TypeScript', r'TypeScript', _F),
    TechPattern('JavaScript', r'JavaScript', _F),
    TechPattern('Python', r'Python', _B),
    TechPattern('Rust', r'Rust', _B, case_sensitive=True),
    TechPattern('Go', r'(?:Golang|Go(?=[ \t]+(?:backend|server|service|API|binary)))', _B, case_sensitive=True),
    TechPattern('Ruby', r'Ruby', _B, case_sensitive=True),
    # Styling and component kits
    TechPattern('Tailwind CSS', r'Tailwind(?:\s+CSS)?', _F),
    TechPattern('shadcn', r'shadcn(?:/ui)?', _F),
    TechPattern('Radix', r'Radix', _F),
    TechPattern('Chakra', r'Chakra(?:\s+UI)?', _F),
    TechPattern('MUI', r'MUI', _F, case_sensitive=True),
    # Cloud and hosting
    TechPattern('AWS', r'AWS', _H),
    TechPattern('GCP', r'GCP', _H),
    TechPattern('Azure', r'Azure', _H),
    TechPattern('Vercel', r'Vercel', _H),
    TechPattern('Netlify', r'Netlify', _H),
    TechPattern('Cloudflare', r'Cloudflare', _H),
    # Infrastructure
    TechPattern('Docker', r'Docker', _H),
    TechPattern('Kubernetes', r'Kubernetes', _H),
    TechPattern('Terraform', r'Terraform', _H),
    TechPattern('GitHub Actions', r'GitHub\s+Actions', _O),
    # Testing
    TechPattern('Vitest', r'Vitest', _O),
    TechPattern('Jest', r'Jest', _O, case_sensitive=True),
    TechPattern('Playwright', r'Playwright', _O),
    TechPattern('Cypress', r'Cypress', _O),
    # State management
    TechPattern('Zustand', r'Zustand', _F),
    TechPattern('Redux', r'Redux', _F),
    TechPattern('Jotai', r'Jotai', _F),
    TechPattern('Recoil', r'Recoil', _F, case_sensitive=True),
    # AI providers
    TechPattern('OpenAI', r'OpenAI', _O),
    TechPattern('Anthropic', r'Anthropic', _O),
    TechPattern('Claude', r'Claude', _O),
    TechPattern('GPT-4', r'GPT-4', _O),
)


@dataclass(frozen=True)
class ExtractionPatterns:
    """Vocabulary used by the scanners."""

    feature_headings: tuple[str, ...] = ('features?', 'functionality', 'capabilities', 'requirements')
    tech_patterns: tuple[TechPattern, ...] = DEFAULT_TECH_PATTERNS
    task_markers: tuple[str, ...] = ('TODO', 'FIXME', 'HACK', 'NOTE')

    @property
    def compiled_tech(self) -> tuple[tuple[TechPattern, re.Pattern[str]], ...]:
        return _compile_tech(self.tech_patterns)

    @property
    def bullet_section(self) -> re.Pattern[str]:
        headings = '|'.join(self.feature_headings)
        return re.compile(
            rf'\b(?:{headings})[ \t]*:?[ \t]*\n(?:[ \t]*\n)*((?:[ \t]*[-*][ \t]+.+(?:\n|$))+)',
            re.IGNORECASE,
        )

    @property
    def numbered_section(self) -> re.Pattern[str]:
        headings = '|'.join(self.feature_headings)
        return re.compile(
            rf'\b(?:{headings})[ \t]*:?[ \t]*\n(?:[ \t]*\n)*((?:[ \t]*\d+[.)][ \t]+.+(?:\n|$))+)',
            re.IGNORECASE,
        )

    @property
    def task_line(self) -> re.Pattern[str]:
        markers = '|'.join(re.escape(m) for m in self.task_markers)
        return re.compile(
            rf'^[ \t]*(?:[-*#/]+[ \t]*)?\b(?:{markers})\b[ \t]*:?[ \t]*(.+)$',
            re.IGNORECASE | re.MULTILINE,
        )


@lru_cache(maxsize=8)
def _compile_tech(
    tech_patterns: tuple[TechPattern, ...],
) -> tuple[tuple[TechPattern, re.Pattern[str]], ...]:
    return tuple((tech, tech.compile()) for tech in tech_patterns)


DEFAULT_PATTERNS = ExtractionPatterns()

_BULLET_ITEM = re.compile(r'^[ \t]*[-*][ \t]+(.+)$', re.MULTILINE)
_NUMBERED_ITEM = re.compile(r'^[ \t]*\d+[.)][ \t]+(.+)$', re.MULTILINE)
_CHECKBOX_LINE = re.compile(r'\[[ xX]\][ \t]+(.+)')


def _collect(
    candidates: list[str],
    min_length: int,
    max_length: int,
    limit: int,
) -> list[str]:
    """Dedupe case-insensitively, keep first casing, bound length, cap count."""
    seen: set[str] = set()
    items: list[str] = []
    for candidate in candidates:
        cleaned = candidate.strip()
        key = cleaned.lower()
        if not (min_length <= len(cleaned) <= max_length) or key in seen:
            continue
        seen.add(key)
        items.append(cleaned)
    return items[:limit]


def extract_features(text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> list[str]:
    """Bullet items, then numbered items, found directly under a feature-like heading."""
    candidates: list[str] = []
    for section in patterns.bullet_section.finditer(text):
        candidates.extend(m.group(1) for m in _BULLET_ITEM.finditer(section.group(1)))
    for section in patterns.numbered_section.finditer(text):
        candidates.extend(m.group(1) for m in _NUMBERED_ITEM.finditer(section.group(1)))
    return _collect(candidates, MIN_FEATURE_LENGTH, MAX_FEATURE_LENGTH, MAX_FEATURES)


def extract_tech_mentions(
    text: str,
    patterns: ExtractionPatterns = DEFAULT_PATTERNS,
) -> list[TechMention]:
    """
    Canonical technology names mentioned in ``text``.

    Ordered by first occurrence in the text; each canonical name appears
    once.
    """
    found: list[tuple[int, int, TechMention]] = []
    for order, (tech, compiled) in enumerate(patterns.compiled_tech):
        match = compiled.search(text)
        if match:
            found.append((match.start(), order, TechMention(tech.name, tech.category)))

    found.sort(key=lambda entry: (entry[0], entry[1]))

    mentions: list[TechMention] = []
    seen: set[str] = set()
    for _, _, mention in found:
        key = mention.name.lower()
        if key in seen:
            continue
        seen.add(key)
        mentions.append(mention)
    return mentions[:MAX_TECH_MENTIONS]


def extract_tech(text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> list[str]:
    return [mention.name for mention in extract_tech_mentions(text, patterns)]


def extract_tasks(text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> list[str]:
    """Marker-prefixed task lines, then checkbox lines."""
    candidates = [m.group(1) for m in patterns.task_line.finditer(text)]
    candidates.extend(m.group(1) for m in _CHECKBOX_LINE.finditer(text))
    return _collect(candidates, MIN_TASK_LENGTH, MAX_TASK_LENGTH, MAX_TASKS)

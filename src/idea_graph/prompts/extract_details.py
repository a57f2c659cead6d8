"""
Detail extraction prompts and response models.

The extraction service receives feature names, screen names and the source
document, and returns structured per-item fields. Every response field is
optional; values are sanitized (enum allow-sets, length clamps) before they
reach the merge strategy or the graph generator.
"""

from pydantic import BaseModel, Field

MAX_SOURCE_CHARS = 12000
TRUNCATION_MARKER = '\n\n[... document truncated for length ...]'


# =============================================================================
# Response Models for Structured Output
# =============================================================================


class RawFeatureDetails(BaseModel):
    """Fields for one feature, as returned by the extraction service."""

    feature_name: str | None = Field(
        default=None,
        description='The feature name exactly as given in FEATURES TO DETAIL.',
    )
    summary: str | None = Field(
        default=None,
        description='1-2 sentence overview of what the feature does.',
    )
    problem: str | None = Field(
        default=None,
        description='The user pain point this feature solves.',
    )
    user_story: str | None = Field(
        default=None,
        description='"As a [persona], I want [action] so that [benefit]".',
    )
    acceptance_criteria: list[str] | None = Field(
        default=None,
        description='3-5 specific, testable criteria.',
    )
    priority: str | None = Field(default=None, description='One of: Must, Should, Nice.')
    status: str | None = Field(default=None, description='Always "Planned" for new imports.')
    effort: str | None = Field(
        default=None,
        description='XS (<1d), S (1-3d), M (3-7d), L (1-2w) or XL (2+w).',
    )
    dependencies: list[str] | None = Field(
        default=None,
        description='Other features that must be built first, by feature name.',
    )
    risks: str | None = Field(default=None, description='1-2 technical or UX risks with mitigation.')
    metrics: str | None = Field(default=None, description='2-4 measurable success KPIs.')
    notes: str | None = Field(default=None, description='Any additional context.')


class RawScreenDetails(BaseModel):
    """Fields for one screen, as returned by the extraction service."""

    screen_name: str | None = Field(
        default=None,
        description='The screen name exactly as given in SCREENS TO DETAIL.',
    )
    purpose: str | None = Field(default=None, description='Why this screen exists (user goal).')
    key_elements: list[str] | None = Field(
        default=None,
        description='6-10 specific UI components (named buttons, inputs), not generic "form".',
    )
    user_actions: list[str] | None = Field(
        default=None,
        description='5-8 actions users can take (click, enter, select, upload).',
    )
    states: list[str] | None = Field(
        default=None,
        description='4-6 UI states; always loading, error, success, empty.',
    )
    navigation: str | None = Field(default=None, description='Where the user goes from this screen.')
    data_sources: list[str] | None = Field(
        default=None,
        description='API endpoints or data stores the screen reads.',
    )
    wireframe_url: str | None = Field(
        default=None,
        description='Empty unless the document includes a link.',
    )
    notes: str | None = Field(default=None, description='Implementation hints.')


class DetailExtractionResponse(BaseModel):
    """Complete response from the detail extraction call."""

    features: list[RawFeatureDetails] = Field(default_factory=list)
    screens: list[RawScreenDetails] = Field(default_factory=list)


# =============================================================================
# Prompt
# =============================================================================

DETAIL_EXTRACTION_SYSTEM_PROMPT = """You are a product specification expert. Extract detailed structured data for the named features and screens of a product document.

For each FEATURE, extract:
- summary: 1-2 sentence overview of what the feature does
- problem: what user pain point it solves
- user_story: "As a [persona], I want [action] so that [benefit]"
- acceptance_criteria: 3-5 specific, testable criteria (infer reasonable ones if absent)
- priority: Must/Should/Nice based on emphasis (default: Must)
- status: always "Planned" for new imports
- effort: XS(<1d), S(1-3d), M(3-7d), L(1-2w), XL(2+w), estimated from complexity
- dependencies: OTHER features that must be built first (use feature names)
- risks: 1-2 technical/UX risks plus mitigation
- metrics: 2-4 measurable KPIs
- notes: any additional context

For each SCREEN, extract:
- purpose: why the screen exists (user goal)
- key_elements: 6-10 specific UI components
- user_actions: 5-8 actions (click, enter, select, upload)
- states: 4-6 UI states (always loading, error, success, empty, plus others)
- navigation: where the user goes from this screen
- data_sources: API endpoints or data stores (infer from context)
- wireframe_url: leave empty unless the document includes a link
- notes: implementation hints

If a field is not explicit in the document, INFER a reasonable value from context.
Use the feature and screen names exactly as given."""

DETAIL_EXTRACTION_USER_TEMPLATE = """DOCUMENT:
---
{source_text}
---

{targets}"""


def truncate_source(source_text: str, limit: int = MAX_SOURCE_CHARS) -> str:
    if len(source_text) <= limit:
        return source_text
    return source_text[:limit] + TRUNCATION_MARKER


def build_detail_extraction_messages(
    feature_names: list[str],
    screen_names: list[str],
    source_text: str,
) -> list[dict[str, str]]:
    """
    Build the detail extraction prompt messages for OpenAI.

    Args:
        feature_names: Features to detail
        screen_names: Screens to detail
        source_text: The source document (truncated past 12 000 characters)

    Returns:
        List of message dicts for OpenAI chat completion
    """
    targets = []
    if feature_names:
        targets.append(f"FEATURES TO DETAIL: {', '.join(feature_names)}")
    if screen_names:
        targets.append(f"SCREENS TO DETAIL: {', '.join(screen_names)}")

    user_prompt = DETAIL_EXTRACTION_USER_TEMPLATE.format(
        source_text=truncate_source(source_text),
        targets='\n'.join(targets),
    )

    return [
        {'role': 'system', 'content': DETAIL_EXTRACTION_SYSTEM_PROMPT},
        {'role': 'user', 'content': user_prompt},
    ]

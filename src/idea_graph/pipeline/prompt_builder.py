"""
Rich work-item prompt builder.

Expands a one-line prompt into a markdown brief using the surrounding
project: idea context, tech stack grouped by category, the features and
screens the relevance ranker picks for the prompt, requirements, expected
output and dependencies.
"""

from collections.abc import Sequence

from ..models.nodes import FeatureNodeData, IdeaNodeData, ScreenNodeData, TechStackNodeData
from .ranker import rank_features, rank_screens

MAX_RELEVANT_FEATURES = 4
MAX_RELEVANT_SCREENS = 3
RELEVANCE_THRESHOLD = 0.05

MAX_ACCEPTANCE_CRITERIA = 5
MAX_IMPLEMENTATION_STEPS = 6
MAX_KEY_ELEMENTS = 8
MAX_CONSTRAINTS = 4
MAX_DEPENDENCIES = 6

BASE_REQUIREMENTS = (
    'Follow existing patterns and conventions in the codebase',
    'Use explicit types wherever the stack supports them',
    'Include error handling for user-facing operations',
)
EXPECTED_OUTPUT = (
    'Working implementation that satisfies the acceptance criteria above',
    'All new code covered by tests for critical paths',
    'No regressions to existing functionality',
)


def _tech_stack_line(tech_stack: Sequence[TechStackNodeData]) -> str:
    grouped: dict[str, list[str]] = {}
    for tech in tech_stack:
        entry = f'{tech.tool_name} ({tech.notes})' if tech.notes else tech.tool_name
        grouped.setdefault(tech.category.value, []).append(entry)
    return ' | '.join(f"{category}: {', '.join(tools)}" for category, tools in grouped.items())


def build_rich_prompt(
    prompt_text: str,
    idea: IdeaNodeData,
    features: Sequence[FeatureNodeData] = (),
    screens: Sequence[ScreenNodeData] = (),
    tech_stack: Sequence[TechStackNodeData] = (),
) -> str:
    """
    Build the markdown brief for one prompt.

    Args:
        prompt_text: The one-line task
        idea: Project idea fields
        features: All project features (ranked against the task)
        screens: All project screens (ranked against the task)
        tech_stack: Project technologies

    Returns:
        Markdown text
    """
    lines: list[str] = [f'## Task: {prompt_text}', '', '### Project Context']

    if idea.app_name:
        lines.append(f"- **App:** {idea.app_name}: {idea.description or 'No description'}")
    if idea.target_user:
        lines.append(f'- **Target User:** {idea.target_user}')
    if idea.core_problem:
        lines.append(f'- **Core Problem:** {idea.core_problem}')
    if tech_stack:
        lines.append(f'- **Tech Stack:** {_tech_stack_line(tech_stack)}')
    lines.append('')

    top_features = [
        scored.item
        for scored in rank_features(prompt_text, features, RELEVANCE_THRESHOLD)[:MAX_RELEVANT_FEATURES]
    ]
    if top_features:
        lines.append('### Relevant Features')
        for feature in top_features:
            lines.append(f"- **{feature.feature_name}**: {feature.summary or 'No summary'}")
            if feature.user_story:
                lines.append(f'  - User Story: {feature.user_story}')
            if feature.acceptance_criteria:
                lines.append('  - Acceptance Criteria:')
                lines.extend(f'    - {c}' for c in feature.acceptance_criteria[:MAX_ACCEPTANCE_CRITERIA])
            if feature.implementation_steps:
                lines.append('  - Implementation Steps:')
                lines.extend(f'    - {s}' for s in feature.implementation_steps[:MAX_IMPLEMENTATION_STEPS])
        lines.append('')

    top_screens = [
        scored.item
        for scored in rank_screens(prompt_text, screens, RELEVANCE_THRESHOLD)[:MAX_RELEVANT_SCREENS]
    ]
    if top_screens:
        lines.append('### Relevant Screens')
        for screen in top_screens:
            lines.append(f"- **{screen.screen_name}**: {screen.purpose or 'No purpose defined'}")
            if screen.key_elements:
                lines.append(f"  - Key Elements: {', '.join(screen.key_elements[:MAX_KEY_ELEMENTS])}")
            if screen.states:
                lines.append(f"  - States: {', '.join(screen.states)}")
        lines.append('')

    lines.append('### Requirements')
    lines.extend(f'- {r}' for r in BASE_REQUIREMENTS)
    constraints = [f.technical_constraints for f in top_features if f.technical_constraints]
    constraints.extend(idea.constraints)
    lines.extend(f'- {c}' for c in constraints[:MAX_CONSTRAINTS])
    lines.append('')

    lines.append('### Expected Output')
    lines.extend(f'- {o}' for o in EXPECTED_OUTPUT)
    lines.append('')

    dependencies = list(dict.fromkeys(d for f in top_features for d in f.dependencies))
    if dependencies:
        lines.append('### Dependencies')
        lines.append('These features/components must be in place first:')
        lines.extend(f'- {d}' for d in dependencies[:MAX_DEPENDENCIES])
        lines.append('')

    return '\n'.join(lines)

"""
Wizard answers -> fresh project graph.

The wizard collects free-form answers; feature and screen fields may be
comma/newline lists, JSON arrays or tables and go through the list
normalizer before the graph generator lays them out.
"""

from pydantic import BaseModel

from ..config import config
from ..models.nodes import IdeaNodeData, TargetTool
from .document import parse_tech_item
from .generator import GeneratedGraph, generate_graph
from .normalizer import normalize_feature_list, normalize_item_list, normalize_screen_list


class WizardAnswers(BaseModel):
    """Free-form answers from the idea wizard."""

    app_name: str = ''
    description: str = ''
    target_user: str = ''
    core_problem: str = ''
    features: str = ''
    screens: str = ''
    tech_stack: str = ''
    target_tool: TargetTool = TargetTool.CLAUDE


def wizard_to_graph(answers: WizardAnswers, timestamp: int | None = None) -> GeneratedGraph:
    features = normalize_feature_list(answers.features)[: config.MAX_FEATURES]
    screens = normalize_screen_list(answers.screens)[: config.MAX_SCREENS]
    tech = [
        parse_tech_item(item)
        for item in normalize_item_list(answers.tech_stack, ('tool_name', 'toolName', 'name'))
    ][: config.MAX_TECH]

    idea = IdeaNodeData(
        app_name=answers.app_name.strip(),
        description=answers.description.strip(),
        target_user=answers.target_user.strip(),
        core_problem=answers.core_problem.strip(),
    )
    return generate_graph(
        idea,
        features,
        screens,
        tech,
        target_tool=answers.target_tool,
        timestamp=timestamp,
    )

"""POST endpoints exposing the import pipeline operations."""

from typing import Literal

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from idea_graph.errors import PipelineError, ValidationError
from idea_graph.models.conversation import FormatHint, RawInput
from idea_graph.models.nodes import FeatureNodeData, ScreenNodeData
from idea_graph.pipeline.composer import parse_conversation
from idea_graph.pipeline.normalizer import normalize_feature_list, normalize_screen_list
from idea_graph.pipeline.ranker import ScoredItem, rank_features, rank_screens
from idea_graph.pipeline.wizard import WizardAnswers, wizard_to_graph
from idea_graph.project_graph import ProjectGraph

logger = structlog.get_logger(__name__)

router = APIRouter()


class ParseRequest(BaseModel):
    text: str


class NormalizeRequest(BaseModel):
    raw: str
    kind: Literal["feature", "screen"] = "feature"


class RankRequest(BaseModel):
    prompt: str
    features: list[FeatureNodeData] = Field(default_factory=list)
    screens: list[ScreenNodeData] = Field(default_factory=list)
    min_score: float | None = None


class ImportRequest(BaseModel):
    text: str
    format_hint: FormatHint | None = None
    graph: ProjectGraph | None = None
    project_id: str | None = None


def _scores(ranked: list[ScoredItem], name_field: str) -> list[dict]:
    return [
        {"name": getattr(scored.item, name_field), "score": round(scored.score, 4)}
        for scored in ranked
    ]


@router.post("/parse")
async def parse(body: ParseRequest):
    """Detect the input shape, parse turns and compose the markdown document."""
    return parse_conversation(body.text).to_dict()


@router.post("/normalize")
async def normalize(body: NormalizeRequest):
    """Clean a raw feature or screen list into display names."""
    if body.kind == "screen":
        items = normalize_screen_list(body.raw)
    else:
        items = normalize_feature_list(body.raw)
    return {"items": items}


@router.post("/rank")
async def rank(body: RankRequest):
    """Score features and screens against a prompt, best first."""
    return {
        "features": _scores(rank_features(body.prompt, body.features, body.min_score), "feature_name"),
        "screens": _scores(rank_screens(body.prompt, body.screens, body.min_score), "screen_name"),
    }


@router.post("/generate")
async def generate(answers: WizardAnswers):
    """Build a fresh graph from wizard answers."""
    return wizard_to_graph(answers).to_dict()


@router.post("/import")
async def import_text(body: ImportRequest, request: Request):
    """Import text into a new graph, or merge it into the supplied graph."""
    log = logger.bind(project_id=body.project_id, format_hint=body.format_hint)
    log.info("import.received", content_length=len(body.text))

    try:
        result = await request.app.state.pipeline.process(
            RawInput(text=body.text, format_hint=body.format_hint),
            body.graph,
            project_id=body.project_id,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except PipelineError as e:
        log.error("import.failed", error=str(e), error_type=type(e).__name__)
        return JSONResponse(status_code=500, content={"error": str(e)})

    log.info(
        "import.complete",
        nodes=len(result.nodes),
        updates=len(result.updates),
        processing_time_ms=result.processing_time_ms,
    )
    return result.to_dict()

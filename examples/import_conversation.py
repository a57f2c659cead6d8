#!/usr/bin/env python3
"""
Example: Import an AI conversation, then merge a follow-up spec into it.

This script demonstrates:
1. A fresh import of a plain dialogue into an empty project graph
2. A smart import of a pasted spec into the same graph
3. Applying field updates and new nodes to the caller-owned graph

Detail extraction runs when OPENAI_API_KEY is set; otherwise the merge
imports names only.

Usage:
    python examples/import_conversation.py [path/to/conversation.txt]
"""

import asyncio
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from dotenv import load_dotenv

# Load environment variables
env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from idea_graph.clients.openai_client import OpenAIClient
from idea_graph.config import config
from idea_graph.models.conversation import FormatHint, RawInput
from idea_graph.models.merge import SmartImportResult
from idea_graph.pipeline import ImportPipeline, OpenAIDetailExtractor
from idea_graph.project_graph import ProjectGraph


SAMPLE_CONVERSATION = """
Human: I want to build a recipe sharing app for home cooks.
Assistant: Great idea. Core features could be:
- Recipe upload with photos
- Ingredient search
- Meal planning calendar
We could build it with Next.js and Supabase, deployed on Vercel.
Human: Add a shopping list generated from the meal plan.
Assistant: Sure. TODO: decide on offline support for the shopping list.
"""

FOLLOW_UP_SPEC = """
App Name: Pantry Pal
Target User: Busy home cooks
Problem: Planning meals and shopping takes too long

## Features
- Ingredient Search
- Shopping List
- Nutrition Facts

## Screens
- Recipe Detail
- Weekly Planner
"""


def print_nodes(graph: ProjectGraph) -> None:
    for node in graph.nodes:
        print(f"    [{node.type:>9}] {node.name or '(unnamed)'}")


async def main():
    """Run the example import demonstration."""
    print("=" * 60)
    print("Idea Graph Import Example")
    print("=" * 60)

    if len(sys.argv) > 1:
        conversation = Path(sys.argv[1]).read_text()
    else:
        conversation = SAMPLE_CONVERSATION

    missing = config.validate()
    openai = None if missing else OpenAIClient()
    if openai is None:
        print(f"\n{', '.join(missing)} not set: merging names only")

    pipeline = ImportPipeline(OpenAIDetailExtractor(openai) if openai else None)
    graph = ProjectGraph()

    try:
        # =====================================================================
        # Fresh import
        # =====================================================================
        print("\n" + "-" * 60)
        print("Importing conversation into an empty project...")
        print("-" * 60)

        result1 = await pipeline.process(RawInput(text=conversation))
        graph.extend(result1.nodes, result1.edges)

        print(f"\nResult:")
        print(f"  Source: {result1.source.value}")
        print(f"  Turns: {result1.turn_count}")
        print(f"  Nodes created: {len(result1.nodes)}")
        print(f"  Edges created: {len(result1.edges)}")
        print(f"  Processing time: {result1.processing_time_ms}ms")
        print("\n  Composed document:")
        for line in result1.composed_document.splitlines():
            print(f"    | {line}")

        # =====================================================================
        # Smart import
        # =====================================================================
        print("\n" + "-" * 60)
        print("Merging follow-up spec into the project...")
        print("-" * 60)

        result2 = await pipeline.process(
            RawInput(text=FOLLOW_UP_SPEC, format_hint=FormatHint.DOCUMENT),
            graph,
        )
        graph.apply(
            SmartImportResult(
                updates=result2.updates,
                new_nodes=result2.nodes,
                new_edges=result2.edges,
            )
        )

        summary = result2.summary
        print(f"\nResult:")
        print(f"  Nodes updated: {summary.nodes_updated}")
        print(f"  Fields filled: {summary.fields_filled_total}")
        print(f"  Nodes created: {summary.nodes_created}")
        print(f"  Matched but unchanged: {summary.nodes_skipped}")
        for match in summary.match_details:
            print(f"    - {match.extracted_name} -> {match.existing_node_id} ({match.confidence:.2f})")
        for warning in result2.warnings:
            print(f"  WARNING: {warning}")

        # =====================================================================
        # Final state
        # =====================================================================
        print("\n" + "=" * 60)
        print("Final project graph")
        print("=" * 60)
        print_nodes(graph)
        print(f"\n  Total nodes: {len(graph.nodes)}")
        print(f"  Total edges: {len(graph.edges)}")

    finally:
        if openai is not None:
            await openai.close()


if __name__ == "__main__":
    asyncio.run(main())

#!/usr/bin/env python3
"""Ad hoc runner for the Meal Creation Workflow.

Create one recipe from a meal context without writing any code.

Usage:
    python query.py '{"timeOfDay": "dinner", "eaters": ["Marie"], "complexity": "easy", "duration": "short"}'
    python query.py --debug '<context JSON>'          # Also show draft, review and recipe JSON
    python query.py --variant direct '<context JSON>'  # Skip the sous-chef review

Features:
- Direct workflow execution via execute()
- Recipe rendered as markdown in the terminal
- Debug mode to display every intermediate step output
- Clean exit after completion
"""

import asyncio
import sys
from typing import Optional

from rich.console import Console
from rich.markdown import Markdown

from src.utils.errors import InputValidationError
from src.utils.logger import logger
from src.workflows.meal_creation import MealCreationRun, create_meal_creation_workflow

console = Console()


def print_debug(run: MealCreationRun) -> None:
    """Display the intermediate outputs of a run."""
    console.print("[bold cyan]Debug Mode: Step Outputs[/bold cyan]")
    console.print("[dim]" + "=" * 60 + "[/dim]")
    console.print("[bold]Instructions[/bold]")
    console.print(run.instructions or "")
    console.print("[bold]Draft[/bold]")
    console.print(run.draft or "")
    if run.verdict is not None:
        console.print("[bold]Review[/bold]")
        console.print_json(data=run.verdict.model_dump())
        if run.final_text != run.draft:
            console.print("[bold]Revised recipe[/bold]")
            console.print(run.final_text or "")
    console.print("[bold]Recipe JSON[/bold]")
    console.print_json(data=run.recipe.model_dump(by_alias=True))
    console.print("[dim]" + "=" * 60 + "[/dim]")
    console.print()


def run_query(context_json: str, debug: bool = False, variant: Optional[str] = None) -> None:
    """Run the workflow once and print the recipe.

    Args:
        context_json: Meal context as a JSON object.
        debug: If True, display every intermediate output.
        variant: "reviewed" or "direct"; defaults to PIPELINE_VARIANT.
    """
    try:
        workflow = create_meal_creation_workflow(variant=variant)
        logger.info(f"Running meal context: {context_json}")
        logger.info("---")

        run = asyncio.run(workflow.execute(context_json))

        logger.info("---")
        console.print()

        if debug:
            print_debug(run)

        console.print(Markdown(run.recipe.to_markdown()))

    except KeyboardInterrupt:
        logger.info("\nRun interrupted by user.")
        sys.exit(0)
    except InputValidationError as e:
        console.print(f"[red]✗ Invalid meal context: {e}[/red]")
        for error in e.errors:
            console.print(f"[red]  - {'.'.join(str(p) for p in error.get('loc', ()))}: {error.get('msg')}[/red]")
        sys.exit(2)
    except Exception as e:
        logger.error(f"Workflow execution failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python query.py [--debug] [--variant reviewed|direct] '<meal context JSON>'")
        print("")
        print("Examples:")
        print("  python query.py '{\"timeOfDay\": \"dinner\", \"eaters\": [\"Marie\"], \"complexity\": \"easy\", \"duration\": \"short\"}'")
        print("  python query.py --debug '{\"timeOfDay\": \"lunch\", \"eaters\": \"Marie,Guillaume\", \"complexity\": \"medium\", \"duration\": \"long\", \"season\": \"winter\"}'")
        print("  python query.py --variant direct '{\"timeOfDay\": \"breakfast\", \"eaters\": [\"Guillaume\"], \"complexity\": \"easy\", \"duration\": \"short\"}'")
        sys.exit(1)

    debug_mode = False
    variant = None
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        if sys.argv[argv_start] == "--debug":
            debug_mode = True
            argv_start += 1
        elif sys.argv[argv_start] == "--variant":
            argv_start += 1
            if argv_start >= len(sys.argv):
                print("Error: --variant flag requires 'reviewed' or 'direct'")
                sys.exit(1)
            variant = sys.argv[argv_start]
            argv_start += 1
        else:
            print(f"Unknown flag: {sys.argv[argv_start]}")
            sys.exit(1)

    if argv_start >= len(sys.argv):
        print("Error: No meal context provided")
        print("Usage: python query.py [--debug] [--variant reviewed|direct] '<meal context JSON>'")
        sys.exit(1)

    # Join all arguments after flags (handles unquoted JSON split by the shell)
    context_json = " ".join(sys.argv[argv_start:])

    run_query(context_json, debug=debug_mode, variant=variant)

"""Meal creation workflow driver.

Runs the steps strictly in sequence, each step's output feeding the next:

    reviewed: validate → compose → create-meal → review-recipe → correct-recipe → recipe-to-json
    direct:   validate → compose → create-meal → recipe-to-json

The two variants are alternative configurations. A failure in any step aborts
the run; no partial recipe is ever returned.
"""

import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from src.agents.base import GenerativeModel
from src.models.models import Household, MealContext, ReviewVerdict, StructuredRecipe
from src.prompts.composer import compose_instructions
from src.utils.config import Config, config
from src.utils.errors import MealCreationError
from src.utils.household import load_household
from src.utils.logger import logger, step_extra
from src.workflows.steps import (
    draft_recipe,
    format_recipe,
    review_recipe,
    revise_recipe,
    revision_state,
    validate_context,
)


class PipelineVariant(str, Enum):
    REVIEWED = "reviewed"
    DIRECT = "direct"


@dataclass
class MealCreationRun:
    """Outputs of every step of one run, filled in as the run progresses."""

    run_id: str
    variant: PipelineVariant
    context: Optional[MealContext] = None
    instructions: Optional[str] = None
    draft: Optional[str] = None
    verdict: Optional[ReviewVerdict] = None
    final_text: Optional[str] = None
    recipe: Optional[StructuredRecipe] = None


class MealCreationWorkflow:
    """Chef → (sous-chef → revision) → formatter pipeline for one household."""

    def __init__(
        self,
        *,
        chef: GenerativeModel,
        formatter: GenerativeModel,
        household: Household,
        variant: Union[PipelineVariant, str] = PipelineVariant.REVIEWED,
        sous_chef: Optional[GenerativeModel] = None,
    ) -> None:
        self.variant = PipelineVariant(variant)
        if self.variant is PipelineVariant.REVIEWED and sous_chef is None:
            raise ValueError("The reviewed variant requires a sous_chef model")
        self.chef = chef
        self.formatter = formatter
        self.sous_chef = sous_chef
        self.household = household

    @property
    def steps(self) -> list[str]:
        if self.variant is PipelineVariant.REVIEWED:
            return [
                "validate-context",
                "summarize-instructions",
                "create-meal",
                "review-recipe",
                "correct-recipe",
                "recipe-to-json",
            ]
        return ["validate-context", "summarize-instructions", "create-meal", "recipe-to-json"]

    def _log_step(self, run: MealCreationRun, step: str, message: str) -> None:
        position = self.steps.index(step) + 1
        logger.info(f"Step {position}/{len(self.steps)}: {message}", extra=step_extra(run.run_id, step))

    async def run(self, payload: Union[MealContext, dict[str, Any], str]) -> StructuredRecipe:
        """Create one recipe from a meal context.

        Args:
            payload: MealContext, dict or JSON string.

        Returns:
            The validated StructuredRecipe.

        Raises:
            InputValidationError: Invalid context, before any model call.
            ExternalCallError: A model call failed.
            SchemaConformanceError: Structured output did not validate.
        """
        run = await self.execute(payload)
        return run.recipe

    async def execute(self, payload: Union[MealContext, dict[str, Any], str]) -> MealCreationRun:
        """Like run(), but returns every intermediate output of the run."""
        run = MealCreationRun(run_id=uuid.uuid4().hex[:12], variant=self.variant)
        started = time.perf_counter()
        step = "validate-context"
        try:
            self._log_step(run, step, "Validating meal context...")
            run.context = validate_context(
                payload,
                self.household,
                strict_eaters=self.variant is PipelineVariant.DIRECT,
            )

            step = "summarize-instructions"
            self._log_step(run, step, f"Composing instructions for {', '.join(run.context.eaters)}...")
            run.instructions = compose_instructions(
                run.context,
                self.household,
                mandatory_ingredients=self.variant is PipelineVariant.DIRECT,
            )

            step = "create-meal"
            self._log_step(run, step, "Chef is drafting the recipe...")
            run.draft = await draft_recipe(run.instructions, run.context, self.chef)
            run.final_text = run.draft

            if self.variant is PipelineVariant.REVIEWED:
                step = "review-recipe"
                self._log_step(run, step, "Sous-chef is reviewing the draft...")
                run.verdict = await review_recipe(run.instructions, run.draft, self.sous_chef)

                step = "correct-recipe"
                state = revision_state(run.verdict)
                self._log_step(run, step, f"Review outcome: {state.value}")
                run.final_text = await revise_recipe(run.instructions, run.draft, run.verdict, self.chef)

            step = "recipe-to-json"
            self._log_step(run, step, "Formatting the recipe...")
            run.recipe = await format_recipe(run.final_text, self.formatter)
        except MealCreationError as e:
            e.step = e.step or step
            logger.error(f"Run failed at {e.step}: {e}", extra=step_extra(run.run_id, e.step))
            raise
        except Exception as e:
            logger.error(f"Run failed at {step}: {e}", exc_info=True, extra=step_extra(run.run_id, step))
            raise

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"✓ Recipe '{run.recipe.name}' created in {elapsed_ms} ms",
            extra=step_extra(run.run_id, "done"),
        )
        return run


def create_meal_creation_workflow(
    variant: Optional[Union[PipelineVariant, str]] = None,
    household: Optional[Household] = None,
    cfg: Config = config,
) -> MealCreationWorkflow:
    """Factory: validate configuration, load the household and build the agents.

    Args:
        variant: Pipeline variant. Defaults to cfg.PIPELINE_VARIANT.
        household: Reference data. Defaults to the record set in cfg.HOUSEHOLD_FILE.
        cfg: Configuration to build from.

    Returns:
        Ready-to-run MealCreationWorkflow.

    Raises:
        ValueError: If the configuration is invalid.
    """
    # agno is only needed once real agents are built
    from src.agents.agent import create_chef_agent, create_formatter_agent, create_sous_chef_agent

    logger.info("=== Initializing Meal Creation Workflow ===")
    cfg.validate()
    variant = PipelineVariant(variant or cfg.PIPELINE_VARIANT)
    household = household or load_household(cfg.HOUSEHOLD_FILE)

    workflow = MealCreationWorkflow(
        chef=create_chef_agent(cfg),
        formatter=create_formatter_agent(cfg),
        sous_chef=create_sous_chef_agent(cfg) if variant is PipelineVariant.REVIEWED else None,
        household=household,
        variant=variant,
    )
    logger.info(f"=== Workflow ready ({variant.value} variant, household '{household.family_name}') ===")
    return workflow

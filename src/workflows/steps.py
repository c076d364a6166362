"""Meal creation steps.

Each step takes the previous step's output (plus read-only context) and
returns the next input. Steps never retry and never recover: any failure is
raised to the workflow driver, which aborts the run.
"""

from enum import Enum
from typing import Any, Union

from pydantic import ValidationError

from src.agents.base import GenerativeModel, SchemaT
from src.hooks.normalize_input import normalize_context_input
from src.models.models import Household, MealContext, ReviewVerdict, StructuredRecipe
from src.prompts.prompts import get_draft_prompt, get_format_prompt, get_review_prompt, get_revision_prompt
from src.utils.errors import ExternalCallError, InputValidationError, SchemaConformanceError
from src.utils.logger import logger


MISSING_FEEDBACK = (
    "The sous-chef did not accept the recipe but gave no details. "
    "Check it again against the family's restrictions, the meal planner instructions and the context."
)


class RevisionState(str, Enum):
    """Outcome of the review: the draft is served as is, or revised once."""

    ACCEPTED = "accepted"
    NEEDS_REVISION = "needs-revision"


def _conform(value: Any, schema: type[SchemaT], step: str) -> SchemaT:
    """Check a structured answer against its schema; plain dicts are validated."""
    if isinstance(value, schema):
        return value
    try:
        return schema.model_validate(value)
    except ValidationError as e:
        raise SchemaConformanceError(
            f"Output does not match {schema.__name__}: {e.error_count()} error(s)", step=step
        ) from e


def validate_context(
    payload: Union[MealContext, dict[str, Any], str],
    household: Household,
    *,
    strict_eaters: bool = False,
) -> MealContext:
    """Validate the caller's meal context.

    Args:
        payload: MealContext, dict or JSON string.
        household: Reference data used to check eater identifiers.
        strict_eaters: Reject eaters that are not household members (direct variant).
            When False, unknown eaters are logged and ignored by the composer.

    Returns:
        Validated MealContext.

    Raises:
        InputValidationError: On missing or out-of-range fields, empty eaters, or
            unknown eaters in strict mode.
    """
    if isinstance(payload, MealContext):
        context = payload
    else:
        data = normalize_context_input(payload)
        try:
            context = MealContext.model_validate(data)
        except ValidationError as e:
            raise InputValidationError(
                f"Invalid meal context: {e.error_count()} error(s)", errors=e.errors(include_url=False)
            ) from e

    unknown = [eater for eater in context.eaters if household.find_member(eater) is None]
    if unknown and strict_eaters:
        known = ", ".join(member.name for member in household.members)
        raise InputValidationError(f"Unknown eaters {unknown}; expected any of: {known}")
    if unknown:
        logger.warning(f"Ignoring eaters without a profile: {unknown}")
    return context


async def draft_recipe(instructions: str, context: MealContext, chef: GenerativeModel) -> str:
    """Ask the chef for a free-text recipe."""
    draft = await chef.generate(get_draft_prompt(instructions, context.time_of_day))
    if not draft or not draft.strip():
        raise ExternalCallError("Chef returned an empty recipe", step="create-meal")
    return draft


async def review_recipe(instructions: str, draft: str, sous_chef: GenerativeModel) -> ReviewVerdict:
    """Ask the sous-chef for an accept/revise verdict on the draft."""
    verdict = await sous_chef.generate_structured(get_review_prompt(instructions, draft), ReviewVerdict)
    return _conform(verdict, ReviewVerdict, "review-recipe")


def revision_state(verdict: ReviewVerdict) -> RevisionState:
    return RevisionState.ACCEPTED if verdict.accepted else RevisionState.NEEDS_REVISION


async def revise_recipe(
    instructions: str,
    draft: str,
    verdict: ReviewVerdict,
    chef: GenerativeModel,
) -> str:
    """Apply the verdict: pass an accepted draft through, otherwise redraft exactly once.

    The revised draft is final; it is not reviewed again.
    """
    if revision_state(verdict) is RevisionState.ACCEPTED:
        return draft

    feedback = (verdict.feedback or "").strip() or MISSING_FEEDBACK
    revised = await chef.generate(get_revision_prompt(instructions, draft, feedback))
    if not revised or not revised.strip():
        raise ExternalCallError("Chef returned an empty revision", step="correct-recipe")
    return revised


async def format_recipe(recipe_text: str, formatter: GenerativeModel) -> StructuredRecipe:
    """Convert the final text into a StructuredRecipe (shape only, content unchanged)."""
    if not recipe_text or not recipe_text.strip():
        raise SchemaConformanceError("Cannot format an empty recipe", step="recipe-to-json")

    recipe = await formatter.generate_structured(get_format_prompt(recipe_text), StructuredRecipe)
    return _conform(recipe, StructuredRecipe, "recipe-to-json")

"""Unit tests for the individual workflow steps."""

import pytest

from src.models.models import MealContext, ReviewVerdict, StructuredRecipe
from src.utils.errors import ExternalCallError, InputValidationError, SchemaConformanceError
from src.workflows.steps import (
    MISSING_FEEDBACK,
    RevisionState,
    draft_recipe,
    format_recipe,
    review_recipe,
    revise_recipe,
    revision_state,
    validate_context,
)


class TestValidateContext:
    def test_dict_payload(self, household, marie_context):
        context = validate_context(marie_context, household)
        assert isinstance(context, MealContext)
        assert context.eaters == ("Marie",)

    def test_json_payload(self, household):
        context = validate_context(
            '{"timeOfDay": "Breakfast", "eaters": "Marie,Guillaume", "complexity": "easy", "duration": "short"}',
            household,
        )
        assert context.time_of_day == "breakfast"
        assert context.eaters == ("Marie", "Guillaume")

    def test_context_instance_passes_through(self, household, marie_context):
        context = MealContext.model_validate(marie_context)
        assert validate_context(context, household) is context

    def test_empty_eaters(self, household, marie_context):
        marie_context["eaters"] = []
        with pytest.raises(InputValidationError) as exc:
            validate_context(marie_context, household)
        assert exc.value.step == "validate-context"
        assert exc.value.errors[0]["loc"] == ("eaters",)

    def test_invalid_enum_reports_errors(self, household, marie_context):
        marie_context["timeOfDay"] = "supper"
        with pytest.raises(InputValidationError) as exc:
            validate_context(marie_context, household)
        assert isinstance(exc.value, ValueError)
        assert len(exc.value.errors) == 1

    def test_unknown_eater_ignored_when_lenient(self, household, marie_context):
        marie_context["eaters"] = ["Marie", "Paul"]
        context = validate_context(marie_context, household)
        assert context.eaters == ("Marie", "Paul")

    def test_unknown_eater_rejected_when_strict(self, household, marie_context):
        marie_context["eaters"] = ["Marie", "Paul"]
        with pytest.raises(InputValidationError, match="Paul"):
            validate_context(marie_context, household, strict_eaters=True)

    def test_strict_matching_is_case_insensitive(self, household, marie_context):
        marie_context["eaters"] = ["marie", "GUILLAUME"]
        context = validate_context(marie_context, household, strict_eaters=True)
        assert context.eaters == ("marie", "GUILLAUME")


class TestDraftRecipe:
    @pytest.mark.asyncio
    async def test_draft_prompt_wraps_instructions(self, scripted_model, household, marie_context):
        chef = scripted_model(texts=["Recipe text"])
        context = MealContext.model_validate(marie_context)

        draft = await draft_recipe("BRIEF", context, chef)

        assert draft == "Recipe text"
        assert chef.prompts[0].startswith("BRIEF")
        assert "Meal type: dinner" in chef.prompts[0]

    @pytest.mark.asyncio
    async def test_empty_draft_is_external_error(self, scripted_model, marie_context):
        chef = scripted_model(texts=["   "])
        with pytest.raises(ExternalCallError) as exc:
            await draft_recipe("BRIEF", MealContext.model_validate(marie_context), chef)
        assert exc.value.step == "create-meal"

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self, scripted_model, marie_context):
        chef = scripted_model(texts=[ExternalCallError("boom")])
        with pytest.raises(ExternalCallError, match="boom"):
            await draft_recipe("BRIEF", MealContext.model_validate(marie_context), chef)


class TestReviewRecipe:
    @pytest.mark.asyncio
    async def test_review_requests_verdict_schema(self, scripted_model):
        sous_chef = scripted_model(structured=[ReviewVerdict(accepted=True)])

        verdict = await review_recipe("BRIEF", "DRAFT", sous_chef)

        assert verdict.accepted is True
        prompt, schema = sous_chef.structured_calls[0]
        assert schema is ReviewVerdict
        assert "BRIEF" in prompt and "DRAFT" in prompt

    @pytest.mark.asyncio
    async def test_dict_verdict_validated(self, scripted_model):
        sous_chef = scripted_model(structured=[{"accepted": False, "feedback": "Less salt"}])

        verdict = await review_recipe("BRIEF", "DRAFT", sous_chef)

        assert verdict == ReviewVerdict(accepted=False, feedback="Less salt")

    @pytest.mark.asyncio
    async def test_non_conforming_verdict(self, scripted_model):
        sous_chef = scripted_model(structured=[{"good": "yes"}])
        with pytest.raises(SchemaConformanceError) as exc:
            await review_recipe("BRIEF", "DRAFT", sous_chef)
        assert exc.value.step == "review-recipe"


class TestRevision:
    def test_revision_state(self):
        assert revision_state(ReviewVerdict(accepted=True)) is RevisionState.ACCEPTED
        assert revision_state(ReviewVerdict(accepted=False, feedback="x")) is RevisionState.NEEDS_REVISION

    @pytest.mark.asyncio
    async def test_accepted_passes_draft_through(self, scripted_model):
        chef = scripted_model()

        result = await revise_recipe("BRIEF", "DRAFT", ReviewVerdict(accepted=True), chef)

        assert result == "DRAFT"
        assert chef.call_count == 0

    @pytest.mark.asyncio
    async def test_needs_revision_calls_chef_once(self, scripted_model):
        chef = scripted_model(texts=["REVISED"])

        result = await revise_recipe(
            "BRIEF", "DRAFT", ReviewVerdict(accepted=False, feedback="Add herbs"), chef
        )

        assert result == "REVISED"
        assert len(chef.prompts) == 1
        assert "DRAFT" in chef.prompts[0]
        assert "Add herbs" in chef.prompts[0]

    @pytest.mark.asyncio
    async def test_missing_feedback_uses_placeholder(self, scripted_model):
        chef = scripted_model(texts=["REVISED"])

        await revise_recipe("BRIEF", "DRAFT", ReviewVerdict(accepted=False), chef)

        assert MISSING_FEEDBACK in chef.prompts[0]

    @pytest.mark.asyncio
    async def test_empty_revision_is_external_error(self, scripted_model):
        chef = scripted_model(texts=[""])
        with pytest.raises(ExternalCallError):
            await revise_recipe("BRIEF", "DRAFT", ReviewVerdict(accepted=False, feedback="x"), chef)


class TestFormatRecipe:
    @pytest.mark.asyncio
    async def test_returns_structured_recipe(self, scripted_model, recipe_payload):
        formatter = scripted_model(structured=[StructuredRecipe.model_validate(recipe_payload)])

        recipe = await format_recipe("Recipe text", formatter)

        assert recipe.name == "Poulet rôti au citron"
        prompt, schema = formatter.structured_calls[0]
        assert schema is StructuredRecipe
        assert "Recipe text" in prompt

    @pytest.mark.asyncio
    async def test_dict_output_validated(self, scripted_model, recipe_payload):
        formatter = scripted_model(structured=[recipe_payload])

        recipe = await format_recipe("Recipe text", formatter)

        assert isinstance(recipe, StructuredRecipe)

    @pytest.mark.asyncio
    async def test_partial_output_rejected(self, scripted_model, recipe_payload):
        del recipe_payload["ingredientGroups"]
        formatter = scripted_model(structured=[recipe_payload])

        with pytest.raises(SchemaConformanceError) as exc:
            await format_recipe("Recipe text", formatter)
        assert exc.value.step == "recipe-to-json"

    @pytest.mark.asyncio
    async def test_empty_text_rejected_without_call(self, scripted_model):
        formatter = scripted_model()

        with pytest.raises(SchemaConformanceError):
            await format_recipe("  ", formatter)
        assert formatter.call_count == 0

"""Unit tests for meal context input normalization."""

import pytest

from src.hooks.normalize_input import normalize_context_input
from src.utils.errors import InputValidationError


class TestNormalizeContextInput:
    def test_dict_passthrough(self, marie_context):
        assert normalize_context_input(marie_context) == marie_context

    def test_input_not_mutated(self, marie_context):
        raw = dict(marie_context, timeOfDay=" DINNER ")
        normalize_context_input(raw)
        assert raw["timeOfDay"] == " DINNER "

    def test_json_string_decoded(self):
        result = normalize_context_input('{"timeOfDay": "Lunch", "eaters": ["Marie"]}')
        assert result == {"timeOfDay": "lunch", "eaters": ["Marie"]}

    def test_enum_values_lowercased_and_stripped(self):
        result = normalize_context_input(
            {"timeOfDay": " Dinner ", "complexity": "EASY", "cookingDuration": "Short", "season": "Winter"}
        )
        assert result == {"timeOfDay": "dinner", "complexity": "easy", "cookingDuration": "short", "season": "winter"}

    def test_free_text_case_preserved(self):
        result = normalize_context_input({"country": " France ", "mealPlannerInstructions": "Use Leeks"})
        assert result == {"country": "France", "mealPlannerInstructions": "Use Leeks"}

    def test_comma_separated_eaters_split(self):
        result = normalize_context_input({"eaters": "Marie, Guillaume ,"})
        assert result["eaters"] == ["Marie", "Guillaume"]

    def test_members_eating_renamed(self):
        result = normalize_context_input({"membersEating": ["Marie"]})
        assert result == {"eaters": ["Marie"]}

    @pytest.mark.parametrize(
        "raw",
        [
            {"eaters": ["Marie"], "membersEating": ["Guillaume"]},
            {"members_eating": "Marie", "eaters": ""},
        ],
    )
    def test_conflicting_eaters_keys_rejected(self, raw):
        with pytest.raises(InputValidationError, match="more than once"):
            normalize_context_input(raw)

    def test_blank_eaters_string_becomes_empty_list(self):
        assert normalize_context_input({"eaters": "  "})["eaters"] == []

    def test_blank_optional_strings_dropped(self):
        result = normalize_context_input({"season": " ", "country": ""})
        assert result == {}

    def test_invalid_json_rejected(self):
        with pytest.raises(InputValidationError, match="not valid JSON"):
            normalize_context_input("{timeOfDay: dinner")

    @pytest.mark.parametrize("raw", ['["dinner"]', 42, None])
    def test_non_object_rejected(self, raw):
        with pytest.raises(InputValidationError, match="must be an object"):
            normalize_context_input(raw)

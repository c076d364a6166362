"""Shared fixtures for unit tests.

Provides the bundled household, a valid recipe payload and a scripted
GenerativeModel double so workflow tests never reach a real provider.
"""

from pathlib import Path

import pytest

from src.models.models import Household
from src.utils.household import load_household


HOUSEHOLD_FILE = Path(__file__).resolve().parents[2] / "src" / "data" / "household.json"


class ScriptedModel:
    """GenerativeModel double returning queued answers and recording every prompt.

    Queued exceptions are raised instead of returned.
    """

    def __init__(self, texts=None, structured=None):
        self.texts = list(texts or [])
        self.structured = list(structured or [])
        self.prompts = []
        self.structured_calls = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        answer = self.texts.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def generate_structured(self, prompt, schema):
        self.structured_calls.append((prompt, schema))
        answer = self.structured.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer

    @property
    def call_count(self):
        return len(self.prompts) + len(self.structured_calls)


@pytest.fixture
def scripted_model():
    """Factory for ScriptedModel instances."""
    return ScriptedModel


@pytest.fixture
def household() -> Household:
    return load_household(HOUSEHOLD_FILE)


@pytest.fixture
def marie_context() -> dict:
    return {
        "timeOfDay": "dinner",
        "eaters": ["Marie"],
        "complexity": "easy",
        "duration": "short",
        "country": "France",
        "language": "French",
    }


@pytest.fixture
def recipe_payload() -> dict:
    """Valid StructuredRecipe in its camelCase JSON form."""
    return {
        "name": "Poulet rôti au citron",
        "description": "Un poulet rôti simple et parfumé.",
        "servings": 2,
        "mealType": "dinner",
        "complexity": "easy",
        "duration": 25,
        "utensils": ["Poêle en fonte"],
        "ingredientGroups": [
            {
                "label": "Poulet",
                "ingredients": [
                    {"name": "Blanc de poulet", "quantity": "2", "unit": ""},
                    {"name": "Citron", "quantity": "1", "unit": ""},
                    {"name": "Huile d'olive", "quantity": "2", "unit": "c. à soupe"},
                ],
            }
        ],
        "instructionGroups": [
            {
                "title": "Cuisson",
                "steps": [
                    "Chauffer la poêle avec l'huile.",
                    "Saisir le poulet 6 minutes de chaque côté.",
                    "Arroser de jus de citron avant de servir.",
                ],
            }
        ],
        "notes": ["Servir avec une salade verte."],
    }

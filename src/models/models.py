"""Data models and schemas for the meal creation workflow.

Defines Pydantic models for the caller's meal context, the household reference
data, the sous-chef verdict and the final structured recipe.
All models use Pydantic v2 for strict validation and JSON schema generation;
the verdict and recipe schemas are handed to the model provider as-is for
schema-constrained generation.
"""

from typing import Annotated, List, Literal, Optional, Sequence, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


TimeOfDay = Literal["breakfast", "lunch", "dinner"]
Season = Literal["spring", "summer", "autumn", "winter"]
Complexity = Literal["easy", "medium", "hard"]
DurationClass = Literal["short", "medium", "long"]


class MealContext(BaseModel):
    """Validated input parameters describing a meal-generation request.

    Immutable once built. Accepts camelCase keys (`timeOfDay`, `mealPlannerInstructions`,
    `cookingDuration`) as well as field names. Country and language are optional and
    fall back to the household's own values when the brief is composed.
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    time_of_day: Annotated[TimeOfDay, Field(description="The meal the recipe is for")]
    eaters: Annotated[
        Tuple[str, ...],
        Field(min_length=1, description="Identifiers of the household members eating (at least one)"),
    ]
    complexity: Annotated[Complexity, Field(description="Expected recipe complexity")]
    duration: Annotated[
        DurationClass,
        Field(
            validation_alias=AliasChoices("duration", "cookingDuration", "cooking_duration"),
            description="Cooking duration class",
        ),
    ]
    season: Annotated[Optional[Season], Field(None, description="The season, if relevant")]
    country: Annotated[Optional[str], Field(None, min_length=1, description="Country whose units are used")]
    language: Annotated[Optional[str], Field(None, min_length=1, description="Language the recipe is written in")]
    meal_planner_instructions: Annotated[
        Optional[str],
        Field(None, max_length=2000, description="Free-text instructions from the meal planner"),
    ]

    @field_validator("eaters")
    @classmethod
    def collapse_eaters(cls, eaters: Tuple[str, ...]) -> Tuple[str, ...]:
        """Strip identifiers and drop case-insensitive duplicates (first spelling wins)."""
        seen = set()
        collapsed = []
        for eater in eaters:
            name = eater.strip()
            if not name or name.lower() in seen:
                continue
            seen.add(name.lower())
            collapsed.append(name)
        if not collapsed:
            raise ValueError("eaters must contain at least one non-blank identifier")
        return tuple(collapsed)


class EaterProfile(BaseModel):
    """Static reference profile for one household member."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Annotated[str, Field(min_length=1, description="Member identifier, matched case-insensitively")]
    notes: Annotated[str, Field("", description="Free-text preferences and restrictions, included verbatim")]
    exclusions: Annotated[
        List[str], Field(default_factory=list, description="Ingredient terms never to use for this member")
    ]


class Household(BaseModel):
    """Household reference data: family-wide asks plus per-member profiles."""

    model_config = ConfigDict(str_strip_whitespace=True)

    family_name: Annotated[str, Field(min_length=1)]
    global_ask: Annotated[str, Field("", description="Family-wide wishes for every meal")]
    country: Annotated[str, Field(min_length=1)]
    language: Annotated[str, Field(min_length=1)]
    cook_level: Annotated[str, Field("", description="Who cooks and how skilled they are")]
    mandatory_ingredients: Annotated[
        List[str], Field(default_factory=list, description="Ingredients every recipe must use (direct variant)")
    ]
    members: Annotated[List[EaterProfile], Field(min_length=1)]

    @model_validator(mode="after")
    def validate_unique_members(self) -> "Household":
        """Member names must be unique regardless of case."""
        names = [member.name.lower() for member in self.members]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate household members: {duplicates}")
        return self

    def find_member(self, name: str) -> Optional[EaterProfile]:
        """Return the member matching `name` case-insensitively, if any."""
        wanted = name.strip().lower()
        for member in self.members:
            if member.name.lower() == wanted:
                return member
        return None

    def members_eating(self, eaters: Sequence[str]) -> List[EaterProfile]:
        """Members named in `eaters`, in household order."""
        wanted = {eater.lower() for eater in eaters}
        return [member for member in self.members if member.name.lower() in wanted]


class ReviewVerdict(BaseModel):
    """Sous-chef verdict on a drafted recipe."""

    accepted: Annotated[bool, Field(description="True if the recipe is good as is, False if it needs changes")]
    feedback: Annotated[
        Optional[str],
        Field(None, description="Only when the recipe is not accepted: what must change and why"),
    ]


class _RecipeModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, alias_generator=to_camel, populate_by_name=True)


class Ingredient(_RecipeModel):
    name: Annotated[
        str,
        Field(
            min_length=1,
            description="Ingredient name only (no preparation such as diced or minced)",
        ),
    ]
    quantity: Annotated[str, Field(description="Quantity of the ingredient")]
    unit: Annotated[str, Field(description="Unit of the quantity, empty when counted")]


class IngredientGroup(_RecipeModel):
    label: Annotated[str, Field(min_length=1, description="Part of the recipe these ingredients are used for")]
    ingredients: Annotated[List[Ingredient], Field(min_length=1)]


class InstructionGroup(_RecipeModel):
    title: Annotated[str, Field(min_length=1, description="Title of this stage of the recipe")]
    steps: Annotated[
        List[str],
        Field(min_length=1, description="Ordered steps, without step numbers"),
    ]


class StructuredRecipe(_RecipeModel):
    """Terminal, schema-validated recipe returned by the workflow.

    Serialise with `model_dump(by_alias=True)` for the camelCase JSON form.
    """

    name: Annotated[str, Field(min_length=1, description="The name of the recipe")]
    description: Annotated[str, Field(min_length=1, description="Short description of the recipe")]
    servings: Annotated[int, Field(ge=1, description="Number of people the recipe is for")]
    meal_type: Annotated[TimeOfDay, Field(description="The type of meal")]
    complexity: Annotated[Complexity, Field(description="The complexity of the recipe")]
    duration: Annotated[int, Field(ge=1, description="Total time to prepare the recipe, in minutes")]
    utensils: Annotated[
        List[str], Field(default_factory=list, description="Special utensils required (basic ones omitted)")
    ]
    ingredient_groups: Annotated[List[IngredientGroup], Field(min_length=1)]
    instruction_groups: Annotated[List[InstructionGroup], Field(min_length=1)]
    notes: Annotated[Optional[List[str]], Field(None, description="Additional notes for the cook")]

    def to_markdown(self) -> str:
        """Render the recipe as markdown for terminal display."""
        lines = [f"# {self.name}", "", self.description, ""]
        lines.append(
            f"**Serves:** {self.servings} · **Meal:** {self.meal_type} · "
            f"**Complexity:** {self.complexity} · **Time:** {self.duration} min"
        )
        if self.utensils:
            lines += ["", "**Utensils:** " + ", ".join(self.utensils)]
        lines += ["", "## Ingredients"]
        for group in self.ingredient_groups:
            lines += ["", f"**{group.label}**", ""]
            for ingredient in group.ingredients:
                amount = " ".join(part for part in (ingredient.quantity, ingredient.unit) if part)
                lines.append(f"- {ingredient.name} ({amount})" if amount else f"- {ingredient.name}")
        lines += ["", "## Instructions"]
        for group in self.instruction_groups:
            lines += ["", f"### {group.title}", ""]
            lines += [f"{i}. {step}" for i, step in enumerate(group.steps, start=1)]
        if self.notes:
            lines += ["", "## Notes", ""]
            lines += [f"- {note}" for note in self.notes]
        return "\n".join(lines)

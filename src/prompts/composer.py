"""Instruction composer: meal context + household data → chef brief.

Pure and deterministic. The brief is consumed once by the drafting step and
reused verbatim by the review and revision prompts.
"""

from typing import List

from src.models.models import EaterProfile, Household, MealContext


DURATION_HINTS = {
    "short": "under 30 minutes",
    "medium": "between 30 and 60 minutes",
    "long": "more than an hour",
}


def restriction_terms(members: List[EaterProfile]) -> List[str]:
    """Concatenate the members' exclusion terms in member order (duplicates kept)."""
    terms: List[str] = []
    for member in members:
        terms.extend(member.exclusions)
    return terms


def _members_section(members: List[EaterProfile]) -> str:
    profiles = "\n".join(f"<{member.name}>\n{member.notes}\n</{member.name}>" for member in members)
    return (
        "# Family members eating\n"
        f"There are {len(members)} family members who will be eating the meal, "
        "here are some info about them:\n"
        f"{profiles}"
    )


def _context_section(context: MealContext, household: Household) -> str:
    country = context.country or household.country
    language = context.language or household.language
    lines = ["# Context"]
    if context.season:
        lines.append(f"The season is {context.season}.")
    lines.append(f"The meal is for the {context.time_of_day}.")
    lines.append(f"The recipe complexity should be {context.complexity}.")
    lines.append(
        f"The cooking duration should be {context.duration} ({DURATION_HINTS[context.duration]})."
    )
    lines.append(f"The recipe must be written in {language}, with the units used in {country}.")
    return "\n".join(lines)


def compose_instructions(
    context: MealContext,
    household: Household,
    *,
    mandatory_ingredients: bool = False,
) -> str:
    """Render the chef brief for one meal.

    Only household members named in `context.eaters` are described; their
    exclusion terms are gathered into a single restriction clause.

    Args:
        context: Validated meal context.
        household: Household reference data.
        mandatory_ingredients: Render the household's ingredient mandate (direct variant).

    Returns:
        The composed instructions text.
    """
    members = household.members_eating(context.eaters)
    country = context.country or household.country

    sections = [
        "# Family info\n"
        f"You are creating a meal for the family {household.family_name} from {country}.\n"
        "Here are some instructions given by the family:\n"
        f"{household.global_ask}",
    ]
    if household.cook_level:
        sections.append(f"# Cook level\n{household.cook_level}")
    sections.append(_members_section(members))

    terms = restriction_terms(members)
    if terms:
        sections.append(
            "# Restrictions\n"
            f"Never use any of the following ingredients: {', '.join(terms)}."
        )

    if mandatory_ingredients and household.mandatory_ingredients:
        sections.append(
            "# Mandatory ingredients\n"
            f"The recipe must use the following ingredients: {', '.join(household.mandatory_ingredients)}."
        )

    if context.meal_planner_instructions:
        sections.append(f"# Meal planner instructions\n{context.meal_planner_instructions}")

    sections.append(_context_section(context, household))
    return "\n\n".join(sections)

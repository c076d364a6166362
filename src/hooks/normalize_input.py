"""Input normalization for meal context payloads.

Handles the shapes a caller may send:
1. A dict (direct Python API, already decoded JSON)
2. A JSON string (query.py, files, queues)
3. A MealContext instance (passed through untouched by the validator)

Result: the validator always receives a dict with trimmed strings, lower-cased
enum-like values and a list of eaters.
"""

import json
from typing import Any

from src.utils.errors import InputValidationError
from src.utils.logger import logger


# Keys (both spellings) whose values are matched against fixed value sets
ENUM_KEYS = (
    "timeOfDay",
    "time_of_day",
    "complexity",
    "duration",
    "cookingDuration",
    "cooking_duration",
    "season",
)

EATERS_KEYS = ("eaters", "membersEating", "members_eating")


def normalize_context_input(raw_input: Any) -> dict[str, Any]:
    """Normalize a raw meal context payload into a plain dict.

    - JSON strings are decoded
    - `membersEating` (camelCase producer spelling) is accepted as `eaters`
    - a comma-separated eaters string is split into a list
    - enum-like values are stripped and lower-cased
    - blank optional strings are dropped so defaults apply

    Args:
        raw_input: dict or JSON string.

    Returns:
        New dict; the input is never mutated.

    Raises:
        InputValidationError: If the payload is not a JSON object or names the
            eaters under more than one key.
    """
    if isinstance(raw_input, (str, bytes)):
        try:
            raw_input = json.loads(raw_input)
            logger.debug("Detected: JSON string meal context")
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InputValidationError(f"Meal context is not valid JSON: {e}") from e

    if not isinstance(raw_input, dict):
        raise InputValidationError(
            f"Meal context must be an object, got: {type(raw_input).__name__}"
        )

    eaters_keys = [key for key in EATERS_KEYS if key in raw_input]
    if len(eaters_keys) > 1:
        raise InputValidationError(f"Meal context gives eaters more than once: {eaters_keys}")

    normalized: dict[str, Any] = {}
    for key, value in raw_input.items():
        if isinstance(value, str):
            value = value.strip()
            if not value and key not in EATERS_KEYS:
                continue
            if key in ENUM_KEYS:
                value = value.lower()
        if key in EATERS_KEYS:
            key = "eaters"
            if isinstance(value, str):
                value = [name.strip() for name in value.split(",") if name.strip()]
        normalized[key] = value

    logger.debug(f"Normalized meal context keys: {sorted(normalized)}")
    return normalized

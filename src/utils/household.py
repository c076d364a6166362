"""Household reference data loading.

Eater profiles, exclusion lists and family-wide asks live in a JSON record set
(HOUSEHOLD_FILE) rather than in code, so tests and deployments can swap them.
"""

from pathlib import Path
from typing import Optional

from src.models.models import Household
from src.utils.config import config
from src.utils.logger import logger


def load_household(path: Optional[str | Path] = None) -> Household:
    """Load and validate the household record set.

    Args:
        path: JSON file to read. Defaults to config.HOUSEHOLD_FILE.

    Returns:
        Validated Household instance.

    Raises:
        ValueError: If the file cannot be read.
        pydantic.ValidationError: If the content does not match the Household schema.
    """
    household_path = Path(path or config.HOUSEHOLD_FILE)
    try:
        raw = household_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Cannot read household file {household_path}: {e}") from e

    household = Household.model_validate_json(raw)
    logger.debug(
        f"Loaded household '{household.family_name}' with {len(household.members)} member(s) from {household_path}"
    )
    return household

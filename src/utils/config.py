"""Configuration management for the Meal Creation Workflow.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()

DEFAULT_HOUSEHOLD_FILE = str(Path(__file__).resolve().parent.parent / "data" / "household.json")

VARIANTS = ("reviewed", "direct")
THINKING_LEVELS = (None, "low", "high")


def _thinking_level(name: str, default: Optional[str]) -> Optional[str]:
    """Read a thinking level, treating "off" or an empty value as disabled."""
    value = os.getenv(name, default)
    if value is None or value.strip().lower() in ("", "off", "none"):
        return None
    return value.strip().lower()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Pipeline variant: "reviewed" (chef → sous-chef review → optional revision → formatter)
        # or "direct" (chef → formatter, strict eaters, mandatory ingredients)
        self.PIPELINE_VARIANT: str = os.getenv("PIPELINE_VARIANT", "reviewed").lower()
        # Household reference data: JSON record set with family info and eater profiles
        self.HOUSEHOLD_FILE: str = os.getenv("HOUSEHOLD_FILE", DEFAULT_HOUSEHOLD_FILE)
        # Chef: drafts and revises the recipe, benefits from deep reasoning
        self.CHEF_MODEL: str = os.getenv("CHEF_MODEL", "gemini-3-pro-preview")
        self.CHEF_THINKING_LEVEL: Optional[str] = _thinking_level("CHEF_THINKING_LEVEL", "high")
        # Sous-chef: reviews the draft and returns an accept/revise verdict
        self.SOUS_CHEF_MODEL: str = os.getenv("SOUS_CHEF_MODEL", "gemini-3-pro-preview")
        self.SOUS_CHEF_THINKING_LEVEL: Optional[str] = _thinking_level("SOUS_CHEF_THINKING_LEVEL", "high")
        # Formatter: converts the final text into a StructuredRecipe, cheap model is enough
        self.FORMATTER_MODEL: str = os.getenv("FORMATTER_MODEL", "gemini-3-flash-preview")
        self.FORMATTER_THINKING_LEVEL: Optional[str] = _thinking_level("FORMATTER_THINKING_LEVEL", "low")
        # Temperature: Controls randomness (0.0 = deterministic, 1.0 = max randomness)
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Max Output Tokens: a full recipe with grouped ingredients and steps fits in 8192
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "8192"))

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If required API keys are missing or invalid values provided.
        """
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if self.PIPELINE_VARIANT not in VARIANTS:
            raise ValueError(
                f"PIPELINE_VARIANT must be 'reviewed' or 'direct', got: {self.PIPELINE_VARIANT}"
            )
        if not Path(self.HOUSEHOLD_FILE).is_file():
            raise ValueError(f"HOUSEHOLD_FILE not found: {self.HOUSEHOLD_FILE}")
        for name in ("CHEF_THINKING_LEVEL", "SOUS_CHEF_THINKING_LEVEL", "FORMATTER_THINKING_LEVEL"):
            level = getattr(self, name)
            if level not in THINKING_LEVELS:
                raise ValueError(f"{name} must be 'off', 'low', or 'high', got: {level}")
        if not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )


# Module-level config instance, validated when the agents are built
config = Config()

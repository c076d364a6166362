"""Generative model capability used by the workflow steps."""

from typing import Protocol, TypeVar

from pydantic import BaseModel


SchemaT = TypeVar("SchemaT", bound=BaseModel)


class GenerativeModel(Protocol):
    """Free-text and schema-constrained generation, independent of the provider."""

    async def generate(self, prompt: str) -> str:
        """Return the model's free-text answer to `prompt`."""
        ...

    async def generate_structured(self, prompt: str, schema: type[SchemaT]) -> SchemaT:
        """Return the model's answer to `prompt` validated against `schema`."""
        ...

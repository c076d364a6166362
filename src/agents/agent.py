"""Agent factories for the Meal Creation Workflow.

The workflow only sees the GenerativeModel protocol (src/agents/base.py):
free-text generation and schema-constrained (structured) generation.
KitchenAgent implements it on top
of Agno Agents backed by Gemini; one Agno Agent is built per output schema so
the provider enforces the schema natively.
"""

from typing import Optional

from agno.agent import Agent
from agno.models.google import Gemini
from pydantic import BaseModel, ValidationError

from src.agents.base import SchemaT
from src.prompts.prompts import CHEF_INSTRUCTIONS, FORMATTER_INSTRUCTIONS, SOUS_CHEF_INSTRUCTIONS
from src.utils.config import Config, config
from src.utils.errors import ExternalCallError, SchemaConformanceError
from src.utils.logger import logger


class KitchenAgent:
    """GenerativeModel backed by Agno Agents on a Gemini model.

    Every failure is fatal: provider exceptions, error run statuses and empty
    answers raise ExternalCallError; structured answers that do not validate
    raise SchemaConformanceError. Nothing is retried.
    """

    def __init__(
        self,
        *,
        name: str,
        instructions: str,
        model_id: str,
        api_key: str,
        thinking_level: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> None:
        self.name = name
        self.instructions = instructions
        self.model_id = model_id
        self.api_key = api_key
        self.thinking_level = thinking_level
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._agents: dict[Optional[type[BaseModel]], Agent] = {}

    def _agent_for(self, schema: Optional[type[BaseModel]]) -> Agent:
        """Return the Agno Agent producing `schema` (None for free text), building it once."""
        if schema not in self._agents:
            self._agents[schema] = Agent(
                model=Gemini(
                    id=self.model_id,
                    api_key=self.api_key,
                    temperature=self.temperature,
                    max_output_tokens=self.max_output_tokens,
                    thinking_level=self.thinking_level,
                ),
                name=self.name,
                instructions=self.instructions,
                output_schema=schema,
                structured_outputs=schema is not None,
                retries=0,
            )
        return self._agents[schema]

    async def _run(self, prompt: str, schema: Optional[type[BaseModel]]):
        agent = self._agent_for(schema)
        logger.debug(f"{self.name}: sending {len(prompt)} chars to {self.model_id}")
        try:
            run_output = await agent.arun(prompt)
        except Exception as e:
            raise ExternalCallError(f"{self.name} call to {self.model_id} failed: {e}") from e

        status = getattr(run_output, "status", None)
        if str(getattr(status, "value", status)).lower() == "error":
            raise ExternalCallError(f"{self.name} run ended in error: {run_output.content}")
        return run_output.content

    async def generate(self, prompt: str) -> str:
        content = await self._run(prompt, None)
        if content is None:
            raise ExternalCallError(f"{self.name} returned no content")
        text = content if isinstance(content, str) else str(content)
        if not text.strip():
            raise ExternalCallError(f"{self.name} returned an empty answer")
        logger.debug(f"{self.name}: received {len(text)} chars")
        return text.strip()

    async def generate_structured(self, prompt: str, schema: type[SchemaT]) -> SchemaT:
        content = await self._run(prompt, schema)
        if isinstance(content, schema):
            return content

        try:
            if isinstance(content, BaseModel):
                return schema.model_validate(content.model_dump())
            if isinstance(content, dict):
                return schema.model_validate(content)
            if isinstance(content, (str, bytes)) and content.strip():
                return schema.model_validate_json(content)
        except ValidationError as e:
            raise SchemaConformanceError(
                f"{self.name} output does not match {schema.__name__}: {e.error_count()} error(s)"
            ) from e

        raise SchemaConformanceError(
            f"{self.name} returned no {schema.__name__} (got {type(content).__name__})"
        )


def create_chef_agent(cfg: Config = config) -> KitchenAgent:
    """Chef: drafts and revises recipes."""
    agent = KitchenAgent(
        name="Chef Agent",
        instructions=CHEF_INSTRUCTIONS,
        model_id=cfg.CHEF_MODEL,
        api_key=cfg.GEMINI_API_KEY,
        thinking_level=cfg.CHEF_THINKING_LEVEL,
        temperature=cfg.TEMPERATURE,
        max_output_tokens=cfg.MAX_OUTPUT_TOKENS,
    )
    logger.info(f"✓ Chef agent configured (model={cfg.CHEF_MODEL}, thinking={cfg.CHEF_THINKING_LEVEL})")
    return agent


def create_sous_chef_agent(cfg: Config = config) -> KitchenAgent:
    """Sous-chef: reviews drafts."""
    agent = KitchenAgent(
        name="Sous Chef Agent",
        instructions=SOUS_CHEF_INSTRUCTIONS,
        model_id=cfg.SOUS_CHEF_MODEL,
        api_key=cfg.GEMINI_API_KEY,
        thinking_level=cfg.SOUS_CHEF_THINKING_LEVEL,
        temperature=cfg.TEMPERATURE,
        max_output_tokens=cfg.MAX_OUTPUT_TOKENS,
    )
    logger.info(
        f"✓ Sous-chef agent configured (model={cfg.SOUS_CHEF_MODEL}, thinking={cfg.SOUS_CHEF_THINKING_LEVEL})"
    )
    return agent


def create_formatter_agent(cfg: Config = config) -> KitchenAgent:
    """Formatter: text recipe → StructuredRecipe. Runs at temperature 0."""
    agent = KitchenAgent(
        name="Recipe Formatter Agent",
        instructions=FORMATTER_INSTRUCTIONS,
        model_id=cfg.FORMATTER_MODEL,
        api_key=cfg.GEMINI_API_KEY,
        thinking_level=cfg.FORMATTER_THINKING_LEVEL,
        temperature=0.0,
        max_output_tokens=cfg.MAX_OUTPUT_TOKENS,
    )
    logger.info(
        f"✓ Formatter agent configured (model={cfg.FORMATTER_MODEL}, thinking={cfg.FORMATTER_THINKING_LEVEL})"
    )
    return agent

"""
Base Agent class for all site generation agents.

Each agent:
- Owns one facet of the site (content, design or seo) and the composite fields for it
- Is instantiated per orchestration run with that run's API key
- Receives the prompt, the business context and, when it depends on earlier
  agents, a typed upstream contract carrying their output
- Returns an AgentOutput or raises GenerationError; never an empty payload
"""

import json
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Type

from src.site_generation.llm import GenerationConfig, MalformedResponseError, extract_json, generate
from src.site_generation.models import (
    AgentKind, AgentOutput, BusinessContext, UPSTREAM_CONTRACT_VERSION,
)


class UpstreamContractError(ValueError):
    """An agent was called with upstream input that does not match its contract."""


class BaseAgent(ABC):
    """Base class for all site generation agents."""

    agent_name: str = "base_agent"
    kind: AgentKind
    description: str = "Base agent"
    system_prompt: str = ""
    default_reasoning: str = ""
    upstream_type: Optional[Type] = None

    def __init__(self, api_key: str, config: Optional[GenerationConfig] = None):
        self._api_key = api_key
        self.config = config or GenerationConfig()

    # --- Upstream contract ---

    def check_upstream(self, upstream: Any, required: bool = False):
        """Raise UpstreamContractError if upstream cannot be accepted by this agent."""
        if upstream is None:
            if required:
                raise UpstreamContractError(f"{self.agent_name} requires upstream output")
            return
        if self.upstream_type is None:
            raise UpstreamContractError(f"{self.agent_name} does not take upstream output")
        if not isinstance(upstream, self.upstream_type):
            raise UpstreamContractError(
                f"{self.agent_name} expects {self.upstream_type.__name__}, got {type(upstream).__name__}"
            )
        if upstream.version != UPSTREAM_CONTRACT_VERSION:
            raise UpstreamContractError(
                f"{self.agent_name} supports upstream contract v{UPSTREAM_CONTRACT_VERSION}, got v{upstream.version}"
            )

    # --- Execution ---

    async def invoke(self, prompt: str, business_context: BusinessContext, upstream: Any = None) -> AgentOutput:
        """Generate this agent's facet of the site."""
        if not prompt or not prompt.strip():
            raise ValueError("prompt must be non-empty")
        if business_context is None:
            raise ValueError("business_context is required")
        self.check_upstream(upstream)

        user_prompt = self.build_user_prompt(prompt, business_context, upstream)
        raw = await generate(self.system_prompt, user_prompt, self.config, self._api_key)
        parsed = extract_json(raw)
        return self.parse_output(parsed, business_context)

    def build_user_prompt(self, prompt: str, business_context: BusinessContext, upstream: Any = None) -> str:
        parts = [
            "Business Context:",
            json.dumps(business_context.to_dict(), indent=2),
            "",
            f"User Request: {prompt}",
        ]
        upstream_sections = self.describe_upstream(upstream) if upstream is not None else {}
        for title, payload in upstream_sections.items():
            parts += ["", f"{title}:", json.dumps(payload, indent=2)]
        parts += ["", self.task_instruction()]
        return "\n".join(parts)

    def describe_upstream(self, upstream: Any) -> Dict[str, Any]:
        """Sections of upstream output to show the model, keyed by heading."""
        return {}

    @abstractmethod
    def task_instruction(self) -> str:
        pass

    @abstractmethod
    def parse_output(self, parsed: Dict[str, Any], business_context: BusinessContext) -> AgentOutput:
        """Turn the model's JSON into this agent's composite fields."""
        pass

    # --- Helpers ---

    def _require_section(self, parsed: Dict[str, Any], key: str) -> Dict[str, Any]:
        section = parsed.get(key)
        if not isinstance(section, dict) or not section:
            raise MalformedResponseError(f"{self.agent_name} response missing '{key}' object")
        return section

    def _reasoning(self, parsed: Dict[str, Any]) -> str:
        reasoning = parsed.get("reasoning")
        return reasoning if isinstance(reasoning, str) and reasoning else self.default_reasoning

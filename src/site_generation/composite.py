"""
Composite website configuration assembled from agent outputs.

Each agent owns a fixed set of top-level fields. Contributions are add-only:
a field set by one agent can never be overwritten by a later one.
"""

import copy
from typing import Dict, Any

from src.site_generation.models import AgentKind, AgentOutput


# agent -> top-level fields it is allowed to contribute
FIELD_OWNERSHIP: Dict[AgentKind, tuple] = {
    AgentKind.CONTENT: ("content",),
    AgentKind.DESIGN: ("design",),
    AgentKind.SEO: ("seo", "metadata"),
}


class FieldOwnershipError(ValueError):
    """An agent tried to contribute a field it does not own, or one already set."""


class CompositeConfiguration:

    def __init__(self):
        self._fields: Dict[str, Any] = {}
        self._reasoning: Dict[AgentKind, str] = {}

    def contribute(self, agent: AgentKind, output: AgentOutput):
        owned = FIELD_OWNERSHIP[agent]
        for key in output.fields:
            if key not in owned:
                raise FieldOwnershipError(f"{agent.value} agent does not own field '{key}'")
            if key in self._fields:
                raise FieldOwnershipError(f"Field '{key}' already contributed")
        if agent in self._reasoning:
            raise FieldOwnershipError(f"{agent.value} agent already contributed")

        for key, value in output.fields.items():
            self._fields[key] = copy.deepcopy(value)
        self._reasoning[agent] = output.reasoning

    def to_dict(self) -> Dict[str, Any]:
        result = copy.deepcopy(self._fields)
        result["agent_insights"] = {
            f"{agent.value}_reasoning": reasoning
            for agent, reasoning in self._reasoning.items()
        }
        return result

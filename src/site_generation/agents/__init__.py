"""
Site Generation Agents

One agent per facet of the generated site. The orchestrator instantiates
them per run through get_agent, passing that run's API key.
"""

from typing import Optional

from src.site_generation.agents.base import BaseAgent, UpstreamContractError
from src.site_generation.agents.content import ContentAgent
from src.site_generation.agents.design import DesignAgent
from src.site_generation.agents.seo import SEOAgent
from src.site_generation.llm import GenerationConfig
from src.site_generation.models import AgentKind

# Registry: agent kind -> class
AGENT_REGISTRY = {
    AgentKind.CONTENT: ContentAgent,
    AgentKind.DESIGN: DesignAgent,
    AgentKind.SEO: SEOAgent,
}


def get_agent(kind: AgentKind, api_key: str, config: Optional[GenerationConfig] = None) -> BaseAgent:
    """Factory: instantiate an agent by kind."""
    cls = AGENT_REGISTRY.get(kind)
    if not cls:
        raise ValueError(f"Unknown agent: {kind}")
    return cls(api_key=api_key, config=config)

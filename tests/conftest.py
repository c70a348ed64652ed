"""Shared stubs for site generation tests."""

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.site_generation.agents import AGENT_REGISTRY
from src.site_generation.llm import GenerationConfig, GenerationError
from src.site_generation.models import AgentKind, AgentOutput, BusinessContext


STUB_OUTPUTS: Dict[AgentKind, AgentOutput] = {
    AgentKind.CONTENT: AgentOutput(
        fields={"content": {
            "hero": {"headline": "Baked fresh every morning", "subheadline": "Sourdough, pastries, cakes", "cta": "Order now"},
            "value_props": ["Local flour", "Small batches", "Same-day pickup"],
        }},
        reasoning="Warm, neighbourly copy",
    ),
    AgentKind.DESIGN: AgentOutput(
        fields={"design": {
            "colors": {"primary": "#8B4513", "background": "#FFF8F0"},
            "fonts": {"heading": "Playfair Display", "body": "Inter"},
        }},
        reasoning="Earthy palette",
    ),
    AgentKind.SEO: AgentOutput(
        fields={
            "seo": {"title": "Sweet Crumbs Bakery", "description": "Artisan bread and pastries", "keywords": ["bakery"]},
            "metadata": {"title": "Sweet Crumbs Bakery", "description": "Artisan bread and pastries"},
        },
        reasoning="Local search focus",
    ),
}


class StubAgentFactory:
    """
    Drop-in replacement for get_agent. Builds the real agent classes with
    invoke() swapped for a canned response, optional delay or failure.
    """

    def __init__(
        self,
        failures: Optional[Dict[AgentKind, str]] = None,
        delays: Optional[Dict[AgentKind, float]] = None,
        outputs: Optional[Dict[AgentKind, AgentOutput]] = None,
    ):
        self.failures = failures or {}
        self.delays = delays or {}
        self.outputs = outputs or STUB_OUTPUTS
        self.calls: List[Tuple[AgentKind, Any]] = []
        self.events: List[Tuple[str, AgentKind]] = []
        self.api_keys: List[str] = []

    def __call__(self, kind: AgentKind, api_key: str, config: Optional[GenerationConfig] = None):
        factory = self
        base = AGENT_REGISTRY[kind]

        class StubAgent(base):
            async def invoke(self, prompt, business_context, upstream=None):
                factory.calls.append((kind, upstream))
                factory.events.append(("start", kind))
                try:
                    await asyncio.sleep(factory.delays.get(kind, 0))
                    if kind in factory.failures:
                        raise GenerationError(factory.failures[kind])
                    return factory.outputs[kind]
                finally:
                    factory.events.append(("end", kind))

        self.api_keys.append(api_key)
        return StubAgent(api_key=api_key, config=config)

    def invoked(self) -> List[AgentKind]:
        return [kind for kind, _ in self.calls]


@pytest.fixture
def business_context() -> BusinessContext:
    return BusinessContext(name="Sweet Crumbs", industry="food")


@pytest.fixture
def stub_factory():
    return StubAgentFactory()

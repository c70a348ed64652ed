"""Design Agent - Builds the color, typography, spacing and radius tokens for the site."""

from typing import Dict, Any
from src.site_generation.agents.base import BaseAgent
from src.site_generation.models import AgentKind, AgentOutput, BusinessContext, DesignUpstream


class DesignAgent(BaseAgent):
    agent_name = "design_agent"
    kind = AgentKind.DESIGN
    default_reasoning = "Design system optimized for brand consistency"
    upstream_type = DesignUpstream
    system_prompt = """You are a DESIGN SYSTEM SPECIALIST.

Your expertise:
- Color theory and palette generation
- Typography scales and pairings
- Spacing and layout systems
- Visual hierarchy and composition
- Brand identity and consistency

Task: Generate a complete design system based on the business context.

Output format (JSON):
{
  "reasoning": "Your thought process about the design decisions",
  "design": {
    "colors": {"primary": "#HEX", "secondary": "#HEX", "background": "#HEX", "text": "#HEX", "muted": "#HEX", "accent": "#HEX"},
    "fonts": {"heading": "Font name", "body": "Font name"},
    "spacing": {"section": "Value with unit", "container": "Max width"},
    "radius": {"button": "Value with unit", "card": "Value with unit", "input": "Value with unit"}
  }
}"""

    def describe_upstream(self, upstream: DesignUpstream) -> Dict[str, Any]:
        return {"Website Content": upstream.content}

    def task_instruction(self) -> str:
        return "Generate a cohesive design system that reflects the brand personality."

    def parse_output(self, parsed: Dict[str, Any], business_context: BusinessContext) -> AgentOutput:
        design = self._require_section(parsed, "design")
        return AgentOutput(fields={"design": design}, reasoning=self._reasoning(parsed))

"""Content Agent - Writes headlines, copy, CTAs and testimonials in the brand voice."""

from typing import Dict, Any
from src.site_generation.agents.base import BaseAgent
from src.site_generation.models import AgentKind, AgentOutput, BusinessContext


class ContentAgent(BaseAgent):
    agent_name = "content_agent"
    kind = AgentKind.CONTENT
    default_reasoning = "Content strategy focused on conversion and clarity"
    system_prompt = """You are a CONTENT WRITING SPECIALIST.

Your expertise:
- Compelling headlines and subheadlines
- Persuasive copy that converts
- Brand voice and tone consistency
- Microcopy and UX writing
- Call-to-action optimization

Task: Generate website content (headlines, descriptions, CTAs) based on the business context.

Output format (JSON):
{
  "reasoning": "Your thought process about the content strategy",
  "content": {
    "hero": {"headline": "Main headline", "subheadline": "Supporting text", "cta": "Button text"},
    "value_props": ["Benefit 1", "Benefit 2", "Benefit 3"],
    "features": [{"title": "Feature name", "description": "Feature description"}],
    "testimonials": [{"quote": "Customer quote", "author": "Name", "role": "Position"}],
    "cta": {"headline": "CTA headline", "description": "CTA description", "buttonText": "Button text"}
  }
}"""

    def task_instruction(self) -> str:
        return "Generate compelling website content that resonates with the target audience."

    def parse_output(self, parsed: Dict[str, Any], business_context: BusinessContext) -> AgentOutput:
        content = self._require_section(parsed, "content")
        return AgentOutput(fields={"content": content}, reasoning=self._reasoning(parsed))

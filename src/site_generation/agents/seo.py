"""SEO Agent - Produces meta tags, keywords, structured data and the page metadata."""

from typing import Dict, Any
from src.site_generation.agents.base import BaseAgent
from src.site_generation.models import AgentKind, AgentOutput, BusinessContext, SEOUpstream

DEFAULT_TITLE = "Website"
DEFAULT_DESCRIPTION = "Welcome to our website"


class SEOAgent(BaseAgent):
    agent_name = "seo_agent"
    kind = AgentKind.SEO
    default_reasoning = "SEO strategy optimized for search visibility"
    upstream_type = SEOUpstream
    system_prompt = """You are an SEO & PERFORMANCE SPECIALIST.

Your expertise:
- SEO meta tags and descriptions
- Keyword research and optimization
- Structured data (schema.org)
- Performance optimization
- Accessibility best practices

Task: Generate SEO strategy and metadata based on the business context.

Output format (JSON):
{
  "reasoning": "Your thought process about the SEO strategy",
  "seo": {
    "title": "Page title (50-60 chars)",
    "description": "Meta description (150-160 chars)",
    "keywords": ["keyword1", "keyword2", "keyword3"],
    "og_image_alt": "Social preview description",
    "structured_data": {"@type": "Organization or Product", "name": "Business name", "description": "Description"},
    "recommendations": ["SEO recommendation 1", "SEO recommendation 2"]
  }
}"""

    def describe_upstream(self, upstream: SEOUpstream) -> Dict[str, Any]:
        return {
            "Website Content": upstream.content,
            "Design System": upstream.design,
        }

    def task_instruction(self) -> str:
        return "Generate comprehensive SEO strategy and metadata."

    def parse_output(self, parsed: Dict[str, Any], business_context: BusinessContext) -> AgentOutput:
        seo = self._require_section(parsed, "seo")
        metadata = {
            "title": seo.get("title") or business_context.name or DEFAULT_TITLE,
            "description": seo.get("description") or DEFAULT_DESCRIPTION,
        }
        return AgentOutput(fields={"seo": seo, "metadata": metadata}, reasoning=self._reasoning(parsed))

"""
Data model for multi-agent site generation.

Everything here is created fresh per orchestration run and never persisted:
- BusinessContext: the caller-owned business profile
- AgentKind / OrchestrationMode: closed enums driving chain order and execution
- AgentOutput: what a single agent hands back on success
- AgentInvocationResult / OrchestrationResult: per-agent and aggregate records
- Upstream contracts: the typed, versioned input a dependent agent receives
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Any, Optional, List, Tuple


UPSTREAM_CONTRACT_VERSION = 1


class AgentKind(str, Enum):
    CONTENT = "content"
    DESIGN = "design"
    SEO = "seo"

    @property
    def label(self) -> str:
        return AGENT_LABELS[self]


AGENT_LABELS: Dict[AgentKind, str] = {
    AgentKind.CONTENT: "Content Writer",
    AgentKind.DESIGN: "Design Expert",
    AgentKind.SEO: "SEO Specialist",
}


class OrchestrationMode(str, Enum):
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


@dataclass(frozen=True)
class BusinessContext:
    name: str
    industry: str = ""
    description: str = ""
    target_audience: str = ""
    tone: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BusinessContext":
        """Build from a request payload. Accepts camelCase keys used by the frontend."""
        return cls(
            name=data.get("name") or data.get("businessName") or data.get("business_name") or "",
            industry=data.get("industry", ""),
            description=data.get("description", ""),
            target_audience=data.get("target_audience") or data.get("targetAudience") or "",
            tone=data.get("tone", ""),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class AgentOutput:
    """Successful agent payload: the top-level composite fields it owns, plus its reasoning."""
    fields: Dict[str, Any]
    reasoning: str = ""


@dataclass(frozen=True)
class AgentInvocationResult:
    agent: AgentKind
    success: bool
    output: Optional[Dict[str, Any]] = None
    reasoning: Optional[str] = None
    error: Optional[str] = None
    duration: int = 0  # ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent": self.agent.value,
            "success": self.success,
            "output": self.output,
            "reasoning": self.reasoning,
            "error": self.error,
            "duration": self.duration,
        }


@dataclass(frozen=True)
class OrchestrationResult:
    success: bool
    output: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    agent_results: Tuple[AgentInvocationResult, ...] = field(default_factory=tuple)
    total_duration: int = 0  # ms

    def __post_init__(self):
        if self.success != (self.output is not None):
            raise ValueError("output must be present if and only if the orchestration succeeded")

    @property
    def successful_agents(self) -> List[AgentKind]:
        return [r.agent for r in self.agent_results if r.success]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "output": self.output,
            "error": self.error,
            "agent_results": [r.to_dict() for r in self.agent_results],
            "total_duration": self.total_duration,
        }


# --- Upstream contracts ---
# A dependent agent receives prior outputs through one of these, never through
# a shared dict. The orchestrator deep-copies payloads into them, so the
# receiver cannot mutate what an earlier agent produced.

@dataclass(frozen=True)
class DesignUpstream:
    content: Dict[str, Any]
    version: int = UPSTREAM_CONTRACT_VERSION


@dataclass(frozen=True)
class SEOUpstream:
    content: Dict[str, Any]
    design: Dict[str, Any]
    version: int = UPSTREAM_CONTRACT_VERSION

"""
Site Generation Chain Definition

Declares the agents that make up one orchestration run and how they depend
on each other. This is the single source of truth for chain order.

Two kinds of dependency:
- requires: hard prerequisite in every mode; the stage never runs before it
  and is skipped if it failed
- consumes: upstream output the stage uses in sequential mode; relaxed in
  parallel mode, where the stage works from the request inputs alone
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from src.site_generation.models import AgentKind


@dataclass(frozen=True)
class StageDefinition:
    kind: AgentKind
    requires: Tuple[AgentKind, ...] = ()
    consumes: Tuple[AgentKind, ...] = ()
    foundational: bool = False  # failure ends the run with no composite at all


CHAIN_STAGES: List[StageDefinition] = [
    StageDefinition(kind=AgentKind.CONTENT, foundational=True),
    StageDefinition(kind=AgentKind.DESIGN, consumes=(AgentKind.CONTENT,)),
    StageDefinition(kind=AgentKind.SEO, consumes=(AgentKind.CONTENT, AgentKind.DESIGN)),
]

STAGE_KINDS: List[AgentKind] = [s.kind for s in CHAIN_STAGES]


def get_stage_index(kind: AgentKind, stages: Optional[List[StageDefinition]] = None) -> int:
    """Position of a stage in the given chain (the default chain if none is given)."""
    kinds = STAGE_KINDS if stages is None else [s.kind for s in stages]
    return kinds.index(kind)


def prerequisites(stage: StageDefinition, sequential: bool) -> Tuple[AgentKind, ...]:
    """Stages that must have succeeded before this one may start."""
    if sequential:
        return tuple(dict.fromkeys(stage.requires + stage.consumes))
    return stage.requires


def build_waves(stages: List[StageDefinition]) -> List[List[StageDefinition]]:
    """
    Group stages into waves for parallel mode. Every stage in a wave has all
    hard requirements in earlier waves. Order inside a wave follows declaration.
    """
    placed: Dict[AgentKind, int] = {}
    waves: List[List[StageDefinition]] = []
    remaining = list(stages)

    while remaining:
        wave = [s for s in remaining if all(r in placed for r in s.requires)]
        if not wave:
            pending = ", ".join(s.kind.value for s in remaining)
            raise ValueError(f"Unsatisfiable stage requirements: {pending}")
        for s in wave:
            placed[s.kind] = len(waves)
        waves.append(wave)
        remaining = [s for s in remaining if s.kind not in placed]

    return waves

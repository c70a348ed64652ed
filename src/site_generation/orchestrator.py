"""
Site Generation Orchestrator

Runs the Content -> Design -> SEO chain for one prompt and business context
and returns a single OrchestrationResult.

Modes:
- sequential: each stage starts after the previous one settles and receives
  the outputs it consumes through its upstream contract
- parallel: stages are grouped into waves by hard requirement; every stage in
  a wave is launched at once and the wave is awaited jointly

Policy:
- every invocation result is kept, ordered by chain declaration
- a failed foundational stage (Content) ends the run; nothing after it starts
- a stage whose prerequisite failed is recorded as failed without being invoked
- success requires every stage to succeed; there is no partial merge
- failures are returned as data, never raised to the caller
"""

import asyncio
import copy
import inspect
import time
import traceback
from typing import Any, Callable, Dict, List, Optional, Union

from src.site_generation.agents import get_agent
from src.site_generation.agents.base import BaseAgent, UpstreamContractError
from src.site_generation.composite import CompositeConfiguration
from src.site_generation.llm import GenerationConfig
from src.site_generation.models import (
    AgentInvocationResult, AgentKind, AgentOutput, BusinessContext,
    OrchestrationMode, OrchestrationResult,
)
from src.site_generation.recorder import record_invocation
from src.site_generation.workflows.pipeline import (
    CHAIN_STAGES, StageDefinition, build_waves, get_stage_index, prerequisites,
)

AgentStartHook = Callable[[AgentKind], Any]
AgentCompleteHook = Callable[[AgentInvocationResult], Any]
AgentFactory = Callable[[AgentKind, str, Optional[GenerationConfig]], BaseAgent]

SKIPPED_PREFIX = "Skipped: "


class SiteOrchestrator:
    """Single entry point for multi-agent site generation."""

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        agent_factory: AgentFactory = get_agent,
        stages: Optional[List[StageDefinition]] = None,
    ):
        self.config = config or GenerationConfig()
        self.agent_factory = agent_factory
        self.stages = list(stages or CHAIN_STAGES)

    async def run(
        self,
        prompt: str,
        business_context: Union[BusinessContext, Dict[str, Any], None],
        mode: Union[OrchestrationMode, str] = OrchestrationMode.SEQUENTIAL,
        api_key: str = "",
        on_agent_start: Optional[AgentStartHook] = None,
        on_agent_complete: Optional[AgentCompleteHook] = None,
    ) -> OrchestrationResult:
        missing = []
        if not prompt or not str(prompt).strip():
            missing.append("prompt")
        if not business_context:
            missing.append("business_context")
        if missing:
            return OrchestrationResult(success=False, error=f"Missing required fields: {', '.join(missing)}")

        try:
            mode = OrchestrationMode(mode)
        except ValueError:
            return OrchestrationResult(success=False, error=f"Unknown mode: {mode}")

        if isinstance(business_context, dict):
            business_context = BusinessContext.from_dict(business_context)

        start = time.monotonic()
        hooks = (on_agent_start, on_agent_complete)
        if mode == OrchestrationMode.SEQUENTIAL:
            results = await self._run_sequential(prompt, business_context, api_key, hooks)
        else:
            results = await self._run_parallel(prompt, business_context, api_key, hooks)
        total_duration = int((time.monotonic() - start) * 1000)

        results.sort(key=lambda r: get_stage_index(r.agent, self.stages))
        return self._finalize(results, total_duration)

    # --- Modes ---

    async def _run_sequential(self, prompt, business_context, api_key, hooks) -> List[AgentInvocationResult]:
        results: List[AgentInvocationResult] = []
        outputs: Dict[AgentKind, Dict[str, Any]] = {}

        for stage in self.stages:
            missing = [k for k in prerequisites(stage, sequential=True) if k not in outputs]
            if missing:
                results.append(_skipped(stage, missing))
                continue
            result = await self._invoke_stage(stage, prompt, business_context, api_key, outputs, hooks, sequential=True)
            results.append(result)
            if result.success:
                outputs[stage.kind] = result.output
            elif stage.foundational:
                break

        return results

    async def _run_parallel(self, prompt, business_context, api_key, hooks) -> List[AgentInvocationResult]:
        results: List[AgentInvocationResult] = []
        outputs: Dict[AgentKind, Dict[str, Any]] = {}

        for wave in build_waves(self.stages):
            runnable = []
            for stage in wave:
                missing = [k for k in prerequisites(stage, sequential=False) if k not in outputs]
                if missing:
                    results.append(_skipped(stage, missing))
                else:
                    runnable.append(stage)
            wave_results = await asyncio.gather(*[
                self._invoke_stage(stage, prompt, business_context, api_key, outputs, hooks, sequential=False)
                for stage in runnable
            ])
            results.extend(wave_results)
            for stage, result in zip(runnable, wave_results):
                if result.success:
                    outputs[stage.kind] = result.output
            if any(s.foundational and not r.success for s, r in zip(runnable, wave_results)):
                break

        return results

    # --- Stage invocation ---

    async def _invoke_stage(
        self,
        stage: StageDefinition,
        prompt: str,
        business_context: BusinessContext,
        api_key: str,
        outputs: Dict[AgentKind, Dict[str, Any]],
        hooks: tuple,
        sequential: bool,
    ) -> AgentInvocationResult:
        on_start, on_complete = hooks
        agent = self.agent_factory(stage.kind, api_key, self.config)
        upstream = self._build_upstream(agent, stage, outputs)
        # Raises UpstreamContractError here, outside the recorder
        agent.check_upstream(upstream, required=sequential and bool(stage.consumes))

        await _notify(on_start, stage.kind)
        result = await record_invocation(agent, prompt, business_context, upstream, timeout=self.config.timeout)
        await _notify(on_complete, result)
        return result

    def _build_upstream(self, agent: BaseAgent, stage: StageDefinition, outputs: Dict[AgentKind, Dict[str, Any]]):
        """Copy consumed outputs into the agent's upstream contract, or None if any is unavailable."""
        if not stage.consumes or agent.upstream_type is None:
            return None
        if not all(k in outputs for k in stage.consumes):
            return None
        payload = {k.value: copy.deepcopy(outputs[k][k.value]) for k in stage.consumes}
        try:
            return agent.upstream_type(**payload)
        except TypeError as e:
            raise UpstreamContractError(f"{agent.agent_name} upstream cannot be built from {list(payload)}: {e}")

    # --- Merge ---

    def _finalize(self, results: List[AgentInvocationResult], total_duration: int) -> OrchestrationResult:
        by_kind = {r.agent: r for r in results}
        failures = [r for r in results if not r.success]
        # a skipped stage never carries the root cause
        failure = next((r for r in failures if not (r.error or "").startswith(SKIPPED_PREFIX)), None)
        failure = failure or next(iter(failures), None)
        complete = all(s.kind in by_kind and by_kind[s.kind].success for s in self.stages)

        if failure is not None or not complete:
            error = failure.error if failure is not None else "Agent chain did not complete"
            return OrchestrationResult(
                success=False,
                error=error,
                agent_results=tuple(results),
                total_duration=total_duration,
            )

        composite = CompositeConfiguration()
        for stage in self.stages:
            result = by_kind[stage.kind]
            composite.contribute(stage.kind, AgentOutput(fields=result.output, reasoning=result.reasoning or ""))

        return OrchestrationResult(
            success=True,
            output=composite.to_dict(),
            agent_results=tuple(results),
            total_duration=total_duration,
        )


def _skipped(stage: StageDefinition, missing: List[AgentKind]) -> AgentInvocationResult:
    """Record for a stage that was not invoked because a prerequisite failed."""
    return AgentInvocationResult(
        agent=stage.kind,
        success=False,
        error=f"{SKIPPED_PREFIX}{missing[0].value} failed",
        duration=0,
    )


async def _notify(hook: Optional[Callable], arg: Any):
    """Call an observer hook. A failing hook is logged and never aborts the run."""
    if hook is None:
        return
    try:
        outcome = hook(arg)
        if inspect.isawaitable(outcome):
            await outcome
    except Exception as e:
        print(f"[Multi-Agent] Observer hook failed: {type(e).__name__}: {e}")
        traceback.print_exc()

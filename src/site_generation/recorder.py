"""
Agent Result Recorder - runs one agent invocation and always returns a record.

Duration is wall-clock from call start to settle. Timeouts and backend errors
become a failed AgentInvocationResult; only upstream contract violations
(programming errors) are re-raised.
"""

import asyncio
import time
from typing import Any, Optional

from src.site_generation.agents.base import BaseAgent, UpstreamContractError
from src.site_generation.models import AgentInvocationResult, BusinessContext


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


async def record_invocation(
    agent: BaseAgent,
    prompt: str,
    business_context: BusinessContext,
    upstream: Any = None,
    timeout: Optional[float] = None,
) -> AgentInvocationResult:
    """Invoke the agent once, bounded by timeout (seconds), and record the outcome."""
    timeout = agent.config.timeout if timeout is None else timeout
    start = time.monotonic()
    try:
        output = await asyncio.wait_for(
            agent.invoke(prompt, business_context, upstream),
            timeout=timeout,
        )
        return AgentInvocationResult(
            agent=agent.kind,
            success=True,
            output=output.fields,
            reasoning=output.reasoning,
            duration=_elapsed_ms(start),
        )
    except UpstreamContractError:
        raise
    except asyncio.TimeoutError:
        return AgentInvocationResult(
            agent=agent.kind,
            success=False,
            error=f"Timeout after {timeout}s",
            duration=_elapsed_ms(start),
        )
    except Exception as e:
        return AgentInvocationResult(
            agent=agent.kind,
            success=False,
            error=str(e) or type(e).__name__,
            duration=_elapsed_ms(start),
        )

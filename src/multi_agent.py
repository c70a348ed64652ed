#!/usr/bin/env python3
"""
Multi-Agent API routes.
Exposes the site generation orchestrator (Content, Design and SEO agents)
to the frontend, either as a single JSON response or as a live event stream.
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from sse_starlette.sse import EventSourceResponse
from typing import Optional, AsyncGenerator
from datetime import datetime
import asyncio
import json
import os
import time
from dotenv import load_dotenv

from src.site_generation.llm import CREDENTIAL_NAMES, GenerationConfig, LLMProvider
from src.site_generation.models import AgentInvocationResult, AgentKind, OrchestrationMode, OrchestrationResult
from src.site_generation.orchestrator import SiteOrchestrator
from src.site_generation.workflows.pipeline import STAGE_KINDS

load_dotenv()

router = APIRouter(prefix="/api/multi-agent", tags=["multi-agent"])


# --- Models ---

class MultiAgentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: Optional[str] = None
    business_context: Optional[dict] = Field(default=None, alias="businessContext")
    mode: OrchestrationMode = OrchestrationMode.SEQUENTIAL


# --- Helpers ---

def get_api_key(provider: LLMProvider) -> Optional[str]:
    """Read the backend credential for the configured provider."""
    if provider == LLMProvider.GEMINI:
        return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    return os.getenv(CREDENTIAL_NAMES[provider])


def _build_orchestrator() -> SiteOrchestrator:
    return SiteOrchestrator(config=GenerationConfig.from_env())


def _validate(body: MultiAgentRequest):
    if not body.prompt or not body.prompt.strip() or not body.business_context:
        raise HTTPException(status_code=400, detail="Missing required fields: prompt, business_context")


def _require_api_key(orchestrator: SiteOrchestrator) -> str:
    api_key = get_api_key(orchestrator.config.provider)
    if not api_key:
        name = CREDENTIAL_NAMES[orchestrator.config.provider]
        raise HTTPException(status_code=500, detail=f"{name} not configured")
    return api_key


def _agent_summary(result: OrchestrationResult) -> list:
    return [
        {"agent": r.agent.value, "success": r.success, "duration": r.duration}
        for r in result.agent_results
    ]


# --- Routes ---

@router.post("")
@router.post("/", include_in_schema=False)
async def run_multi_agent(body: MultiAgentRequest):
    """Run all agents and return the merged website configuration."""
    start = time.monotonic()
    try:
        _validate(body)
        orchestrator = _build_orchestrator()
        api_key = _require_api_key(orchestrator)

        print(f"[Multi-Agent] Starting orchestration: prompt={body.prompt[:100]!r} mode={body.mode.value}")

        result = await orchestrator.run(body.prompt, body.business_context, body.mode, api_key)
        duration = int((time.monotonic() - start) * 1000)
        agent_results = [r.to_dict() for r in result.agent_results]

        if not result.success:
            print(f"[Multi-Agent] Orchestration failed: {result.error}")
            return JSONResponse(status_code=500, content={
                "success": False,
                "error": result.error,
                "agent_results": agent_results,
                "duration": duration,
            })

        print(f"[Multi-Agent] Orchestration successful: duration={duration}ms agents={_agent_summary(result)}")

        return {
            "success": True,
            "output": result.output,
            "agent_results": agent_results,
            "duration": duration,
            "metadata": {
                "total_agents": len(result.agent_results),
                "successful_agents": len(result.successful_agents),
                "total_duration": result.total_duration,
            },
        }
    except HTTPException:
        raise
    except Exception as e:
        print(f"[Multi-Agent] Error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/stream")
async def stream_multi_agent(body: MultiAgentRequest):
    """
    Run all agents and stream progress as Server-Sent Events.
    Emits agent_start / agent_complete per agent, then a final result event.
    """
    _validate(body)
    orchestrator = _build_orchestrator()
    api_key = _require_api_key(orchestrator)

    print(f"[Multi-Agent] Starting streamed orchestration: prompt={body.prompt[:100]!r} mode={body.mode.value}")

    queue: asyncio.Queue = asyncio.Queue()

    async def on_agent_start(kind: AgentKind):
        await queue.put({"event": "agent_start", "data": json.dumps({"agent": kind.value, "label": kind.label})})

    async def on_agent_complete(result: AgentInvocationResult):
        await queue.put({"event": "agent_complete", "data": json.dumps(result.to_dict())})

    async def run():
        try:
            result = await orchestrator.run(
                body.prompt, body.business_context, body.mode, api_key,
                on_agent_start=on_agent_start,
                on_agent_complete=on_agent_complete,
            )
            if not result.success:
                print(f"[Multi-Agent] Orchestration failed: {result.error}")
            await queue.put({"event": "result", "data": json.dumps(result.to_dict())})
        finally:
            await queue.put(None)

    async def event_generator() -> AsyncGenerator[dict, None]:
        task = asyncio.create_task(run())
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
            await task
        finally:
            if not task.done():
                task.cancel()

    return EventSourceResponse(event_generator())


@router.get("")
async def health():
    """Health check for the multi-agent service."""
    try:
        provider = GenerationConfig.from_env().provider
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {
        "status": "ok",
        "service": "multi-agent-ai",
        "agents": [k.value for k in STAGE_KINDS],
        "provider": provider.value,
        "has_api_key": bool(get_api_key(provider)),
        "timestamp": datetime.utcnow().isoformat(),
    }

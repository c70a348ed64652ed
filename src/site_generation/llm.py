"""
Generation backend for site generation agents.

Routes a (system prompt, user prompt) pair to one of three providers and
returns the raw model text. The API key is always passed in by the caller;
nothing in this module reads credentials from the environment.
"""

import json
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional

from dotenv import load_dotenv

load_dotenv()


class LLMProvider(str, Enum):
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


DEFAULT_MODELS: Dict[LLMProvider, str] = {
    LLMProvider.GEMINI: "gemini-2.5-flash",
    LLMProvider.ANTHROPIC: "claude-sonnet-4-5-20250929",
    LLMProvider.OPENAI: "gpt-4o",
}

# Name of the key the operator is expected to configure, per provider
CREDENTIAL_NAMES: Dict[LLMProvider, str] = {
    LLMProvider.GEMINI: "GEMINI_API_KEY",
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    LLMProvider.OPENAI: "OPENAI_API_KEY",
}


# --- Errors ---

class GenerationError(Exception):
    """An agent's generation call failed. The message is shown to operators as-is."""


class MissingCredentialError(GenerationError):
    pass


class MalformedResponseError(GenerationError):
    pass


class UnknownProviderError(GenerationError):
    pass


# --- Config ---

@dataclass(frozen=True)
class GenerationConfig:
    provider: LLMProvider = LLMProvider.GEMINI
    model: Optional[str] = None
    timeout: float = 30.0  # seconds, per agent invocation
    max_tokens: int = 4096
    temperature: float = 0.7

    @property
    def model_string(self) -> str:
        return self.model or DEFAULT_MODELS[self.provider]

    @classmethod
    def from_env(cls) -> "GenerationConfig":
        provider_raw = os.getenv("MULTI_AGENT_PROVIDER", LLMProvider.GEMINI.value).lower()
        try:
            provider = LLMProvider(provider_raw)
        except ValueError:
            raise UnknownProviderError(f"Unknown provider: {provider_raw}")
        return cls(
            provider=provider,
            model=os.getenv("MULTI_AGENT_MODEL") or None,
            timeout=float(os.getenv("MULTI_AGENT_TIMEOUT", "30")),
            max_tokens=int(os.getenv("MULTI_AGENT_MAX_TOKENS", "4096")),
            temperature=float(os.getenv("MULTI_AGENT_TEMPERATURE", "0.7")),
        )


# --- Response parsing ---

_FENCED_JSON = re.compile(r"```json\s*\n([\s\S]*?)\n\s*```")
_OUTER_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json(text: str) -> Dict[str, Any]:
    """
    Pull a JSON object out of model text.
    Tries a ```json fenced block first, then the outermost {...} span, then the raw text.
    """
    if not text or not text.strip():
        raise MalformedResponseError("Empty response from generation backend")

    match = _FENCED_JSON.search(text)
    if match:
        candidate = match.group(1)
    else:
        match = _OUTER_OBJECT.search(text)
        candidate = match.group(0) if match else text

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Invalid JSON in response: {e.msg}")

    if not isinstance(parsed, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


# --- Providers ---

async def generate(system_prompt: str, user_prompt: str, config: GenerationConfig, api_key: str) -> str:
    """Send one prompt to the configured provider and return the raw text."""
    if not api_key:
        raise MissingCredentialError(f"Missing {CREDENTIAL_NAMES[config.provider]}")

    handlers = {
        LLMProvider.GEMINI: _generate_gemini,
        LLMProvider.ANTHROPIC: _generate_anthropic,
        LLMProvider.OPENAI: _generate_openai,
    }
    handler = handlers.get(config.provider)
    if handler is None:
        raise UnknownProviderError(f"Unknown provider: {config.provider}")
    return await handler(system_prompt, user_prompt, config, api_key)


async def _generate_gemini(system_prompt: str, user_prompt: str, config: GenerationConfig, api_key: str) -> str:
    import google.generativeai as genai

    # The SDK binds the configured key when the async client is first created,
    # which happens before the call's first suspension point.
    genai.configure(api_key=api_key)
    model = genai.GenerativeModel(config.model_string, system_instruction=system_prompt)
    response = await model.generate_content_async(
        user_prompt,
        generation_config=genai.types.GenerationConfig(
            max_output_tokens=config.max_tokens,
            temperature=config.temperature,
            response_mime_type="application/json",
        ),
    )
    return response.text


async def _generate_anthropic(system_prompt: str, user_prompt: str, config: GenerationConfig, api_key: str) -> str:
    import anthropic

    client = anthropic.AsyncAnthropic(api_key=api_key)
    message = await client.messages.create(
        model=config.model_string,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        system=system_prompt,
        messages=[{"role": "user", "content": user_prompt}],
    )
    return message.content[0].text


async def _generate_openai(system_prompt: str, user_prompt: str, config: GenerationConfig, api_key: str) -> str:
    import openai

    client = openai.AsyncOpenAI(api_key=api_key)
    response = await client.chat.completions.create(
        model=config.model_string,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        response_format={"type": "json_object"},
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
    )
    return response.choices[0].message.content

from __future__ import annotations
"""
LLM client facade over an OpenAI-compatible endpoint (Ollama, LM Studio, hosted gateways).

The rest of the code should not care which server is in use. This module sends
one prompt per call and returns the raw text reply. It does not retry: every
failure is raised as LLMTransportError so the game loop can count it as one
failed attempt.
"""
from typing import Optional
import logging

from openai import OpenAI

from .config import SETTINGS

log = logging.getLogger("llm_client")


class LLMTransportError(RuntimeError):
    """The generator call failed or returned no usable text."""


_CLIENT = OpenAI(api_key=SETTINGS.api_key or None, base_url=SETTINGS.base_url or None)


def configure(base_url: Optional[str] = None, api_key: Optional[str] = None) -> None:
    """Point the shared client at a different endpoint (e.g. from --url)."""
    global _CLIENT
    _CLIENT = OpenAI(api_key=api_key or SETTINGS.api_key or None, base_url=base_url or SETTINGS.base_url or None)


def generate_text(prompt: str, model: Optional[str] = None, temperature: Optional[float] = None, timeout: Optional[float] = None) -> str:
    """Send a single user prompt and return the reply text."""
    if not model:
        raise ValueError("Model is required; pass --model or set LLMTTT_MODEL.")
    kwargs = {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
        "timeout": timeout if timeout is not None else SETTINGS.timeout_s,
    }
    if temperature is not None:
        kwargs["temperature"] = temperature
    try:
        rsp = _CLIENT.chat.completions.create(**kwargs)
    except Exception as e:
        log.debug("Chat request to %s failed", model, exc_info=True)
        raise LLMTransportError(f"request to model {model!r} failed: {e}") from e
    text = _extract_text(rsp)
    if not text:
        raise LLMTransportError(f"model {model!r} returned an empty or malformed response")
    return text


def _extract_text(rsp) -> str:
    try:
        if not getattr(rsp, "choices", None):
            return ""
        msg = rsp.choices[0].message
        content = getattr(msg, "content", None)
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts = []
            for c in content:
                if isinstance(c, dict):
                    if c.get("type") == "text" and isinstance(c.get("text"), str):
                        parts.append(c["text"])
                    continue
                t = getattr(c, "text", None)
                if isinstance(t, str):
                    parts.append(t)
            return "\n".join(parts)
    except Exception:
        log.exception("Failed to extract text from response")
    return ""

"""
Configuration and environment loading for LLM Tic-Tac-Toe.

- Loads settings.yml (YAML) from repo root if present; falls back to environment variables.
- Exposes SETTINGS with the transport defaults used by llm_client and the CLI.
"""
from dataclasses import dataclass
import os
from typing import Any, Callable

import yaml
from dotenv import load_dotenv

load_dotenv()


def _repo_root() -> str:
    # this file: src/llmtictactoe/config.py → repo root is two levels up
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _load_yaml(path: str) -> dict:
    if not os.path.isfile(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data if isinstance(data, dict) else {}


_cfg = _load_yaml(os.path.join(_repo_root(), "settings.yml"))


def _get(name: str, default: Any, cast: Callable[[Any], Any] | None = None) -> Any:
    if name in _cfg:
        val = _cfg[name]
        return cast(val) if cast else val
    env = os.environ.get(name)
    if env is not None:
        return cast(env) if cast else env
    return default


@dataclass(frozen=True)
class Settings:
    # Auth / endpoint (OpenAI-compatible wire format; Ollama and LM Studio expose /v1)
    api_key: str
    base_url: str
    model: str

    # Transport knobs
    timeout_s: float


SETTINGS = Settings(
    api_key=_get("LLMTTT_API_KEY", "ollama"),
    base_url=_get("LLMTTT_BASE_URL", "http://localhost:11434/v1"),
    model=_get("LLMTTT_MODEL", "llama3.2"),
    timeout_s=float(_get("LLMTTT_TIMEOUT_S", 120.0, cast=float)),
)

"""
Command-line entry point: play LLM vs LLM Tic-Tac-Toe games and print statistics.

Usage: python play.py --model llama3.2 --games 10
       python play.py --model qwen2.5 --o-model mistral --games 0   (unlimited, Ctrl+C to stop)
Endpoint and API key come from settings.yml / environment (see config.py) unless --url is given.
"""
from __future__ import annotations
import argparse, logging, signal, threading
from urllib.parse import urlsplit

from .board import X, O
from .config import SETTINGS
from .game import GameConfig
from . import llm_client
from .llm_player import LLMPlayer
from .session import run_session

log = logging.getLogger("cli")


def _parse_log_level(name: str | None) -> int:
    name = (name or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def api_base_url(url: str) -> str:
    """Accept a bare server root (http://localhost:11434) and add the /v1 API path."""
    url = url.rstrip("/")
    if urlsplit(url).path in ("", "/"):
        return url + "/v1"
    return url


def _retries(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("retries must be >= 1")
    return n


def _games(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError("games must be >= 0 (0 = unlimited)")
    return n


def _temperature(value: str) -> float:
    t = float(value)
    if not 0.0 <= t <= 2.0:
        raise argparse.ArgumentTypeError("temperature must be within 0.0-2.0")
    return t


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Play Tic-Tac-Toe between two LLM endpoints.")
    ap.add_argument("--url", default=None, help="Ollama/LM Studio server or OpenAI-compatible base URL; a bare root gets /v1 appended (default: LLMTTT_BASE_URL)")
    ap.add_argument("--model", default=SETTINGS.model, help="Model playing X (and O unless --o-model is given)")
    ap.add_argument("--o-model", default=None, help="Optional separate model playing O")
    ap.add_argument("--retries", type=_retries, default=3, help="Maximum attempts per move")
    ap.add_argument("--games", type=_games, default=1, help="Number of games to play (0 for unlimited)")
    ap.add_argument("--temperature", type=_temperature, default=None, help="Sampling temperature (0.0-2.0)")
    ap.add_argument("--debug", action="store_true", help="Show full prompts sent to the LLM")
    ap.add_argument("--out-dir", default=None, help="Directory for per-game history JSON and results.jsonl")
    ap.add_argument("--log-level", default="INFO", help="Python logging level (e.g., INFO, DEBUG)")
    return ap


def _install_sigint(cancel_event: threading.Event):
    """First Ctrl+C stops after the current game; a second one aborts immediately."""
    def handler(signum, frame):
        if cancel_event.is_set():
            signal.signal(signal.SIGINT, signal.default_int_handler)
            raise KeyboardInterrupt
        log.warning("Stop requested; finishing the current game (Ctrl+C again to abort)")
        cancel_event.set()
    signal.signal(signal.SIGINT, handler)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=_parse_log_level(args.log_level),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    # Quiet the SDK's per-request lines unless explicitly debugging
    if logging.getLogger().level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)

    base_url = api_base_url(args.url) if args.url else SETTINGS.base_url
    if args.url:
        llm_client.configure(base_url=base_url)

    x_player = LLMPlayer(model=args.model, temperature=args.temperature)
    o_player = LLMPlayer(model=args.o_model, temperature=args.temperature) if args.o_model else x_player
    players = {X: x_player, O: o_player}

    print("=== Tic-Tac-Toe: LLM vs LLM ===")
    print(f"X model: {x_player.label()}  O model: {o_player.label()}")
    print(f"Endpoint: {base_url}")
    print(f"Max retries: {args.retries}")
    print(f"Games to play: {'Unlimited' if args.games == 0 else args.games}")

    cancel_event = threading.Event()
    _install_sigint(cancel_event)
    cfg = GameConfig(max_retries=args.retries, debug=args.debug)
    stats = run_session(players, cfg=cfg, games=args.games, cancel_event=cancel_event, out_dir=args.out_dir)

    print()
    print("\n".join(stats.report_lines()))
    if args.out_dir:
        print(f"Outputs written under {args.out_dir}")
    return 0

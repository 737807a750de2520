"""
Session: run many games sequentially and aggregate outcome statistics.

- games > 0 plays a fixed number of games; games == 0 runs until cancel_event is set.
- Cancellation is only checked between games, never inside a running game.
- The starting player alternates by game number (X on odd games, O on even).
- With out_dir set, each game's history goes to g###.json and one summary line
  per game is appended to results.jsonl.
"""
from __future__ import annotations
import copy, json, logging, os, threading, time
from dataclasses import dataclass
from typing import Callable, Optional

from .game import GameConfig, GameResult, GameRunner, first_player_for_game

log = logging.getLogger("session")


@dataclass
class SessionStats:
    total: int = 0
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0
    abandoned: int = 0

    def record(self, result: GameResult) -> None:
        if result == GameResult.X_WINS:
            self.x_wins += 1
        elif result == GameResult.O_WINS:
            self.o_wins += 1
        elif result == GameResult.DRAW:
            self.draws += 1
        elif result == GameResult.ABANDONED:
            self.abandoned += 1
        else:
            raise ValueError(f"unknown game result: {result!r}")
        self.total += 1

    def _pct(self, count: int) -> float:
        if self.total == 0:
            return 0.0
        return round(count / self.total * 100, 1)

    def percentages(self) -> dict[str, float]:
        return {
            "x_wins": self._pct(self.x_wins),
            "o_wins": self._pct(self.o_wins),
            "draws": self._pct(self.draws),
            "abandoned": self._pct(self.abandoned),
        }

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "x_wins": self.x_wins,
            "o_wins": self.o_wins,
            "draws": self.draws,
            "abandoned": self.abandoned,
            "percentages": self.percentages(),
        }

    def report_lines(self) -> list[str]:
        pct = self.percentages()
        bar = "=" * 50
        lines = [
            bar,
            "FINAL STATISTICS",
            bar,
            f"Total games played: {self.total}",
            f"Player X wins:      {self.x_wins} ({pct['x_wins']:.1f}%)",
            f"Player O wins:      {self.o_wins} ({pct['o_wins']:.1f}%)",
            f"Draws:              {self.draws} ({pct['draws']:.1f}%)",
        ]
        if self.abandoned:
            lines.append(f"Abandoned:          {self.abandoned} ({pct['abandoned']:.1f}%)")
        lines.append(bar)
        return lines


def _game_cfg(base_cfg: GameConfig, game_number: int, out_dir: str | None) -> GameConfig:
    cfg = copy.deepcopy(base_cfg)
    if out_dir:
        cfg.history_path = os.path.join(out_dir, f"g{game_number:03d}.json")
    return cfg


def run_session(
    players: dict,
    cfg: GameConfig | None = None,
    games: int = 1,
    cancel_event: threading.Event | None = None,
    on_game_end: Optional[Callable[[GameRunner, SessionStats], None]] = None,
    out_dir: str | None = None,
) -> SessionStats:
    """Play `games` games (0 = until cancelled) and return the aggregated stats."""
    if games < 0:
        raise ValueError(f"games must be >= 0, got {games}")
    base_cfg = cfg or GameConfig()
    stats = SessionStats()
    unlimited = games == 0
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    jsonl_f = open(os.path.join(out_dir, "results.jsonl"), "a", encoding="utf-8") if out_dir else None
    try:
        game_number = 1
        while unlimited or game_number <= games:
            if cancel_event is not None and cancel_event.is_set():
                log.info("Session cancelled after %d games", stats.total)
                break
            runner = GameRunner(
                players,
                cfg=_game_cfg(base_cfg, game_number, out_dir),
                first_player=first_player_for_game(game_number),
                game_number=game_number,
            )
            result = runner.play()
            stats.record(result)
            if jsonl_f:
                jsonl_f.write(json.dumps(runner.summary()) + "\n")
                jsonl_f.flush()
            if on_game_end:
                on_game_end(runner, stats)
            game_number += 1

            if unlimited and base_cfg.pause_between_games_s > 0:
                log.info("Press Ctrl+C to stop, or the next game will start in %.0f seconds...", base_cfg.pause_between_games_s)
                if cancel_event is not None:
                    cancel_event.wait(base_cfg.pause_between_games_s)
                else:
                    time.sleep(base_cfg.pause_between_games_s)
    finally:
        if jsonl_f:
            jsonl_f.close()
    return stats

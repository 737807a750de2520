"""
Single-game runner and config.

- GameConfig: knobs for retry budget, debug prompt exposure, and logging.
- GameRunner: drives one game between two players (usually LLMPlayer instances).
  - Builds the prompt via prompting.py, asks the current player's generator,
    and resolves the reply with move_validator against the Board.
  - Each turn gets at most cfg.max_retries attempts with the same prompt; parse,
    occupied-cell, and transport failures all consume one attempt.
  - Running out of attempts abandons the game; it never raises.
  - Records every attempt (board snapshot, player, attempt number, raw reply,
    outcome) and can write a structured history JSON at the end.
"""
from __future__ import annotations
import enum, json, logging, os, time
from dataclasses import dataclass

from .board import Board, X, O, opponent
from .llm_client import LLMTransportError
from .move_validator import resolve_move, TRANSPORT_FAILURE
from .prompting import build_prompt


class GameResult(str, enum.Enum):
    X_WINS = "X"
    O_WINS = "O"
    DRAW = "draw"
    ABANDONED = "abandoned"

    @classmethod
    def for_winner(cls, mark: str) -> "GameResult":
        return cls.X_WINS if mark == X else cls.O_WINS


@dataclass(frozen=True)
class Move:
    player: str
    position: int


@dataclass
class GameConfig:
    max_retries: int = 3
    debug: bool = False          # expose the full prompt in logs and records
    game_log: bool = True        # log attempts/moves at INFO instead of DEBUG
    history_path: str | None = None  # optional JSON file written when the game ends
    pause_between_games_s: float = 2.0  # unlimited sessions only

    def __post_init__(self):
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")


def first_player_for_game(game_number: int) -> str:
    """X starts odd-numbered games, O starts even-numbered ones."""
    return X if game_number % 2 == 1 else O


class GameRunner:
    def __init__(self, players: dict, cfg: GameConfig | None = None, first_player: str = X, game_number: int | None = None):
        self.log = logging.getLogger("GameRunner")
        missing = [m for m in (X, O) if m not in players]
        if missing:
            raise ValueError(f"players must provide both marks, missing: {missing}")
        self.players = players
        self.cfg = cfg or GameConfig()
        self.first_player = first_player
        self.game_number = game_number
        self.board = Board()
        self.history: list[Move] = []
        self.records: list[dict] = []  # one dict per generator attempt
        self.result: GameResult | None = None
        self.turn = first_player
        self.start_ts = time.time()
        self.end_ts: float | None = None

    def _emit(self, msg: str, *args):
        if self.cfg.game_log:
            self.log.info(msg, *args)
        else:
            self.log.debug(msg, *args)

    def _label(self, mark: str) -> str:
        player = self.players[mark]
        label = getattr(player, "label", None)
        return label() if callable(label) else mark

    # ---------------- Turn -----------------
    def step(self) -> Move | None:
        """Play the current turn. Returns the applied Move, or None if the retry budget ran out."""
        player = self.turn
        prompt = build_prompt(self.board, player, self.history)
        if self.cfg.debug:
            self.log.info("Prompt for player %s:\n%s", player, prompt)
        generator = self.players[player]
        max_attempts = self.cfg.max_retries

        for attempt in range(1, max_attempts + 1):
            self._emit("Requesting move for %s from %s (attempt %d/%d)", player, self._label(player), attempt, max_attempts)
            try:
                raw = generator.generate(prompt)
            except LLMTransportError as e:
                self.log.warning("Generator error for %s: %s", player, e)
                outcome = {"ok": False, "reason": TRANSPORT_FAILURE, "detail": str(e), "raw": None}
            else:
                self._emit("Response from %s: %r", player, (raw or "").strip())
                outcome = resolve_move(self.board, player, raw)
            self._record(player, attempt, max_attempts, outcome, prompt)

            if outcome.get("ok"):
                mv = Move(player=player, position=outcome["position"])
                self.history.append(mv)
                row, col = divmod(mv.position, 3)
                self._emit("Player %s plays position %d (row %d, col %d)\n%s", player, mv.position, row, col, self.board.render())
                return mv
            self._emit("Invalid attempt by %s: %s", player, outcome.get("detail") or outcome.get("reason"))

        self.log.warning("Player %s failed to make a valid move after %d attempts", player, max_attempts)
        return None

    def _record(self, player: str, attempt: int, max_attempts: int, outcome: dict, prompt: str):
        rec = {
            "game": self.game_number,
            "turn": len(self.history) + 1,
            "player": player,
            "attempt": attempt,
            "max_attempts": max_attempts,
            "raw": outcome.get("raw"),
            "ok": bool(outcome.get("ok")),
            "position": outcome.get("position"),
            "reason": outcome.get("reason"),
            "board": self.board.snapshot(),
        }
        if self.cfg.debug:
            rec["prompt"] = prompt
        self.records.append(rec)

    # ---------------- Game -----------------
    def play(self) -> GameResult:
        if self.game_number is not None:
            self.log.info("=== Game %d === (%s starts)", self.game_number, self.first_player)
        while self.result is None:
            mv = self.step()
            if mv is None:
                self.result = GameResult.ABANDONED
                break
            winner = self.board.winner()
            if winner:
                self.result = GameResult.for_winner(winner)
            elif self.board.is_full():
                self.result = GameResult.DRAW
            else:
                self.turn = opponent(self.turn)
        self.end_ts = time.time()
        self.log.info("Game finished result=%s moves=%d", self.result.value, len(self.history))
        self.dump_history_json()
        return self.result

    # ---------------- Export -----------------
    def export_history(self) -> dict:
        """Structured representation of the game suitable for inspection."""
        return {
            "game": self.game_number,
            "first_player": self.first_player,
            "players": {mark: self._label(mark) for mark in (X, O)},
            "result": self.result.value if self.result else None,
            "moves": [{"ply": i, "player": mv.player, "position": mv.position} for i, mv in enumerate(self.history, start=1)],
            "attempts": self.records,
            "final_board": list(self.board.snapshot()),
        }

    def dump_history_json(self):
        path = self.cfg.history_path
        if not path:
            return
        try:
            dir_path = os.path.dirname(path)
            if dir_path:
                os.makedirs(dir_path, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.export_history(), f, ensure_ascii=False, indent=2)
            self.log.info("Wrote game history to %s", path)
        except OSError:
            self.log.exception("Failed writing game history")

    def summary(self) -> dict:
        failed = [r for r in self.records if not r["ok"]]
        end = self.end_ts or time.time()
        return {
            "game": self.game_number,
            "result": self.result.value if self.result else None,
            "winner": self.board.winner(),
            "first_player": self.first_player,
            "moves": [mv.position for mv in self.history],
            "moves_total": len(self.history),
            "attempts_total": len(self.records),
            "failed_attempts": len(failed),
            "transport_failures": sum(1 for r in failed if r["reason"] == TRANSPORT_FAILURE),
            "duration_s": round(end - self.start_ts, 2),
            "history_path": self.cfg.history_path,
        }

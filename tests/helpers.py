"""Shared fakes for the test modules."""
from llmtictactoe.board import Board, O, X
from llmtictactoe.llm_client import LLMTransportError


class ScriptedPlayer:
    """Generator that replays a shared list of replies, then fails like a dead endpoint."""

    def __init__(self, replies, name="scripted"):
        self.replies = replies
        self.name = name
        self.prompts: list[str] = []

    def label(self) -> str:
        return self.name

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.replies:
            raise LLMTransportError("no more scripted replies")
        return self.replies.pop(0)


class DeadPlayer:
    """Generator whose every call fails."""

    def __init__(self):
        self.calls = 0

    def generate(self, prompt: str) -> str:
        self.calls += 1
        raise LLMTransportError("connection refused")


def board_from(cells: str) -> Board:
    """Build a board from a 9-char row-major string using 'X', 'O' and '.' for empty."""
    board = Board()
    for pos, ch in enumerate(cells):
        if ch in (X, O):
            assert board.apply(pos, ch)
    return board

"""In-memory conversation log for the active repository."""

from __future__ import annotations

from collections.abc import Iterator

from .models import ConversationTurn, Role


class ConversationSession:
    """Ordered log of user and assistant turns.

    Append order is the only guarantee; role alternation is not checked.
    """

    def __init__(self) -> None:
        self._turns: list[ConversationTurn] = []

    def append(self, turn: ConversationTurn) -> None:
        self._turns.append(turn)

    def add_exchange(self, question: str, answer: str) -> None:
        """Append a user turn followed by the assistant's reply."""
        self.append(ConversationTurn(Role.USER, question))
        self.append(ConversationTurn(Role.ASSISTANT, answer))

    def reset(self) -> None:
        self._turns = []

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        """All turns, oldest first."""
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(tuple(self._turns))

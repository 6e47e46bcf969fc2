"""
Purpose: The single-slot message modal shown to the user.
What it does:
Holds at most one message and an open flag. A new message replaces the
current one (no queueing). Only an explicit acknowledgment closes it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, List


@dataclass(frozen=True)
class ModalState:
    message: str = ""
    is_open: bool = False


def show_message(state: ModalState, message: str) -> ModalState:
    return replace(state, message=message, is_open=True)


def acknowledge(state: ModalState) -> ModalState:
    # message text is kept so a closing animation can still render it
    return replace(state, is_open=False)


class MessageModal:
    """
    Stateful wrapper the controllers call through `show`.
    Listeners are notified after every change.
    """
    def __init__(self):
        self.state = ModalState()
        self._listeners: List[Callable[[ModalState], None]] = []

    @property
    def is_open(self) -> bool:
        return self.state.is_open

    @property
    def message(self) -> str:
        return self.state.message

    def subscribe(self, listener: Callable[[ModalState], None]) -> None:
        self._listeners.append(listener)

    def show(self, message: str) -> None:
        self.state = show_message(self.state, message)
        self._notify()

    def close(self) -> None:
        self.state = acknowledge(self.state)
        self._notify()

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self.state)

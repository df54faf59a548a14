from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .models import RequestFailure, ResponseMetadata, ResponseRecord
from .parsing import format_response, response_metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class Error:
    message: str


LifecycleState = Idle | Loading | Success | Error


class RequestLifecycle:
    """State machine for one request slot.

    Every ``begin()`` hands out a new generation number. An outcome is applied
    only if it carries the current generation, so a slow earlier request can
    never overwrite the state of a newer one.
    """

    def __init__(self) -> None:
        self.state: LifecycleState = Idle()
        self.metadata = ResponseMetadata()
        self.generation = 0
        self._listeners: list[Callable[[RequestLifecycle], None]] = []

    def add_listener(self, listener: Callable[[RequestLifecycle], None]) -> None:
        """Call ``listener`` after every applied transition."""
        self._listeners.append(listener)

    def begin(self) -> int:
        self.generation += 1
        self.state = Loading()
        self.metadata = ResponseMetadata()
        self._notify()
        return self.generation

    def resolve(self, generation: int, outcome: ResponseRecord | RequestFailure) -> bool:
        if generation != self.generation:
            logger.debug("Discarding stale result (generation %s, current %s)", generation, self.generation)
            return False
        match outcome:
            case ResponseRecord():
                self.state = Success(format_response(outcome))
                self.metadata = response_metadata(outcome)
            case RequestFailure(message=message):
                self.state = Error(message)
                self.metadata = ResponseMetadata()
        self._notify()
        return True

    @property
    def can_copy(self) -> bool:
        return isinstance(self.state, (Success, Error))

    def copy_text(self) -> str | None:
        match self.state:
            case Success(text=text):
                return text
            case Error(message=message):
                return message
            case _:
                return None

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def display_text(self) -> str:
        match self.state:
            case Idle():
                return "Enter URL and send request."
            case Loading():
                return "Loading..."
            case Success(text=text):
                return text
            case Error(message=message):
                return f"Error: {message}"
        return ""

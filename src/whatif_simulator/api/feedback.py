"""Feedback storage and session id generation.

The feedback store is the only state shared across requests. It is an
explicit interface injected into the API layer, so the pipeline itself holds
no singletons. Entries are append-only per session id.
"""

import itertools
import threading
import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable

from whatif_simulator.models import UserFeedback

SessionIdGenerator = Callable[[], str]


class FeedbackStore(ABC):
    """Abstract base class for feedback storage."""

    @abstractmethod
    def put(self, session_id: str, feedback: UserFeedback) -> None:
        """Append feedback for a session.

        Args:
            session_id: Session the feedback belongs to
            feedback: Validated feedback record
        """
        pass

    @abstractmethod
    def get_all(self, session_id: str) -> list[UserFeedback]:
        """Return feedback for one session in submission order.

        Returns:
            List of feedback records, empty if the session is unknown
        """
        pass

    @abstractmethod
    def all_feedback(self) -> list[UserFeedback]:
        """Return every stored feedback record across sessions."""
        pass

    @abstractmethod
    def session_count(self) -> int:
        """Return the number of sessions with at least one feedback record."""
        pass


class InMemoryFeedbackStore(FeedbackStore):
    """Process-local feedback store guarded by a lock."""

    def __init__(self):
        self._lock = threading.Lock()
        self._feedback: dict[str, list[UserFeedback]] = {}

    def put(self, session_id: str, feedback: UserFeedback) -> None:
        with self._lock:
            self._feedback.setdefault(session_id, []).append(feedback)

    def get_all(self, session_id: str) -> list[UserFeedback]:
        with self._lock:
            return list(self._feedback.get(session_id, []))

    def all_feedback(self) -> list[UserFeedback]:
        with self._lock:
            return [entry for entries in self._feedback.values() for entry in entries]

    def session_count(self) -> int:
        with self._lock:
            return len(self._feedback)


class CounterSessionIdGenerator:
    """Monotonic session ids of the form ``session_{epoch_ms}_{n}``."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"session_{int(time.time() * 1000)}_{n}"


def uuid_session_id() -> str:
    """Random session id."""
    return f"session_{uuid.uuid4().hex}"

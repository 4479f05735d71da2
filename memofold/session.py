from __future__ import annotations

import threading
from dataclasses import dataclass, field
from .types import *
from .memo import MemoStore
from .sequence import Sequence
from .extensions.terminal import TerminalAccessor


@dataclass(frozen=True)
class RecurrenceSpec(Generic[S, T]):
    """
    initial state plus a combining operation: F(i) = operation(F(i-1), seq[i]), F(-1) = initial.
    the operation must be deterministic and free of side effects; failures it
    wants to report belong in the returned state (see types.Failure).
    """
    initial: S
    operation: Operation[S, T]
    name: str = field(default='recurrence', compare=False)

    def __post_init__(self):
        if not callable(self.operation):
            raise TypeError(f"operation must be callable, got {type(self.operation).__name__}")


class EvaluationSession(Generic[S, T]):
    """
    one logical computation: a sequence, a recurrence and the memo they own.
    the memo is never shared; a new (sequence, spec) pair needs a new session.
    """

    def __init__(self, sequence: Sequence[T], spec: RecurrenceSpec[S, T]):
        if not isinstance(sequence, Sequence):
            raise TypeError(f"expected a Sequence, got {type(sequence).__name__}")
        self.sequence = sequence
        self.spec = spec
        self.memo: MemoStore[S] = MemoStore()
        self.lock = threading.RLock()
        self.failed_at: Optional[Index] = None
        self.operation_calls = 0
        self.to = TerminalAccessor(self)

    @property
    def frontier(self) -> Optional[Index]:
        return self.memo.highest_known_index()

    @property
    def state(self) -> SessionState:
        if self.failed_at is not None:
            return SessionState.FAILED
        frontier = self.frontier
        if frontier is None:
            return SessionState.EMPTY
        if frontier == self.sequence.length() - 1:
            return SessionState.COMPLETE
        return SessionState.PARTIAL

    def _get_data(self) -> List[S]:
        return self.memo.values()

    # --- conveniences over the default evaluator and selector ---

    def evaluate(self, target: Index) -> S:
        from .evaluator import default_evaluator
        return default_evaluator().evaluate(self, target)

    def select(self, target: Index) -> S:
        from .selector import select
        return select(self, target)

    def __repr__(self) -> str:
        return (f"EvaluationSession(spec={self.spec.name!r}, length={self.sequence.length()}, "
                f"state={self.state.value}, frontier={self.frontier})")


def open_session(sequence: Sequence[T], spec: RecurrenceSpec[S, T]) -> EvaluationSession[S, T]:
    """start a fresh session for a sequence and recurrence"""
    return EvaluationSession(sequence, spec)

from .types import *
from .errors import check_index
from .sequence import Sequence
from .session import EvaluationSession, RecurrenceSpec


def drop_first(remaining: Sequence[T], _element: T) -> Sequence[T]:
    """the recurrence step: one more element dropped from the front"""
    return remaining.without_first()


def dropping_spec(sequence: Sequence[T]) -> RecurrenceSpec[Sequence[T], T]:
    """state is the remaining suffix; starts as the whole sequence"""
    return RecurrenceSpec(sequence, drop_first, name='drop-first')


class PrefixDropper(Generic[T]):
    """
    indexed access built from "drop the first k+1 elements" and "head",
    walked bottom-up through the memoized evaluator. each suffix is made
    once per dropper, so asking for increasing indices costs o(k) in total.
    """

    def __init__(self, sequence: Sequence[T], evaluator=None):
        from .evaluator import default_evaluator
        self.sequence = sequence
        self.session: EvaluationSession[Sequence[T], T] = EvaluationSession(sequence, dropping_spec(sequence))
        self._evaluator = evaluator or default_evaluator()

    def suffix_after(self, k: Index) -> Sequence[T]:
        """the sequence with its first k+1 elements removed"""
        return self._evaluator.evaluate(self.session, k)

    def drop(self, count: int) -> Sequence[T]:
        """the sequence with its first count elements removed, 0 <= count <= length"""
        count = check_index(count, self.sequence.length() + 1, "drop count")
        if count == 0:
            return self.sequence
        return self.suffix_after(count - 1)

    def element_at(self, index: Index) -> T:
        """element at an absolute index of the original sequence"""
        index = check_index(index, self.sequence.length())
        return self.drop(index).head()

    def __getitem__(self, index: Index) -> T:
        return self.element_at(index)

    def __repr__(self) -> str:
        return f"PrefixDropper(length={self.sequence.length()}, frontier={self.session.frontier})"

from enum import Enum
from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Sequence as _AbcSequence
)

T = TypeVar('T')
S = TypeVar('S')
U = TypeVar('U')

Index = int
Predicate = Callable[[T], bool]
Operation = Callable[[S, T], S]
DataFunc = Callable[[], _AbcSequence[T]]


class SessionState(Enum):
    """lifecycle of an evaluation session"""
    EMPTY = 'empty'
    PARTIAL = 'partial'
    COMPLETE = 'complete'
    FAILED = 'failed'


class Outcome(Generic[T]):
    """tagged result for operations that can fail without raising"""

    ok: bool = True

    @property
    def failed(self) -> bool: return not self.ok


class Success(Outcome[T]):
    """a successful step carrying its value"""

    ok = True

    def __init__(self, value: T):
        self.value = value

    def __eq__(self, other) -> bool:
        return isinstance(other, Success) and other.value == self.value

    def __hash__(self) -> int:
        return hash(('success', self.value))

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


class Failure(Outcome[Any]):
    """a failed step; carries the reason and the index it happened at"""

    ok = False

    def __init__(self, reason: str, index: Optional[int] = None):
        self.reason = reason
        self.index = index

    def at(self, index: int) -> 'Failure':
        """same failure, pinned to an index"""
        return self if self.index == index else Failure(self.reason, index)

    def __eq__(self, other) -> bool:
        return isinstance(other, Failure) and (other.reason, other.index) == (self.reason, self.index)

    def __hash__(self) -> int:
        return hash(('failure', self.reason, self.index))

    def __repr__(self) -> str:
        return f"Failure(reason={self.reason!r}, index={self.index})"


def is_failure(value: Any) -> bool:
    return isinstance(value, Failure)

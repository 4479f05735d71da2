from .types import *
from .memo import MemoStore


class IndexPlan:
    """
    the ascending indices that must be materialized to answer a target.

    a plan always starts just past the memo frontier and is walked strictly
    left to right, so each step only needs the previous result.
    """

    def __init__(self, start: Index, target: Index):
        self.start = start
        self.target = target

    @classmethod
    def for_target(cls, memo: MemoStore, target: Index) -> 'IndexPlan':
        frontier = memo.highest_known_index()
        start = 0 if frontier is None else frontier + 1
        return cls(start, target)

    @property
    def is_empty(self) -> bool:
        """true when the target is already memoized"""
        return self.start > self.target

    def indices(self) -> range:
        return range(self.start, self.target + 1)

    def __iter__(self) -> Iterator[Index]:
        return iter(self.indices())

    def __len__(self) -> int:
        return len(self.indices())

    def __repr__(self) -> str:
        return f"IndexPlan(start={self.start}, target={self.target}, steps={len(self)})"

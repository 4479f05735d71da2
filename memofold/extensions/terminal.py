from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from functools import reduce
from ..types import *

if typing.TYPE_CHECKING:
    from ..sequence import Sequence
    from ..session import EvaluationSession


class TerminalAccessor(Generic[T]):
    """
    exports for anything exposing _get_data(): a sequence's elements, or a
    session's memoized results F(0)..F(frontier).
    """

    def __init__(self, source: Union['Sequence[T]', 'EvaluationSession']):
        self._source = source

    def list(self) -> List[T]:
        """convert to list"""
        return self._source._get_data()

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self._source._get_data())

    def pandas(self) -> pd.Series:
        """convert to pandas series, indexed by position"""
        data = self._source._get_data()
        return pd.Series(data, index=pd.RangeIndex(len(data)), dtype=None if data else object)

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self._source._get_data())

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        if predicate is None: return len(self._source._get_data())
        return sum(1 for x in self._source._get_data() if predicate(x))

    def first(self) -> T:
        """get first element"""
        data = self._source._get_data()
        if not data: raise ValueError("sequence contains no elements")
        return data[0]

    def last(self) -> T:
        """get last element"""
        data = self._source._get_data()
        if not data: raise ValueError("sequence contains no elements")
        return data[-1]

    def aggregate(self, accumulator: Operation[S, T], seed: S) -> S:
        """left fold from the seed, no memoization"""
        return reduce(accumulator, self._source._get_data(), seed)

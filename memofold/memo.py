import logging
import math
import numpy as np
import pandas as pd
from .types import *
from .errors import DuplicateIndex

logger = logging.getLogger(__name__)


def values_equal(a: Any, b: Any) -> bool:
    """equality that also works for numpy arrays and pandas objects"""
    if a is b:
        return True
    # nan never equals itself, but two nan states are the same result
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    if isinstance(a, (pd.Series, pd.DataFrame)) or isinstance(b, (pd.Series, pd.DataFrame)):
        return type(a) is type(b) and a.equals(b)
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        a, b = np.asarray(a), np.asarray(b)
        # equal_nan only works on inexact dtypes
        nan_ok = np.issubdtype(a.dtype, np.inexact) and np.issubdtype(b.dtype, np.inexact)
        return np.array_equal(a, b, equal_nan=nan_ok)
    result = a == b
    if isinstance(result, np.ndarray):
        return bool(result.all())
    return bool(result)


class MemoStore(Generic[S]):
    """
    append-only map from index to computed result.
    indices are stored contiguously from 0, so the backing store is a list
    and the frontier is its last position.
    """

    def __init__(self):
        self._cache: List[S] = []

    def get(self, index: Index) -> Optional[S]:
        """memoized value or None. no side effects."""
        if 0 <= index < len(self._cache):
            return self._cache[index]
        return None

    def contains(self, index: Index) -> bool:
        return 0 <= index < len(self._cache)

    def put(self, index: Index, value: S) -> None:
        """
        memoize a value. re-putting an equal value is a no-op (safe retry);
        a different value raises DuplicateIndex.
        """
        if index < 0:
            raise ValueError(f"memo index must be non-negative, got {index}")
        if index < len(self._cache):
            existing = self._cache[index]
            if values_equal(existing, value):
                return
            logger.error(f"duplicate memo entry at index {index}: {existing!r} != {value!r}")
            raise DuplicateIndex(index, existing, value)
        if index != len(self._cache):
            raise ValueError(f"memo indices must be contiguous: expected {len(self._cache)}, got {index}")
        self._cache.append(value)

    def highest_known_index(self) -> Optional[Index]:
        """the frontier, or None when nothing is memoized"""
        return len(self._cache) - 1 if self._cache else None

    def values(self) -> List[S]:
        """memoized values in index order (a copy)"""
        return list(self._cache)

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, index: Index) -> bool:
        return self.contains(index)

    def __repr__(self) -> str:
        return f"MemoStore(size={len(self._cache)}, frontier={self.highest_known_index()})"

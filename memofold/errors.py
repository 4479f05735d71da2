import numbers
from typing import Any


class OutOfRange(IndexError):
    """index or evaluation target outside [0, length)"""

    def __init__(self, index: Any, length: int, what: str = "index"):
        self.index = index
        self.length = length
        if length == 0:
            message = f"{what} {index} is out of range for an empty sequence"
        else:
            message = f"{what} {index} is out of range [0, {length})"
        super().__init__(message)


class DuplicateIndex(ValueError):
    """an index was memoized twice with different values"""

    def __init__(self, index: int, existing: Any, value: Any):
        self.index = index
        self.existing = existing
        self.value = value
        super().__init__(
            f"index {index} already memoized with {existing!r}, refusing {value!r} "
            f"(operation is not deterministic or the session is corrupted)"
        )


def check_index(index: Any, length: int, what: str = "index") -> int:
    """validate an index against a length, returning it as a plain int"""
    # bool is integral but never a meaningful index
    if not isinstance(index, numbers.Integral) or isinstance(index, bool):
        raise TypeError(f"{what} must be an int, got {type(index).__name__}")
    index = int(index)
    if index < 0 or index >= length:
        raise OutOfRange(index, length, what)
    return index

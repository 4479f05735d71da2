import math
import operator
import typing
from .types import *

if typing.TYPE_CHECKING:
    from .session import RecurrenceSpec

# --- stock recurrences ---

def fold(operation: Operation[S, T], initial: S, name: str = 'fold') -> 'RecurrenceSpec[S, T]':
    """left fold: F(i) = operation(F(i-1), x[i]), F(-1) = initial"""
    from .session import RecurrenceSpec
    return RecurrenceSpec(initial, operation, name=name)

def prefix_sum(initial: Any = 0) -> 'RecurrenceSpec[Any, Any]':
    """running total"""
    return fold(operator.add, initial, name='prefix-sum')

def running_max() -> 'RecurrenceSpec[Any, Any]':
    """largest element so far, starting from -inf"""
    return fold(max, -math.inf, name='running-max')

def running_min() -> 'RecurrenceSpec[Any, Any]':
    """smallest element so far, starting from +inf"""
    return fold(min, math.inf, name='running-min')

def checked(operation: Operation[S, T], check: Callable[[S], bool],
            reason: str = "check failed") -> Operation[S, T]:
    """
    wrap an operation so a result rejected by check becomes a Failure instead of
    a memoized value. example: checked(operator.add, lambda s: s < 2**31, "overflow")
    """
    def checked_operation(state: S, element: T) -> S:
        result = operation(state, element)
        if not check(result):
            return Failure(f"{reason}: {result!r}")
        return result
    return checked_operation

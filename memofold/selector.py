from .types import *
from .errors import check_index
from .session import EvaluationSession


class Selector(Generic[S, T]):
    """
    materialize then read: make sure F(k) is memoized, then return the stored
    value. the ordering is explicit (evaluate first, read second) rather than
    a side effect of how arguments happen to be evaluated.
    """

    def __init__(self, session: EvaluationSession[S, T], evaluator=None):
        from .evaluator import default_evaluator
        self.session = session
        self.evaluator = evaluator or default_evaluator()

    def select(self, target: Index) -> S:
        target = check_index(target, self.session.sequence.length(), "target")
        with self.session.lock:
            result = self.evaluator.evaluate(self.session, target)
            # past a stored failure the evaluator hands back the failure itself
            if not self.session.memo.contains(target): return result
            return self.session.memo.get(target)

    def select_last(self) -> S:
        """F(N-1)"""
        return self.select(self.session.sequence.length() - 1)

    def select_range(self, lo: Index, hi: Index) -> List[S]:
        """F(lo)..F(hi) inclusive after one walk to hi"""
        n = self.session.sequence.length()
        lo = check_index(lo, n, "lower bound")
        hi = check_index(hi, n, "upper bound")
        if lo > hi:
            raise ValueError(f"lower bound {lo} is greater than upper bound {hi}")
        with self.session.lock:
            self.evaluator.evaluate(self.session, hi)
            return [self.select(i) for i in range(lo, hi + 1)]

    def lookup(self, target: Index) -> Optional[S]:
        """read-only: the memoized value, or None without computing anything"""
        target = check_index(target, self.session.sequence.length(), "target")
        return self.session.memo.get(target)


def select(session: EvaluationSession[S, T], target: Index) -> S:
    return Selector(session).select(target)


def select_last(session: EvaluationSession[S, T]) -> S:
    return Selector(session).select_last()


def select_range(session: EvaluationSession[S, T], lo: Index, hi: Index) -> List[S]:
    return Selector(session).select_range(lo, hi)


def lookup(session: EvaluationSession[S, T], target: Index) -> Optional[S]:
    return Selector(session).lookup(target)

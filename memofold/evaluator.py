import logging
import threading
from .types import *
from .config import EvaluatorConfig
from .errors import DuplicateIndex, check_index
from .memo import values_equal
from .plan import IndexPlan
from .sequence import Sequence
from .session import EvaluationSession, RecurrenceSpec

logger = logging.getLogger(__name__)


def reference_fold(sequence: Sequence[T], spec: RecurrenceSpec[S, T], target: Index,
                   stop_on_failure: bool = True) -> S:
    """
    F(target) recomputed from the initial state with no memo.
    o(target) per call; this is the oracle the memoized walk must agree with.
    """
    target = check_index(target, sequence.length(), "target")
    state = spec.initial
    for i in range(target + 1):
        state = spec.operation(state, sequence.at(i))
        if is_failure(state):
            state = state.at(i)
            if stop_on_failure: return state
    return state


class RecurrenceEvaluator:
    """
    drives an IndexPlan over a session's memo.

    the walk is a flat loop from the frontier to the target: every step reads
    only the previous result, so nesting depth stays constant no matter how
    far the target is, and each index is combined at most once per session.
    """

    def __init__(self, config: Optional[EvaluatorConfig] = None):
        self.config = config or EvaluatorConfig()

    def evaluate(self, session: EvaluationSession[S, T], target: Index) -> S:
        """F(target), extending the memo frontier up to target if needed"""
        with session.lock:
            sequence, spec, memo = session.sequence, session.spec, session.memo
            target = check_index(target, sequence.length(), "target")

            # nothing past a stored failure is meaningful
            if session.failed_at is not None and target >= session.failed_at:
                logger.debug(f"{spec.name}: target {target} is past failure at {session.failed_at}")
                return memo.get(session.failed_at)

            plan = IndexPlan.for_target(memo, target)
            if plan.is_empty:
                logger.debug(f"{spec.name}: memo hit for index {target}")
                return memo.get(target)

            # the base case reads the initial state, never index -1
            prev = spec.initial if plan.start == 0 else memo.get(plan.start - 1)
            logger.debug(f"{spec.name}: walking {plan}")

            for i in plan:
                current = spec.operation(prev, sequence.at(i))
                session.operation_calls += 1
                if is_failure(current):
                    current = current.at(i)
                memo.put(i, current)
                if self.config.verify:
                    self._verify(session, i, current)
                if is_failure(current) and self.config.stop_on_failure:
                    session.failed_at = i
                    logger.warning(f"{spec.name}: operation failed at index {i}: {current.reason}")
                    return current
                prev = current

            if session.state is SessionState.COMPLETE:
                logger.info(f"{spec.name}: session complete after {session.operation_calls} operation calls")
            return prev

    def evaluate_many(self, session: EvaluationSession[S, T], targets: Iterable[Index]) -> List[S]:
        """results for several targets, in request order, from a single ascending walk"""
        targets = [check_index(t, session.sequence.length(), "target") for t in targets]
        results = {t: self.evaluate(session, t) for t in sorted(set(targets))}
        return [results[t] for t in targets]

    def _verify(self, session: EvaluationSession[S, T], index: Index, value: S) -> None:
        expected = reference_fold(session.sequence, session.spec, index, self.config.stop_on_failure)
        if not values_equal(expected, value):
            logger.error(f"{session.spec.name}: memoized value at {index} disagrees with a fold from scratch")
            raise DuplicateIndex(index, expected, value)


_default: Optional[RecurrenceEvaluator] = None
_default_lock = threading.Lock()


def default_evaluator() -> RecurrenceEvaluator:
    """shared evaluator configured from the environment"""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = RecurrenceEvaluator(EvaluatorConfig.from_env())
    return _default


def evaluate(session: EvaluationSession[S, T], target: Index) -> S:
    return default_evaluator().evaluate(session, target)

import math
import operator
import threading
import numpy as np
import suite
import dgen
import memofold.evaluator
from memofold import (
    from_iterable, from_range, empty, open_session, fold, prefix_sum, running_max, running_min, checked,
    RecurrenceEvaluator, RecurrenceSpec, EvaluatorConfig, reference_fold, OutOfRange, DuplicateIndex,
    Failure, Success, SessionState, default_evaluator
)

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

evaluator = RecurrenceEvaluator()


def counting(operation):
    """wrap an operation, recording the element of every call"""
    calls = []

    def counted(state, element):
        calls.append(element)
        return operation(state, element)
    return counted, calls


# concrete scenarios

@test("prefix sum of 0..999 is 499500")
def test_prefix_sum_thousand():
    session = open_session(from_range(0, 1000), prefix_sum())
    result = evaluator.evaluate(session, 999)
    assert_that(result == 499500, f"sum should be 499500: {result}")
    assert_that(session.state is SessionState.COMPLETE, f"session should be complete: {session.state}")


@test("second evaluation reuses the memoized prefix")
def test_reuse_prefix():
    op, calls = counting(operator.add)
    session = open_session(from_range(0, 1000), fold(op, 0))
    assert_that(evaluator.evaluate(session, 10) == 55, "sum of 0..10 is 55")
    assert_that(evaluator.evaluate(session, 999) == 499500, "sum of 0..999 is 499500")
    assert_that(len(calls) == 1000, f"operation should run exactly 1000 times, not 1011: {len(calls)}")
    assert_that(session.operation_calls == 1000, "session counter should agree")


@test("running max equals the largest element")
def test_running_max():
    data = [3, -7, 12, 5, 9]
    session = open_session(from_iterable(data), running_max())
    assert_that(session.spec.initial == -math.inf, "running max starts at -inf")
    assert_that(evaluator.evaluate(session, 4) == max(data), "should find max element")


@test("target equal to length raises OutOfRange")
def test_target_past_end():
    session = open_session(from_range(0, 5), prefix_sum())
    error = assert_raises(OutOfRange, evaluator.evaluate, session, 5)
    assert_that("target 5" in str(error), f"unexpected message: {error}")
    assert_that(session.state is SessionState.EMPTY, "failed request must not start a walk")


# properties

@test("memoized results match a fold from scratch")
def test_memo_equivalence():
    for seed in range(5):
        values = dgen.ints(60, seed=seed)
        spec = fold(lambda s, x: (s * 31 + x) % 1000003, 7)
        session = open_session(values, spec)
        for k in [0, 17, 3, 59, 42, 59]:
            got = evaluator.evaluate(session, k)
            expected = reference_fold(values, spec, k)
            assert_that(got == expected, f"seed {seed}, k {k}: {got} != {expected}")
        assert_that(session.to.list() == [reference_fold(values, spec, k) for k in range(60)],
                    "every memo entry should equal the reference")


@test("operation runs once per index across repeated requests")
def test_single_invocation():
    op, calls = counting(operator.add)
    session = open_session(from_range(1, 50), fold(op, 0))
    for k in [0, 0, 5, 5, 20, 3, 49, 10, 49]:
        evaluator.evaluate(session, k)
    assert_that(calls == list(range(1, 51)), "each element should be combined exactly once, in order")


@test("frontier is non-decreasing across requests")
def test_frontier_monotonic():
    session = open_session(from_range(0, 30), prefix_sum())
    frontiers = []
    for k in [4, 2, 9, 0, 29, 15]:
        evaluator.evaluate(session, k)
        frontiers.append(session.frontier)
    assert_that(frontiers == [4, 4, 9, 9, 29, 29], f"unexpected frontiers: {frontiers}")


@test("index 0 combines the initial state with the first element")
def test_base_case():
    seen = []

    def op(state, element):
        seen.append((state, element))
        return state + element

    session = open_session(from_iterable([5, 6]), RecurrenceSpec(100, op))
    assert_that(evaluator.evaluate(session, 0) == 105, "F(0) = op(S0, x0)")
    assert_that(seen == [(100, 5)], f"base case should see the initial state only: {seen}")


@test("empty sequence rejects every target")
def test_empty_sequence():
    session = open_session(empty(), prefix_sum())
    for k in [0, 1, -1]:
        assert_raises(OutOfRange, evaluator.evaluate, session, k)


@test("state machine moves from empty to partial to complete")
def test_state_machine():
    session = open_session(from_range(0, 4), prefix_sum())
    assert_that(session.state is SessionState.EMPTY, "new session is empty")
    evaluator.evaluate(session, 1)
    assert_that(session.state is SessionState.PARTIAL and session.frontier == 1, "partial at 1")
    evaluator.evaluate(session, 0)
    assert_that(session.frontier == 1, "lookup below the frontier is a no-op")
    evaluator.evaluate(session, 3)
    assert_that(session.state is SessionState.COMPLETE, "complete at N-1")
    assert_that(evaluator.evaluate(session, 2) == 3, "complete session is still queryable")


@test("deep targets do not recurse")
def test_no_recursion_depth():
    session = open_session(from_range(0, 200000), prefix_sum())
    result = evaluator.evaluate(session, 199999)
    assert_that(result == 199999 * 200000 // 2, f"unexpected total: {result}")


@test("evaluate_many answers in request order with one walk")
def test_evaluate_many():
    op, calls = counting(operator.add)
    session = open_session(from_range(0, 10), fold(op, 0))
    results = evaluator.evaluate_many(session, [9, 0, 4, 9])
    assert_that(results == [45, 0, 10, 45], f"unexpected results: {results}")
    assert_that(len(calls) == 10, f"one walk should cover all targets: {len(calls)}")
    assert_raises(OutOfRange, evaluator.evaluate_many, session, [1, 10])


@test("running min over floats")
def test_running_min():
    session = open_session(from_iterable([2.5, -1.0, 3.0]), running_min())
    assert_that(session.to.list() == [], "nothing memoized yet")
    evaluator.evaluate(session, 2)
    assert_that(session.to.list() == [2.5, -1.0, -1.0], f"unexpected minima: {session.to.list()}")


# failures embedded in the state

@test("failure stops the frontier and is returned for later targets")
def test_failure_stops_frontier():
    op, calls = counting(checked(operator.add, lambda s: s < 10, "overflow"))
    session = open_session(from_iterable([4, 4, 4, 4, 4]), fold(op, 0))
    result = evaluator.evaluate(session, 4)
    assert_that(isinstance(result, Failure), f"should return a failure: {result}")
    assert_that(result.index == 2 and "overflow" in result.reason, f"failure at index 2: {result}")
    assert_that(session.frontier == 2 and session.failed_at == 2, "frontier stops at the failure")
    assert_that(session.state is SessionState.FAILED, "session reports failed")
    assert_that(evaluator.evaluate(session, 3) == result, "later targets see the same failure")
    assert_that(evaluator.evaluate(session, 1) == 8, "earlier targets are unaffected")
    assert_that(len(calls) == 3, f"no retries and no work past the failure: {len(calls)}")


@test("failures agree with the reference fold")
def test_failure_reference():
    spec = fold(checked(operator.mul, lambda s: abs(s) < 1000), 1)
    values = from_iterable([5, 5, 5, 5, 5])
    session = open_session(values, spec)
    assert_that(evaluator.evaluate(session, 4) == reference_fold(values, spec, 4), "both should fail at index 4")


@test("continuing past failures when configured")
def test_failure_without_stop():
    lenient = RecurrenceEvaluator(EvaluatorConfig(stop_on_failure=False))

    def op(state, element):
        if isinstance(state, Failure) or element < 0:
            return Failure("negative input")
        return state + element

    session = open_session(from_iterable([1, -1, 2]), fold(op, 0))
    result = lenient.evaluate(session, 2)
    assert_that(isinstance(result, Failure) and result.index == 2, f"failure carried to the end: {result}")
    assert_that(session.frontier == 2 and session.failed_at is None, "frontier keeps moving")


@test("exceptions from the operation propagate and leave the memo consistent")
def test_operation_exception():
    def op(state, element):
        if element == 3:
            raise ZeroDivisionError("boom")
        return state + element

    session = open_session(from_range(0, 6), fold(op, 0))
    assert_raises(ZeroDivisionError, evaluator.evaluate, session, 5)
    assert_that(session.frontier == 2, f"frontier should stop before the failing index: {session.frontier}")
    assert_that(evaluator.evaluate(session, 2) == 3, "memoized prefix is still valid")


@test("tagged outcomes flow through as ordinary states")
def test_tagged_outcomes():
    def op(state, element):
        if element == 0:
            return Failure("division by zero")
        return Success(state.value / element)

    ok = open_session(from_iterable([2, 5]), fold(op, Success(100)))
    assert_that(evaluator.evaluate(ok, 1) == Success(10.0), "100 / 2 / 5")
    assert_that(ok.state is SessionState.COMPLETE and not ok.to.last().failed, "no failure recorded")

    bad = open_session(from_iterable([2, 0, 5]), fold(op, Success(100)))
    result = evaluator.evaluate(bad, 2)
    assert_that(result.failed and result.index == 1, f"failure pinned to index 1: {result}")


# verification mode

@test("verify mode accepts deterministic operations")
def test_verify_ok():
    checking = RecurrenceEvaluator(EvaluatorConfig(verify=True))
    session = open_session(from_range(0, 20), prefix_sum())
    assert_that(checking.evaluate(session, 19) == 190, "sum of 0..19 is 190")


@test("verify mode catches a non-deterministic operation")
def test_verify_catches_drift():
    checking = RecurrenceEvaluator(EvaluatorConfig(verify=True))
    ticks = []

    def drifting(state, element):
        ticks.append(1)
        return state + element + len(ticks)

    session = open_session(from_range(0, 5), fold(drifting, 0))
    assert_raises(DuplicateIndex, checking.evaluate, session, 4)


@test("verify mode accepts nan states")
def test_verify_nan():
    checking = RecurrenceEvaluator(EvaluatorConfig(verify=True))
    session = open_session(from_iterable([math.inf, -math.inf, 1.0]), prefix_sum())
    result = checking.evaluate(session, 2)
    assert_that(math.isnan(result), f"inf + -inf + 1 should be nan: {result}")
    assert_that(session.frontier == 2, "every nan entry should be memoized")


# numpy integer targets

@test("numpy integer targets are accepted")
def test_numpy_targets():
    session = open_session(from_iterable([3, 9, 2, 7]), prefix_sum())
    result = evaluator.evaluate(session, np.argmax([3, 9, 2, 7]))
    assert_that(result == 12 and type(result) is int, f"F(1) should be 12: {result!r}")
    assert_that(evaluator.evaluate_many(session, np.array([3, 0])) == [21, 3], "array of targets")
    assert_that(session.frontier == 3 and type(session.frontier) is int, "frontier stays a plain int")
    assert_raises(OutOfRange, evaluator.evaluate, session, np.int64(4))
    assert_raises(TypeError, evaluator.evaluate, session, np.float64(1.0))
    assert_raises(TypeError, evaluator.evaluate, session, True)


@test("threads share one default evaluator")
def test_default_evaluator_shared():
    previous = memofold.evaluator._default
    memofold.evaluator._default = None
    try:
        start = threading.Barrier(8)
        seen = []

        def grab():
            start.wait()
            seen.append(default_evaluator())

        workers = [threading.Thread(target=grab) for _ in range(8)]
        for w in workers:
            w.start()
        for w in workers:
            w.join()
        assert_that(len(seen) == 8 and len({id(e) for e in seen}) == 1, "every thread should get the same instance")
        assert_that(default_evaluator() is seen[0], "later calls reuse it")
    finally:
        memofold.evaluator._default = previous


@test("session convenience methods use the default evaluator")
def test_session_conveniences():
    session = open_session(from_range(1, 4), prefix_sum())
    assert_that(session.evaluate(1) == 3, "1 + 2")
    assert_that(session.select(3) == 10, "1 + 2 + 3 + 4")
    assert_that("complete" in repr(session), f"repr should show state: {session!r}")


if __name__ == "__main__":
    suite.main(title="memofold evaluator test suite")

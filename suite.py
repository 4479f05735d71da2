import sys
import time
import traceback
from functools import wraps
from typing import List, Dict, Any, Callable, Optional, Type

_suite_state: Dict[str, List[Dict[str, Any]]] = {
    'tests': [],
    'results': []
}

PASS_MARK = '(^ ω ^)'
FAIL_MARK = '(ﾉಥДಥ)ﾉ'


class _c:
    """color codes for the report."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


class SuiteAssertionError(AssertionError):
    """distinguishes assertion failures from other exceptions."""
    pass


# --- public api ---

def test(description: str) -> Callable:
    """decorator to register a function as a test case."""

    def decorator(func: Callable) -> Callable:
        _suite_state['tests'].append({'func': func, 'description': description})

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    """assertion that raises a specific, catchable error type."""
    if not condition:
        raise SuiteAssertionError(message)


def assert_raises(error_type: Type[BaseException], func: Callable, *args, **kwargs) -> BaseException:
    """call func and require it to raise error_type; returns the raised error."""
    try:
        func(*args, **kwargs)
    except error_type as e:
        return e
    raise SuiteAssertionError(f"expected {error_type.__name__} from {getattr(func, '__name__', func)}")


def run(title: str = "test run", only: Optional[str] = None, verbose: bool = False) -> bool:
    """executes registered tests (optionally those whose description contains `only`) and reports."""
    print(f"\n{_c.info}--- starting: {title} ---{_c.reset}")
    start_time = time.perf_counter()

    _suite_state['results'] = []
    tests_to_run = [t for t in _suite_state['tests'] if only is None or only in t['description']]

    for test_item in tests_to_run:
        description = test_item['description']
        error = None

        try:
            test_item['func']()
        except SuiteAssertionError as e:
            error = f"assertion failed: {e}"
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            if verbose:
                traceback.print_exc()

        passed = error is None
        _suite_state['results'].append({'passed': passed, 'description': description, 'error': error})

        if passed:
            print(f"  {_c.ok}✔ pass{_c.reset}  {PASS_MARK}  {description}")
        else:
            print(f"  {_c.fail}✖ fail{_c.reset}  {FAIL_MARK}  {description}")
            print(f"    {_c.grey}└─> {error}{_c.reset}")

    ok = _print_summary(start_time)

    # clear tests so several suites can run in one process
    _suite_state['tests'] = []
    return ok


def main(title: str) -> None:
    """run the registered tests and exit non-zero on any failure."""
    args = [a for a in sys.argv[1:] if not a.startswith("-")]
    only = args[0] if args else None
    sys.exit(0 if run(title=title, only=only, verbose='-v' in sys.argv) else 1)


def _print_summary(start_time: float) -> bool:
    duration = (time.perf_counter() - start_time) * 1000
    results = _suite_state['results']

    total = len(results)
    passed_count = sum(1 for r in results if r['passed'])
    failed_count = total - passed_count

    summary_color = _c.ok if failed_count == 0 else _c.fail

    print(f"\n{summary_color}--- summary ---{_c.reset}")
    print(f"  ran {_c.info}{total}{_c.reset} tests in {_c.warn}{duration:.2f}ms{_c.reset}")
    print(f"  {_c.ok}passed: {passed_count}{_c.reset}, {_c.fail}failed: {failed_count}{_c.reset}")
    print(f"{summary_color}---------------{_c.reset}\n")
    return failed_count == 0

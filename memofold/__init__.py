r"""
'    __  ___                     ______      __    __
'   /  |/  /__  ____ ___  ____  / ____/___  / /___/ /
'  / /|_/ / _ \/ __ `__ \/ __ \/ /_  / __ \/ / __  /
' / /  / /  __/ / / / / / /_/ / __/ / /_/ / / /_/ /
'/_/  /_/\___/_/ /_/ /_/\____/_/    \____/_/\__,_/
"""

# expose the core types
from .sequence import Sequence, from_iterable, from_range, repeat, empty, generate, seq
from .memo import MemoStore
from .plan import IndexPlan
from .session import RecurrenceSpec, EvaluationSession, open_session
from .evaluator import RecurrenceEvaluator, default_evaluator, evaluate, reference_fold
from .dropper import PrefixDropper, dropping_spec
from .selector import Selector, select, select_last, select_range, lookup

# expose errors, outcomes and configuration
from .errors import OutOfRange, DuplicateIndex
from .types import Outcome, Success, Failure, SessionState
from .config import EvaluatorConfig, configure_logging

# expose the stock recurrences
from .factories import (
    fold,
    prefix_sum,
    running_max,
    running_min,
    checked
)

from .extensions.parallel import evaluate_sessions

# define what `import *` does
__all__ = [
    "Sequence",
    "MemoStore",
    "IndexPlan",
    "RecurrenceSpec",
    "EvaluationSession",
    "open_session",
    "RecurrenceEvaluator",
    "default_evaluator",
    "evaluate",
    "reference_fold",
    "PrefixDropper",
    "dropping_spec",
    "Selector",
    "select",
    "select_last",
    "select_range",
    "lookup",
    "OutOfRange",
    "DuplicateIndex",
    "Outcome",
    "Success",
    "Failure",
    "SessionState",
    "EvaluatorConfig",
    "configure_logging",
    "from_iterable",
    "from_range",
    "repeat",
    "empty",
    "generate",
    "seq",
    "fold",
    "prefix_sum",
    "running_max",
    "running_min",
    "checked",
    "evaluate_sessions"
]

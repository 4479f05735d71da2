from __future__ import annotations
import logging
import typing
from concurrent.futures import ThreadPoolExecutor
from ..types import *

if typing.TYPE_CHECKING:
    from ..evaluator import RecurrenceEvaluator
    from ..session import EvaluationSession

logger = logging.getLogger(__name__)

Job = Tuple['EvaluationSession', Index]


def evaluate_sessions(jobs: Iterable[Job], max_workers: Optional[int] = None,
                      evaluator: Optional['RecurrenceEvaluator'] = None) -> List[Any]:
    """
    evaluate (session, target) jobs on a thread pool, results in job order.
    sessions share nothing, so independent sessions run without coordination;
    jobs that target the same session are serialized by that session's lock.
    the first exception raised by any job propagates.
    """
    from ..evaluator import default_evaluator
    evaluator = evaluator or default_evaluator()
    jobs = list(jobs)
    if not jobs:
        return []
    workers = max_workers or evaluator.config.max_workers
    logger.debug(f"evaluating {len(jobs)} jobs on {workers} workers")

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(evaluator.evaluate, session, target) for session, target in jobs]
        return [future.result() for future in futures]

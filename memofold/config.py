import logging
import os
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

LOG_FORMAT = '%(asctime)s - %(message)s'

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass
class EvaluatorConfig:
    """configuration for recurrence evaluation"""
    verify: bool = False  # cross-check every new memo entry against a fold from scratch
    stop_on_failure: bool = True
    log_level: str = 'WARNING'
    max_workers: int = 4

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level: '{self.log_level}'")

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'EvaluatorConfig':
        """read overrides from MEMOFOLD_* environment variables"""
        env = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}
        if 'MEMOFOLD_VERIFY' in env:
            overrides['verify'] = env['MEMOFOLD_VERIFY'].strip().lower() in _TRUTHY
        if 'MEMOFOLD_LOG_LEVEL' in env:
            overrides['log_level'] = env['MEMOFOLD_LOG_LEVEL'].strip()
        if 'MEMOFOLD_MAX_WORKERS' in env:
            overrides['max_workers'] = int(env['MEMOFOLD_MAX_WORKERS'])
        return cls(**overrides)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """install a basic handler for the memofold loggers. never called on import."""
    level = level or EvaluatorConfig.from_env().log_level
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    logger = logging.getLogger('memofold')
    logger.setLevel(level.upper())
    return logger

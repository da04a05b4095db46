"""Success / not-found / fault results for callers that must not crash."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from workbench.exceptions import NotFoundError, StorageError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Outcome(Enum):
    SUCCESS = 'success'
    NOT_FOUND = 'not_found'
    FAULT = 'fault'


@dataclass
class Result(Generic[T]):
    outcome: Outcome
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def not_found(self) -> bool:
        return self.outcome is Outcome.NOT_FOUND

    @property
    def fault(self) -> bool:
        return self.outcome is Outcome.FAULT

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ''


def capture(func: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Call ``func`` and fold NotFoundError / StorageError / ValueError into a Result.

    Other exceptions are programming errors and propagate.
    """
    try:
        return Result(Outcome.SUCCESS, value=func(*args, **kwargs))
    except NotFoundError as e:
        return Result(Outcome.NOT_FOUND, error=e)
    except (StorageError, ValueError) as e:
        logger.error("%s failed: %s", getattr(func, '__name__', func), e)
        return Result(Outcome.FAULT, error=e)

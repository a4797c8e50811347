"""Service base class.

A service turns a request into an outcome via ``_run``. Expected problems are
raised as ``ServiceFailure`` and pass through ``_handle_failure``, which
re-raises unless a subclass recovers. The CLI catches what escapes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .errors import ServiceFailure

R = TypeVar("R")
T = TypeVar("T")


class BaseService(ABC, Generic[R, T]):
    def __call__(self, request: R) -> T:
        try:
            return self._run(request)
        except ServiceFailure as failure:
            return self._handle_failure(failure)

    @abstractmethod
    def _run(self, request: R) -> T: ...

    def _handle_failure(self, failure: ServiceFailure) -> T:
        raise failure

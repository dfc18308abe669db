"""
Ok/Err outcome values.

A missing side file or an exhausted candidate search is an expected
outcome, not a crash, so the conversion and overlay code return one of
these and callers branch with ``isinstance``.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[E]]

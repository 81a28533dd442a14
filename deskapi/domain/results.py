from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, TypeVar, Union


T = TypeVar("T")

@dataclass(frozen=True, slots=True)
class Succeeded(Generic[T]):
    value: T

@dataclass(frozen=True, slots=True)
class TransportFailed:
    """The request never produced a usable response (network failure, HTTP error without a message, bad JSON)."""
    error: Exception

@dataclass(frozen=True, slots=True)
class ApiRejected(Generic[T]):
    """The exchange succeeded but the remote API reported a failure in the body.

        ``value`` holds the decoded record when the operation returns one, and is
        None for read operations whose result is a plain value or listing.
        """
    message: str
    value: T | None = None

@dataclass(frozen=True, slots=True)
class NoData:
    """The lookup succeeded but the API had nothing to return (e.g. no organization)."""
    message: str

Outcome = Union[Succeeded[T], TransportFailed, ApiRejected[T], NoData]

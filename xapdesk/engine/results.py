"""
Call results

Every remote call returns one of these instead of raising, so the reply
handler decides what to do with a failure:

    Ok(value)                 success, value is the parsed payload
    RemoteRejection(status)   engine answered with a non-success status
    TransportFailure(error)   request never got an answer (refused, timeout)
    MalformedSnapshot(reason) poll body was not the expected structure
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union


@dataclass(frozen=True)
class Ok:
    value: Any = None
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class RemoteRejection:
    status: int
    body: str = ""
    reason: str = ""
    ok: ClassVar[bool] = False

    def __str__(self):
        return f"rejected with status {self.status}" + (f" ({self.reason})" if self.reason else "")


@dataclass(frozen=True)
class TransportFailure:
    error: str
    ok: ClassVar[bool] = False

    def __str__(self):
        return f"transport failure: {self.error}"


@dataclass(frozen=True)
class MalformedSnapshot:
    reason: str
    ok: ClassVar[bool] = False

    def __str__(self):
        return f"malformed snapshot: {self.reason}"


Result = Union[Ok, RemoteRejection, TransportFailure, MalformedSnapshot]

"""
Status codes and the tagged result returned by every gateway operation.

A gateway call yields either ``Ok(value)`` or ``Failure(code, message)``.
The dispatcher turns both into a response message carrying ``error_code``
and ``error_message``; nothing is raised across that boundary.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

class StatusCode(IntEnum):
    OK = 0
    NOT_AUTHORIZED = 401
    NOT_FOUND = 404
    TOKEN_EXPIRED = 498
    INTERNAL_ERROR = 500
    EXECUTION_FAILED = 501
    VALIDATION_FAILED = 510

class FailureKind(str, Enum):
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

_KIND_BY_CODE = {
    StatusCode.TOKEN_EXPIRED: FailureKind.AUTHENTICATION,
    StatusCode.NOT_AUTHORIZED: FailureKind.AUTHORIZATION,
    StatusCode.VALIDATION_FAILED: FailureKind.VALIDATION,
    StatusCode.NOT_FOUND: FailureKind.NOT_FOUND,
    StatusCode.INTERNAL_ERROR: FailureKind.INTERNAL,
    StatusCode.EXECUTION_FAILED: FailureKind.INTERNAL,
}

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok = True

@dataclass(frozen=True)
class Failure:
    code: int
    message: str
    ok = False

    @property
    def kind(self) -> FailureKind:
        return _KIND_BY_CODE.get(self.code, FailureKind.INTERNAL)

Result = Union[Ok[Any], Failure]

@dataclass(frozen=True)
class Created:
    """Payload of a successful create: the row key and its first version."""
    key: Any
    version: int = 1

# Constructors for the failures the core produces

def not_authorized() -> Failure:
    return Failure(StatusCode.NOT_AUTHORIZED, "not authorized")

def token_expired() -> Failure:
    return Failure(StatusCode.TOKEN_EXPIRED, "token is expired")

def not_found() -> Failure:
    return Failure(StatusCode.NOT_FOUND, "not found")

def missing(field: str) -> Failure:
    return Failure(StatusCode.VALIDATION_FAILED, f"{field} missing")

def invalid(field: str) -> Failure:
    return Failure(StatusCode.VALIDATION_FAILED, f"{field} invalid")

def entity_not_supported() -> Failure:
    return Failure(StatusCode.NOT_AUTHORIZED, "entity not supported")

def read_failed(message: str) -> Failure:
    return Failure(StatusCode.INTERNAL_ERROR, message)

def execution_failed(message: str) -> Failure:
    return Failure(StatusCode.EXECUTION_FAILED, message)

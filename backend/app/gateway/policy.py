"""Policy outcomes and errors shared by gateway policies."""

from dataclasses import dataclass
from typing import Protocol

from starlette.requests import Request
from starlette.responses import Response


@dataclass(frozen=True)
class DirectResponse:
    """Terminate the pipeline and return ``response`` to the client."""

    response: Response


@dataclass(frozen=True)
class PassThrough:
    """No opinion; the request continues unmodified."""


PolicyOutcome = DirectResponse | PassThrough


class PolicyFilterError(Exception):
    """Base class for hard errors raised by a policy."""


class HttpConstructionError(PolicyFilterError):
    """A policy assembled an HTTP response that violates protocol rules."""


class Policy(Protocol):
    """A gateway policy applied to routed requests."""

    name: str

    def apply(self, request: Request) -> PolicyOutcome:
        ...

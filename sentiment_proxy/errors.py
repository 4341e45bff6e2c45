"""Error values returned by the request pipeline.

Each step of the pipeline returns ``(value, error)``. Errors are plain frozen
dataclasses carrying the HTTP status they map to; only the view turns them
into responses.
"""
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class ProxyError:
    message: str
    status: int = 500
    details: Optional[str] = None
    raw: Optional[str] = None

    kind: ClassVar[str] = 'ProxyError'

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {'error': self.message}
        if self.details is not None:
            body['details'] = self.details
        if self.raw is not None:
            body['raw'] = self.raw
        return body


@dataclass(frozen=True)
class ValidationError(ProxyError):
    """Malformed or oversized input."""
    status: int = 400

    kind: ClassVar[str] = 'ValidationError'


@dataclass(frozen=True)
class ConfigurationError(ProxyError):
    """A required setting (the upstream API key) is missing."""
    kind: ClassVar[str] = 'ConfigurationError'


@dataclass(frozen=True)
class UpstreamError(ProxyError):
    """The upstream answered with a non-2xx status; ``status`` is passed through."""
    kind: ClassVar[str] = 'UpstreamError'


@dataclass(frozen=True)
class ResponseParseError(ProxyError):
    """The generated text was not valid JSON after fence stripping."""
    kind: ClassVar[str] = 'ResponseParseError'


@dataclass(frozen=True)
class InternalError(ProxyError):
    kind: ClassVar[str] = 'InternalError'

    @classmethod
    def from_exception(cls, exc: BaseException) -> 'InternalError':
        return cls(message='Worker 실행 중 오류 발생', details=str(exc))


Result = Tuple[Optional[T], Optional[ProxyError]]


def ok(value: T) -> 'Result[T]':
    return value, None


def fail(error: ProxyError) -> 'Result[Any]':
    return None, error

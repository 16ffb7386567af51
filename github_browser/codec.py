"""Response decoding into typed records.

``decode`` never raises: it returns a ``DecodeResult`` carrying either the
decoded value or the reason decoding failed. The client decides what a
failure means (``None`` in lenient mode, ``ResponseDecodeError`` in strict
mode).
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, get_origin

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from github_browser.errors import ResponseDecodeError


logger = logging.getLogger(__name__)

T = TypeVar("T")

BODY_EXCERPT_LENGTH = 200


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Outcome of decoding one response body.

    Attributes:
        value: The decoded record, or None on failure.
        error: Why decoding failed, or None on success.
        target: Display name of the type decoded into.
        body_excerpt: Leading part of the body, kept for diagnostics.
    """

    value: Optional[T] = None
    error: Optional[str] = None
    target: str = ""
    body_excerpt: str = ""

    @property
    def ok(self) -> bool:
        """Whether decoding succeeded."""
        return self.error is None

    def unwrap(self, lenient: bool = True) -> Optional[T]:
        """Return the value, applying the decode-failure policy.

        Args:
            lenient: When True a failure yields None; otherwise it raises.

        Returns:
            The decoded value, or None for a lenient failure.

        Raises:
            ResponseDecodeError: On failure when ``lenient`` is False.
        """
        if self.ok:
            return self.value
        if lenient:
            return None
        raise ResponseDecodeError(
            target=self.target,
            detail=self.error or "unknown error",
            body_excerpt=self.body_excerpt,
        )


def _type_name(target: Any) -> str:
    if get_origin(target) is not None:
        return str(target)
    return getattr(target, "__name__", None) or str(target)


def decode(target: Any, text: str) -> DecodeResult[Any]:
    """Decode JSON text into ``target``.

    Args:
        target: A pydantic model class or any type a ``TypeAdapter``
                accepts, e.g. ``list[Comment]``.
        text: Raw response body.

    Returns:
        DecodeResult with the value on success or the error text on failure.
    """
    name = _type_name(target)
    try:
        value = TypeAdapter(target).validate_json(text)
    except PydanticValidationError as e:
        logger.debug(
            "Response did not decode",
            extra={
                "target": name,
                "error_count": e.error_count(),
                "body_length": len(text),
            },
        )
        return DecodeResult(
            error=str(e),
            target=name,
            body_excerpt=text[:BODY_EXCERPT_LENGTH],
        )
    return DecodeResult(value=value, target=name)

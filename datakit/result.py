"""Tagged success/failure results for toolkit calls.

The raising functions in datakit never hand back sentinels for malformed
input. ``attempt`` turns any of them into an ``Outcome`` so callers can
branch on a value instead of writing ``try``/``except``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from datakit.errors import DataKitError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a toolkit call.

    Attributes:
        success: True if the call returned normally, False if it raised
        value: The returned value if successful, None if failed
        error: The toolkit error that occurred if failed, None if successful
    """

    success: bool
    value: T | None
    error: DataKitError | None

    def unwrap(self) -> T:
        """Return the value, re-raising the captured error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def attempt(func: Callable[..., T], *args: Any, **kwargs: Any) -> Outcome[T]:
    """Call ``func`` and capture a ``DataKitError`` as a failed outcome.

    Only toolkit errors are captured. Programmer errors such as ``TypeError``
    for a naive datetime still propagate.

    Example:
        >>> from datakit import attempt, decode
        >>> attempt(decode, "aGk=")
        Outcome(success=True, value=b'hi', error=None)
        >>> attempt(decode, "@@@").success
        False
    """
    try:
        value = func(*args, **kwargs)
    except DataKitError as e:
        return Outcome(success=False, value=None, error=e)
    return Outcome(success=True, value=value, error=None)

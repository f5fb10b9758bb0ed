"""
Fallback module interface.

Callers hand the invoker a unit of work parameterized by a single API key.
Any async callable taking a string satisfies ICredentialOperation.
"""

from typing import Awaitable, Callable, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

CredentialOperation = Callable[[str], Awaitable[T]]


@runtime_checkable
class ICredentialOperation(Protocol[T_co]):
    """
    A single upstream call made with one API key.

    Implementations must raise on failure. Errors that carry an HTTP-like
    status code (``status_code``, ``code`` or ``response.status_code``) are
    classified by that code; errors without one are treated as transient.
    """

    def __call__(self, api_key: str) -> Awaitable[T_co]:
        """
        Run the operation with the given key.

        Args:
            api_key: The credential to authenticate the call with

        Returns:
            The operation's result
        """
        ...

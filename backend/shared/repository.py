"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the reconnect-and-retry-once policy shared by
every store operation.
"""

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar, Generic

import httpx
from postgrest import APIError
from supabase import Client
from tenacity import (
    retry,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception_type,
)

from .exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Connectivity failures surfaced by the PostgREST HTTP transport
TRANSIENT_ERRORS = (httpx.TransportError,)

STORE_RETRY_ATTEMPTS = 2
STORE_RETRY_WAIT_SECONDS = 0.1


def store_operation(
    operation: str,
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    """
    Wrap a repository coroutine with the store retry policy.

    Transient transport errors are retried once. If the retry also fails,
    or PostgREST reports an error the repository did not translate itself,
    the caller sees a single StoreUnavailableError.

    Args:
        operation: Name used in logs and in the raised error.
    """

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        retrying = retry(
            stop=stop_after_attempt(STORE_RETRY_ATTEMPTS),
            wait=wait_fixed(STORE_RETRY_WAIT_SECONDS),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        )(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> R:
            try:
                return await retrying(*args, **kwargs)
            except TRANSIENT_ERRORS as e:
                logger.error(f"Store unreachable during {operation}: {e}")
                raise StoreUnavailableError(operation, str(e)) from e
            except APIError as e:
                logger.error(f"Store rejected {operation}: {e.message}")
                raise StoreUnavailableError(operation, str(e.message)) from e

        return wrapper

    return decorator


class BaseRepository(Generic[T]):
    """
    Base class for all Supabase-backed repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods,
    decorate them with @store_operation, and handle dict-to-Pydantic
    model mapping internally.

    Example:
        class AccountRepository(BaseRepository[Account]):
            @store_operation("get_account_by_id")
            async def get_account_by_id(self, account_id: str) -> Account:
                result = self._db.table("accounts").select("*").eq("id", account_id).execute()
                ...
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

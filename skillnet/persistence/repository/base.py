"""Shared behaviour of the PostgreSQL repositories."""

import asyncio
from typing import Awaitable, Callable, TypeVar

import logfire
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from skillnet.config import Settings
from skillnet.domain.error import StoreUnavailableError

T = TypeVar("T")

# Connection-level failures worth another attempt
TRANSIENT_ERRORS = (OperationalError, InterfaceError)


class PostgresRepository:
    """Base for PostgreSQL repositories.

    Every write runs in its own transaction and is committed before the
    method returns, so a write that must survive a later failure in the
    same HTTP request (a recorded acceptance whose meeting could not be
    provisioned) is durable. A failed work unit is rolled back. Transient
    connection errors are retried a bounded number of times and then
    surfaced as StoreUnavailableError.
    """

    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            settings: Application settings
        """
        self.session = session
        self.settings = settings

    async def _run(
        self,
        operation: str,
        work: Callable[[], Awaitable[T]],
        commit: bool = False,
    ) -> T:
        """Run work with bounded retries on transient errors.

        Args:
            operation: Name used in logs and errors
            work: Coroutine factory; must materialise its result
            commit: Commit the transaction after work succeeds

        Returns:
            Whatever work returned

        Raises:
            StoreUnavailableError: If every attempt hit a transient error
        """
        lifecycle = self.settings.lifecycle
        attempts = max(1, lifecycle.store_retry_attempts)

        for attempt in range(1, attempts + 1):
            try:
                result = await work()
                if commit:
                    await self.session.commit()
                return result
            except TRANSIENT_ERRORS as e:
                await self.session.rollback()
                logfire.warn(
                    "Transient storage error",
                    operation=operation,
                    attempt=attempt,
                    attempts=attempts,
                    error=str(e),
                )
                if attempt == attempts:
                    raise StoreUnavailableError(
                        f"{operation} failed after {attempts} attempts"
                    ) from e
                await asyncio.sleep(lifecycle.store_retry_backoff_seconds * attempt)
            except Exception:
                # Nothing from a failed work unit may ride along on a later commit
                await self.session.rollback()
                raise

        # Unreachable: the loop either returns or raises
        raise StoreUnavailableError(operation)

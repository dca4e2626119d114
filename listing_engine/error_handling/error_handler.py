"""
Error handler with retry logic for listing fetches.

Implements exponential backoff for calls to the listing API. The filter
translator and the sorter never raise, so only network-facing code uses this.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from listing_engine.config.engine_config import RetryConfig


# Configure logging
logger = logging.getLogger(__name__)


class ListingFetchError(Exception):
    """
    Raised when the listing API cannot be reached or answers with an error.

    Attributes:
        url: Requested URL
        status: HTTP status code, None for network failures
    """

    def __init__(self, message: str, url: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status

    @property
    def retryable(self) -> bool:
        """Network failures and 5xx responses are worth retrying; 4xx are not."""
        return self.status is None or self.status >= 500


class ErrorHandler:
    """
    Error handler with retry logic.

    Attributes:
        config: Retry configuration
    """

    def __init__(self, config: Optional[RetryConfig] = None):
        """
        Initialize error handler with retry configuration.

        Args:
            config: Retry configuration (default: RetryConfig())
        """
        self.config = config or RetryConfig()

    async def retry_with_backoff(
        self,
        operation: Callable,
        *args,
        **kwargs
    ) -> Any:
        """
        Execute operation with exponential backoff retry logic.

        Attempts the operation up to max_retries times, waiting an
        exponentially growing delay between attempts. ListingFetchErrors that
        are not retryable are raised immediately.

        Args:
            operation: Async callable to execute
            *args: Positional arguments for the operation
            **kwargs: Keyword arguments for the operation

        Returns:
            Result from successful operation execution

        Raises:
            Exception: The last exception encountered if all retries are exhausted
        """
        name = getattr(operation, "__name__", repr(operation))
        attempts = max(1, self.config.max_retries)
        last_exception = None

        for attempt in range(attempts):
            try:
                logger.debug(f"Attempt {attempt + 1}/{attempts} for operation {name}")
                result = await operation(*args, **kwargs)
                if attempt > 0:
                    logger.info(f"Operation {name} succeeded on attempt {attempt + 1}")
                return result

            except Exception as e:
                last_exception = e
                self._log_error(name, attempt + 1, attempts, e)

                if isinstance(e, ListingFetchError) and not e.retryable:
                    break

                if attempt == attempts - 1:
                    logger.error(
                        f"Operation {name} failed after {attempts} attempts. "
                        f"Final error: {str(e)}"
                    )
                    break

                backoff_delay = self.config.get_backoff_delay(attempt)
                logger.info(f"Waiting {backoff_delay:.1f}s before retry...")
                await asyncio.sleep(backoff_delay)

        raise last_exception

    def _log_error(
        self,
        operation_name: str,
        attempt: int,
        max_attempts: int,
        error: Exception
    ) -> None:
        """
        Log an error with diagnostic context.

        Args:
            operation_name: Name of the failed operation
            attempt: Current attempt number (1-indexed)
            max_attempts: Maximum attempts allowed
            error: The exception that occurred
        """
        context = f"{type(error).__name__}: {error}"
        if isinstance(error, ListingFetchError):
            context += f" (url={error.url}, status={error.status})"
        logger.warning(
            f"Operation {operation_name} failed on attempt {attempt}/{max_attempts}: {context}"
        )

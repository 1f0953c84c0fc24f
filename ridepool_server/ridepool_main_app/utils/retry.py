"""Exponential backoff for store operations"""
import logging
import time

logger = logging.getLogger(__name__)


def retry_with_backoff(func, attempts, base_delay, retry_on=(Exception,), label='operation', sleep=time.sleep):
    """
    Call func until it returns, retrying on the given exception types.

    Args:
        func: Zero-argument callable
        attempts: Maximum number of calls (>= 1)
        base_delay: Delay before the second call, doubled after each failure
        retry_on: Exception types that trigger another attempt
        label: Name used in log lines

    Returns:
        Whatever func returns

    Raises:
        The last exception once attempts are exhausted
    """
    for attempt in range(1, attempts + 1):
        try:
            return func()
        except retry_on as exc:
            if attempt == attempts:
                raise
            delay = base_delay * (2 ** (attempt - 1))
            logger.warning(f'[RETRY] {label} failed (attempt {attempt}/{attempts}): {exc}; retrying in {delay:.2f}s')
            sleep(delay)

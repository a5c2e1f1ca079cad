"""
Gavel - Retry Utilities
=======================

Retry logic for Discord API calls with exponential backoff.

Author: Gavel contributors
"""

import asyncio
from typing import Any, Callable, Optional, Tuple, Type

import discord

from gavel.core.logger import logger


# Exceptions that should trigger a retry. 4xx responses are final.
RETRYABLE_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    discord.DiscordServerError,
    asyncio.TimeoutError,
    ConnectionError,
)


async def retry_async(
    coro_func: Callable[..., Any],
    *args,
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 10.0,
    exceptions: Tuple[Type[Exception], ...] = RETRYABLE_EXCEPTIONS,
    **kwargs,
) -> Any:
    """
    Retry an async function with exponential backoff.

    Args:
        coro_func: Async function to call.
        *args: Arguments to pass to the function.
        max_retries: Maximum number of retry attempts.
        base_delay: Initial delay between retries (seconds).
        max_delay: Maximum delay between retries (seconds).
        exceptions: Exception types that trigger a retry.
        **kwargs: Keyword arguments to pass to the function.

    Returns:
        Result of the coroutine function.

    Raises:
        The last exception if all retries fail.
    """
    last_exception: Optional[BaseException] = None

    for attempt in range(max_retries + 1):
        try:
            return await coro_func(*args, **kwargs)
        except exceptions as e:
            last_exception = e
            if attempt < max_retries:
                delay = min(base_delay * (2 ** attempt), max_delay)
                logger.warning(f"Retry {attempt + 1}/{max_retries}: {type(e).__name__} - retrying in {delay:.1f}s")
                await asyncio.sleep(delay)
            else:
                logger.error(f"All {max_retries} retries failed: {type(e).__name__}: {e}")

    raise last_exception


async def safe_fetch_channel(client: discord.Client, channel_id: int) -> Optional[Any]:
    """
    Get a channel from cache or fetch it with retry.

    Args:
        client: Discord client.
        channel_id: Channel ID to fetch.

    Returns:
        Channel object, or None if it does not exist or is not visible.
    """
    if not channel_id:
        return None

    channel = client.get_channel(channel_id)
    if channel:
        return channel

    try:
        return await retry_async(
            client.fetch_channel,
            channel_id,
            max_retries=2,
            base_delay=0.5,
        )
    except (discord.NotFound, discord.Forbidden):
        return None


__all__ = ["retry_async", "safe_fetch_channel", "RETRYABLE_EXCEPTIONS"]

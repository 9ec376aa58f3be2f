# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from collections.abc import Awaitable, Callable
from typing import Final

# 3p
from tenacity import RetryError, retry, retry_if_result, stop_after_attempt, wait_fixed

DEFAULT_INTERVAL_SECONDS: Final = 10
DEFAULT_RETRIES: Final = 60


class ResourceDeletionTimeoutError(Exception):
    def __init__(self, resource_id: str, attempts: int) -> None:
        super().__init__(f"Resource {resource_id} still exists after {attempts} checks")


def wait_for_no_resource(
    resource_id: str,
    exists: Callable[[], bool],
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    retries: int = DEFAULT_RETRIES,
) -> None:
    """Poll `exists` at a fixed interval until it returns False.
    ARM can report a delete as finished while the resource is still resolvable"""
    try:
        retry(
            retry=retry_if_result(bool),
            wait=wait_fixed(interval_seconds),
            stop=stop_after_attempt(retries),
        )(exists)()
    except RetryError as e:
        raise ResourceDeletionTimeoutError(resource_id, retries) from e


async def async_wait_for_no_resource(
    resource_id: str,
    exists: Callable[[], Awaitable[bool]],
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    retries: int = DEFAULT_RETRIES,
) -> None:
    """Async version of `wait_for_no_resource`"""
    try:
        await retry(
            retry=retry_if_result(bool),
            wait=wait_fixed(interval_seconds),
            stop=stop_after_attempt(retries),
        )(exists)()
    except RetryError as e:
        raise ResourceDeletionTimeoutError(resource_id, retries) from e

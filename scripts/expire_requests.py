#!/usr/bin/env python3
"""Expire open requests older than LIFECYCLE__OPEN_TTL_HOURS.

Meant to run on a schedule (cron, a Kubernetes CronJob). Does nothing when
no TTL is configured.
"""

import asyncio
import sys

import logfire

from skillnet.application.usecase.request import (
    ExpireStaleRequestsRequest,
    ExpireStaleRequestsUseCase,
)
from skillnet.config import Settings
from skillnet.util.di.container import create_container
from skillnet.util.observability import configure_logfire


async def run(settings: Settings) -> int:
    """Run one sweep and return the number of expired requests."""
    ttl = settings.lifecycle.open_ttl_hours
    if ttl is None:
        logfire.info("Request expiry disabled, LIFECYCLE__OPEN_TTL_HOURS not set")
        return 0

    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ExpireStaleRequestsUseCase)
            result = await use_case.execute(
                ExpireStaleRequestsRequest(older_than_hours=ttl)
            )
            return result.expired
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    try:
        expired = asyncio.run(run(settings))
        logfire.info("Expiry sweep finished", expired=expired)
        return 0
    except Exception as e:
        logfire.error(
            "Expiry sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

"""AWS Lambda entry point for API Gateway proxy events.

Reads ``queryStringParameters.address`` from the event, runs the same
lookup pipeline as the HTTP API, and returns a proxy response dict. The
service and its event loop are created on the first invocation and reused
while the execution environment stays warm.
"""

import asyncio
from typing import Any

from loguru import logger

from geocode_cache.core.config import get_settings
from geocode_cache.core.dependencies import build_lookup_service
from geocode_cache.core.logging import setup_logging
from geocode_cache.services.lookup_service import LookupRequest, LookupResponse, LookupService

_service: LookupService | None = None
_loop: asyncio.AbstractEventLoop | None = None


def _get_runtime() -> tuple[LookupService, asyncio.AbstractEventLoop]:
    global _service, _loop  # noqa: PLW0603
    if _service is None or _loop is None:
        settings = get_settings()
        setup_logging(settings.log_level)
        if settings.cache_backend == "database" and settings.database_url:
            from geocode_cache.core.database import init_engine

            init_engine(settings.database_url)
        # Globals stay unset until the service builds; a failed cold start retries next time
        service = build_lookup_service(settings)
        _service, _loop = service, asyncio.new_event_loop()
    return _service, _loop


def to_proxy_response(result: LookupResponse) -> dict[str, Any]:
    """Convert a lookup response to the API Gateway proxy response shape."""
    return {
        "statusCode": result.status_code,
        "headers": result.headers,
        "body": result.body,
    }


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Lambda handler.

    Args:
        event: API Gateway proxy event; ``queryStringParameters`` may be null.
        context: Lambda context (unused).

    Returns:
        API Gateway proxy response. Failures to build the runtime become a 500.
    """
    try:
        service, loop = _get_runtime()
        request = LookupRequest.from_query(event.get("queryStringParameters"))
        result = loop.run_until_complete(service.handle(request))
    except Exception as e:
        logger.exception("Lambda invocation failed")
        result = LookupResponse(status_code=500, body=f"Internal Server Error: {e}")
    return to_proxy_response(result)

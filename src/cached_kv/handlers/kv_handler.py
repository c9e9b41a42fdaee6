"""HTTP handlers for the key-value routes.

Handlers coordinate the services around each request and handle HTTP
concerns: status codes, headers, body parsing and validation.

Ordering within one request:
    GET /      cache lookup strictly before the storage read-all
    POST /set  rate-limit check strictly before body parsing and the write
"""

import json
import logging
import time

from fastapi import BackgroundTasks, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from cached_kv.dto import SetValueRequest, SetValueResponse
from cached_kv.entities import CachedResponseEntity
from cached_kv.errors import MalformedRequestBodyError, RateLimitExceededError, ValidationFailureError
from cached_kv.services import KVService, RateLimitService, ResponseCacheService

logger = logging.getLogger(__name__)

CACHE_STATUS_HEADER = "X-Cache-Status"


def _reject_constant(token: str) -> float:
    # NaN, Infinity and -Infinity are not JSON.
    raise ValueError(f"Invalid JSON token: {token}")


class KVHandler:
    """HTTP handlers for the cached read and the rate-limited write.

    Holds no mutable state of its own; everything lives behind the
    three services, so concurrent requests need no locking here.

    Example:
        ```python
        handler = KVHandler(
            kv_service=KVService.create(store=InMemoryKVStore()),
            cache_service=ResponseCacheService.create(cache=InMemoryResponseCache()),
            rate_limit_service=RateLimitService.create(limiter=InMemoryRateLimiter()),
        )

        @app.get("/")
        async def read_all(request: Request, background_tasks: BackgroundTasks):
            return await handler.read_all(request, background_tasks)
        ```
    """

    def __init__(
        self,
        kv_service: KVService,
        cache_service: ResponseCacheService,
        rate_limit_service: RateLimitService,
    ) -> None:
        """Initialize the handler.

        Args:
            kv_service: Key-value reads and writes (required).
            cache_service: Response cache for the read path (required).
            rate_limit_service: Rate limiting for the write path (required).
        """
        self._kv = kv_service
        self._cache = cache_service
        self._rate_limits = rate_limit_service

    async def read_all(self, request: Request, background_tasks: BackgroundTasks) -> Response:
        """Handle GET / requests, cache-aside.

        A hit returns the snapshot with X-Cache-Status: HIT and does not
        touch storage. A miss reads every record, returns it with
        X-Cache-Status: MISS and stores the snapshot in a background task
        that runs after the response is sent.

        Writes do not invalidate the snapshot, so reads can be stale for
        up to the cache's max-age.

        Args:
            request: The incoming request
            background_tasks: Task list attached to the response

        Returns:
            JSON mapping of every listed key to its value
        """
        identity = self._cache.identity(request.method, str(request.url))

        cached = self._cache.lookup(identity)
        if cached is not None:
            headers = {
                name: value for name, value in cached.headers.items() if name.lower() != CACHE_STATUS_HEADER.lower()
            }
            headers[CACHE_STATUS_HEADER] = "HIT"
            return Response(content=cached.body, status_code=cached.status_code, headers=headers)

        body = json.dumps(self._kv.read_all(), indent=2, ensure_ascii=False)
        headers = {
            "Content-Type": "application/json",
            "Cache-Control": f"public, max-age={self._cache.default_ttl}",
            CACHE_STATUS_HEADER: "MISS",
        }
        snapshot = CachedResponseEntity(
            status_code=200,
            body=body,
            headers=dict(headers),
            stored_at=time.time(),
        )
        background_tasks.add_task(self._cache.store, identity, snapshot)

        return Response(content=body, status_code=200, headers=headers)

    async def set_value(self, request: Request) -> JSONResponse:
        """Handle POST /set requests.

        Args:
            request: The incoming request, body {"key": str, "value": str}

        Returns:
            JSONResponse {"success": true, "key": ..., "value": ...}

        Raises:
            RateLimitExceededError: The client's quota is used up (429)
            MalformedRequestBodyError: The body is not valid JSON (400)
            ValidationFailureError: key or value is missing or empty (400)
        """
        decision = self._rate_limits.check(request.headers)
        if not decision.success:
            raise RateLimitExceededError(retry_after=self._rate_limits.retry_after)

        try:
            payload = json.loads(await request.body(), parse_constant=_reject_constant)
        except ValueError as e:
            raise MalformedRequestBodyError() from e

        try:
            body = SetValueRequest.model_validate(payload)
        except ValidationError as e:
            raise ValidationFailureError() from e

        record = self._kv.put_record(body.key, body.value)

        return JSONResponse(SetValueResponse(key=record.key, value=record.value).model_dump())

    def is_healthy(self) -> bool:
        """Check if the key-value store behind the handler is reachable."""
        return self._kv.is_healthy()

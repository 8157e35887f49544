"""HTTP transport shared by the service clients."""

from __future__ import annotations

import json
import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Mapping
from typing import Any
from uuid import uuid4

import httpx

from cloud_sdk.config import Settings, load_settings
from cloud_sdk.errors import ServiceError
from cloud_sdk.model import Model
from cloud_sdk.response import REQUEST_ID_HEADER, Response
from cloud_sdk.utils.serialization import json_default

logger = logging.getLogger(__name__)

ClientCacheKey = tuple[str, ...]

_CLIENT_CACHE: OrderedDict[ClientCacheKey, tuple[httpx.Client, float]] = OrderedDict()
_CLIENT_CACHE_LOCK = threading.Lock()
_CLIENT_TTL_SECONDS = 3600  # 1 hour
_CLIENT_CACHE_MAX_SIZE = 64


def _get_cached_client(
    key: ClientCacheKey,
    build_client: Callable[[], httpx.Client],
) -> httpx.Client:
    now = time.monotonic()
    with _CLIENT_CACHE_LOCK:
        cached = _CLIENT_CACHE.get(key)
        if cached is not None:
            client, created_at = cached
            if now - created_at < _CLIENT_TTL_SECONDS and not client.is_closed:
                _CLIENT_CACHE.move_to_end(key)
                return client
            del _CLIENT_CACHE[key]
            client.close()
        client = build_client()
        _CLIENT_CACHE[key] = (client, now)
        while len(_CLIENT_CACHE) > _CLIENT_CACHE_MAX_SIZE:
            _, (evicted, _) = _CLIENT_CACHE.popitem(last=False)
            evicted.close()
        return client


def clear_client_cache() -> None:
    with _CLIENT_CACHE_LOCK:
        while _CLIENT_CACHE:
            _, (client, _) = _CLIENT_CACHE.popitem()
            client.close()


def service_endpoint_for(service: str, region: str | None, settings: Settings) -> str:
    region = region or settings.client.region
    if not region:
        raise ValueError(f"A region or service_endpoint is required for service '{service}'")
    return settings.client.endpoint_template.format(service=service, region=region)


def _error_details(response: httpx.Response) -> tuple[str, str]:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        code = body.get("code")
        message = body.get("message")
        if code or message:
            return str(code or response.reason_phrase), str(message or "")
    return response.reason_phrase or "Unknown", response.text[:500]


class BaseClient:
    """Sends requests to one service endpoint and wraps the results.

    Requests are not signed; pass an ``httpx.Auth`` that signs them.
    """

    service: str = ""

    def __init__(
        self,
        *,
        region: str | None = None,
        service_endpoint: str | None = None,
        auth: httpx.Auth | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = load_settings()
        self.endpoint = (
            service_endpoint.rstrip("/")
            if service_endpoint
            else service_endpoint_for(self.service, region, settings)
        )
        self.auth = auth
        timeout = timeout_seconds if timeout_seconds is not None else settings.client.timeout_seconds
        headers = {"user-agent": settings.client.user_agent, "accept": "application/json"}

        self._owns_http = transport is not None
        if transport is not None:
            self._http = httpx.Client(
                base_url=self.endpoint, timeout=timeout, headers=headers, transport=transport
            )
        else:
            key = (self.endpoint, str(timeout), settings.client.user_agent)
            self._http = _get_cached_client(
                key,
                lambda: httpx.Client(base_url=self.endpoint, timeout=timeout, headers=headers),
            )

    def __enter__(self) -> BaseClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def call_api(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Mapping[str, object] | None = None,
        headers: Mapping[str, str | None] | None = None,
        response_type: type[Model] | None = None,
    ) -> Response:
        request_headers = {key: value for key, value in (headers or {}).items() if value is not None}
        request_headers.setdefault(REQUEST_ID_HEADER, uuid4().hex.upper())

        content: str | None = None
        if json_body is not None:
            payload = json_body.to_dict() if hasattr(json_body, "to_dict") else json_body
            content = json.dumps(payload, default=json_default)
            request_headers["content-type"] = "application/json"

        query = {key: value for key, value in (params or {}).items() if value is not None}

        try:
            http_response = self._http.request(
                method,
                path,
                params=query,
                content=content,
                headers=request_headers,
                auth=self.auth,
            )
        except httpx.HTTPError as exc:
            raise ServiceError(0, "RequestException", str(exc)) from exc

        request_id = http_response.headers.get(REQUEST_ID_HEADER)
        logger.debug("%s %s -> %d (%s)", method, path, http_response.status_code, request_id)

        if not http_response.is_success:
            code, message = _error_details(http_response)
            raise ServiceError(http_response.status_code, code, message, request_id)

        data: Any = None
        if response_type is not None and http_response.content:
            try:
                payload = http_response.json()
            except ValueError as exc:
                raise ServiceError(
                    http_response.status_code,
                    "InvalidResponse",
                    f"Response body is not valid JSON: {exc}",
                    request_id,
                ) from exc
            data = response_type.from_dict(payload)

        return Response(
            status=http_response.status_code,
            headers=dict(http_response.headers),
            data=data,
            request_id=request_id,
        )

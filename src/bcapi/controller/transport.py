"""HTTP transport for the storage API (internal use only)."""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar

import httplib2
from googleapiclient.errors import HttpError
from googleapiclient.http import HttpRequest

from bcapi.auth import SITE_TOKEN_KEY, SiteHelper
from bcapi.errors import (
    AuthConfigurationError,
    BCApiError,
    HttpErrorInfo,
    InvalidArgumentError,
    TransportError,
    map_http_error,
)

from .endpoints import content_url, metadata_url

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS: int = 4


class HttpTransport:
    """
    Issues authenticated requests and hands results back as futures.

    Notes:
        - Requests are never retried; every failure reaches the caller.
        - `execute` is the blocking primitive. Resources compose several
          `execute` calls inside one `submit` so that composite operations
          keep their ordering.
        - httplib2.Http is not thread-safe. Unless a shared `http` object is
          injected, each worker thread gets its own from `http_factory`.
    """

    def __init__(
        self,
        site: SiteHelper,
        *,
        http: Any = None,
        http_factory: Optional[Callable[[], Any]] = None,
        executor: Optional[Executor] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        if not site.has_token_store:
            raise AuthConfigurationError(
                "HttpTransport requires a SiteHelper with a token store"
            )
        if http is not None and http_factory is not None:
            raise InvalidArgumentError("Pass either http or http_factory, not both")
        if http is None and http_factory is None and not site.get_root_url():
            # httplib2.Http only accepts absolute URIs.
            raise InvalidArgumentError(
                "An absolute root_url is required when no http object is injected"
            )
        self._site = site
        self._http = http
        self._http_factory = http_factory or httplib2.Http
        self._local = threading.local()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="bcapi",
        )

    @property
    def site(self) -> SiteHelper:
        return self._site

    # ----------------------------
    # Public API
    # ----------------------------
    def metadata_url(self, path: str) -> str:
        return metadata_url(self._site.get_root_url(), self._site.get_site_id(), path)

    def content_url(self, path: str) -> str:
        return content_url(self._site.get_root_url(), self._site.get_site_id(), path)

    def submit(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> "Future[T]":
        """Run func on the transport's executor and return its future."""
        return self._executor.submit(func, *args, **kwargs)

    def request(
        self,
        method: str,
        url: str,
        *,
        body: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
        parse_json: bool = False,
    ) -> "Future[Any]":
        return self.submit(
            self.execute,
            method,
            url,
            body=body,
            headers=headers,
            parse_json=parse_json,
        )

    def execute(
        self,
        method: str,
        url: str,
        *,
        body: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
        parse_json: bool = False,
    ) -> Any:
        """
        Issue one request and return the response body.

        Returns:
            Parsed JSON (parse_json=True, {} for an empty body) or raw bytes.

        Raises:
            AuthConfigurationError: if no site token is available.
            TransportError: (or a subclass) for any failed exchange.
        """
        request_headers = {"authorization": self._require_site_token()}
        if headers:
            request_headers.update({k.lower(): v for k, v in headers.items()})

        postproc = _json_postproc if parse_json else _raw_postproc
        req = HttpRequest(
            self._thread_http(),
            postproc,
            url,
            method=method,
            body=body,
            headers=request_headers,
        )

        logger.debug("%s %s", method, url)
        try:
            return req.execute(num_retries=0)
        except Exception as exc:
            mapped = self._map_exception(exc)
            logger.warning(
                "%s %s failed: %s (%s)",
                method,
                url,
                mapped.__class__.__name__,
                getattr(mapped, "status_text", None) or mapped,
            )
            raise mapped from exc

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ----------------------------
    # Internals
    # ----------------------------
    def _thread_http(self) -> Any:
        if self._http is not None:
            return self._http
        http = getattr(self._local, "http", None)
        if http is None:
            http = self._http_factory()
            self._local.http = http
        return http

    def _require_site_token(self) -> str:
        token = self._site.get_site_token()
        if not token:
            raise AuthConfigurationError(
                "Site token is not set",
                details={"key": SITE_TOKEN_KEY},
            )
        return token

    def _map_exception(self, exc: Exception) -> BCApiError:
        if isinstance(exc, HttpError):
            return map_http_error(_http_error_to_info(exc), cause=exc)

        if isinstance(exc, httplib2.RelativeURIError):
            return InvalidArgumentError(
                "Request URL is not absolute; configure root_url",
                details={"error": str(exc)},
                cause=exc,
            )

        if isinstance(exc, (OSError, httplib2.HttpLib2Error)):
            return map_http_error(
                HttpErrorInfo(status_code=0, message="Network error"),
                cause=exc,
            )

        if isinstance(exc, ValueError):
            return TransportError("Malformed response body", cause=exc)

        if isinstance(exc, TransportError):
            return exc

        if isinstance(exc, BCApiError):
            return TransportError(str(exc), details=exc.details, cause=exc)

        return TransportError("Request failed", cause=exc)


def _raw_postproc(resp: Any, content: bytes) -> bytes:
    return content


def _json_postproc(resp: Any, content: bytes) -> Any:
    if not content:
        return {}
    return json.loads(content.decode("utf-8"))


def _decode_payload(content: Any) -> Any:
    if not isinstance(content, (bytes, bytearray)) or not content:
        return None
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return bytes(content)
    try:
        return json.loads(text)
    except ValueError:
        return text


def _http_error_to_info(exc: HttpError) -> HttpErrorInfo:
    resp = getattr(exc, "resp", None)
    status_code = getattr(resp, "status", None)
    status_text = getattr(resp, "reason", None)

    payload = _decode_payload(getattr(exc, "content", None))
    message = None
    if isinstance(payload, dict):
        raw = payload.get("message") or payload.get("error")
        if isinstance(raw, str) and raw:
            message = raw

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        status_text=status_text if isinstance(status_text, str) else None,
        message=message,
        payload=payload,
        details={"uri": getattr(exc, "uri", None)},
    )

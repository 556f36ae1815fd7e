"""
Per-request context for log correlation.

CorrelationIdMiddleware stores a RequestContext (request id, client address,
method, path) in a ContextVar for the duration of each HTTP request. Log
records and security audit events read it from there, so an access-code
rejection or a table transition can be traced back to the request that
caused it without threading ids through the services.

The caller's X-Request-ID is reused only when it is short and printable;
anything else is replaced with a fresh id, so header values never reach the
logs verbatim.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from dataclasses import dataclass

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from pos_shared.config.constants import REQUEST_ID_HEADER

_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,64}")


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    client: str | None = None
    method: str | None = None
    path: str | None = None


request_context_var: ContextVar[RequestContext | None] = ContextVar(
    "request_context", default=None
)


def current_request_context() -> RequestContext | None:
    return request_context_var.get()


def get_request_id() -> str:
    """Request id of the current request, "" outside of one."""
    context = request_context_var.get()
    return context.request_id if context else ""


def accept_request_id(candidate: str | None) -> str:
    """Keep a well-formed incoming id, otherwise mint one."""
    if candidate and _REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Binds a RequestContext to every request and echoes its id in the
    X-Request-ID response header.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        context = RequestContext(
            request_id=accept_request_id(request.headers.get(REQUEST_ID_HEADER)),
            client=request.client.host if request.client else None,
            method=request.method,
            path=request.url.path,
        )
        token = request_context_var.set(context)
        try:
            response = await call_next(request)
        finally:
            request_context_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = context.request_id
        return response


class CorrelationIdFilter(logging.Filter):
    """Stamps request_id and client on every record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = request_context_var.get()
        record.request_id = context.request_id if context else "-"
        record.client = (context.client if context else None) or "-"
        return True

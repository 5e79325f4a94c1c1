from __future__ import annotations

import uuid
import contextvars
from typing import Callable, Awaitable

import grpc
import structlog


REQUEST_ID_META_KEY = "x-request-id"
_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("grpc_request_id", default=None)


def get_request_id() -> str | None:
    return _request_id_var.get()


class RequestIdInterceptor(grpc.aio.ServerInterceptor):
    """Propagate `x-request-id` metadata (or mint one) into the log context."""

    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None or not handler.unary_unary:
            return handler

        md = dict(handler_call_details.invocation_metadata or [])

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            request_id = md.get(REQUEST_ID_META_KEY) or str(uuid.uuid4())
            # Echo back so the client can correlate
            context.set_trailing_metadata(((REQUEST_ID_META_KEY, request_id),))

            token = _request_id_var.set(request_id)
            structlog.contextvars.bind_contextvars(request_id=request_id)
            try:
                return await handler.unary_unary(request, context)
            finally:
                structlog.contextvars.unbind_contextvars("request_id")
                _request_id_var.reset(token)

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )

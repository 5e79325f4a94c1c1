from __future__ import annotations

from typing import Callable, Awaitable
import contextvars

import grpc


_current_token: contextvars.ContextVar[str] = contextvars.ContextVar("grpc_current_token", default="")


def get_current_token() -> str:
    return _current_token.get()


def extract_token(metadata) -> str:
    """Read `authorization: Bearer <token>` (or `access_token: <token>`) metadata."""
    md = dict(metadata or [])
    auth = md.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        return auth[7:].strip()
    return md.get("access_token") or ""


class AuthInterceptor(grpc.aio.ServerInterceptor):
    """Expose the caller's bearer token to service adapters.

    No rejection happens here: every use case validates the token and the
    role itself, so a missing token surfaces as PERMISSION_DENIED from the
    exception mapping.
    """

    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None or not handler.unary_unary:
            return handler

        token = extract_token(handler_call_details.invocation_metadata)

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            token_ctx = _current_token.set(token)
            try:
                return await handler.unary_unary(request, context)
            finally:
                _current_token.reset(token_ctx)

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )

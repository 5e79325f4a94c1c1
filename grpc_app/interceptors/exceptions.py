from __future__ import annotations

from typing import Callable, Awaitable

import grpc

from core.logging_config import get_logger
from grpc_app.interceptors.request_id import get_request_id
from domain.common.exceptions import BusinessException, is_access_error
from shared.codes import BusinessCode


logger = get_logger(__name__)

_STATUS_BY_CODE = {
    BusinessCode.PARAM_MISSING: grpc.StatusCode.INVALID_ARGUMENT,
    BusinessCode.PARAM_VALIDATION_ERROR: grpc.StatusCode.INVALID_ARGUMENT,
    BusinessCode.INVALID_EMAIL: grpc.StatusCode.INVALID_ARGUMENT,
    BusinessCode.UNKNOWN_CITY: grpc.StatusCode.INVALID_ARGUMENT,
    BusinessCode.UNKNOWN_PRODUCT_CATEGORY: grpc.StatusCode.INVALID_ARGUMENT,
    BusinessCode.UNKNOWN_ROLE: grpc.StatusCode.INVALID_ARGUMENT,

    BusinessCode.USER_NOT_FOUND: grpc.StatusCode.NOT_FOUND,
    BusinessCode.NOT_FOUND: grpc.StatusCode.NOT_FOUND,
    BusinessCode.PVZ_NOT_FOUND: grpc.StatusCode.NOT_FOUND,
    BusinessCode.RECEPTION_NOT_FOUND: grpc.StatusCode.NOT_FOUND,
    BusinessCode.USER_ALREADY_EXISTS: grpc.StatusCode.ALREADY_EXISTS,

    BusinessCode.RECEPTION_ALREADY_OPENED: grpc.StatusCode.FAILED_PRECONDITION,
    BusinessCode.RECEPTION_CLOSED: grpc.StatusCode.FAILED_PRECONDITION,
    BusinessCode.RECEPTION_EMPTY: grpc.StatusCode.FAILED_PRECONDITION,

    BusinessCode.TOKEN_INVALID: grpc.StatusCode.UNAUTHENTICATED,
    BusinessCode.TOKEN_EXPIRED: grpc.StatusCode.UNAUTHENTICATED,
    BusinessCode.UNAUTHORIZED: grpc.StatusCode.UNAUTHENTICATED,

    BusinessCode.SERVICE_UNAVAILABLE: grpc.StatusCode.UNAVAILABLE,
    BusinessCode.SYSTEM_ERROR: grpc.StatusCode.INTERNAL,
    BusinessCode.DATABASE_ERROR: grpc.StatusCode.INTERNAL,
}


def business_exception_to_status(exc: BusinessException) -> grpc.StatusCode:
    """访问拒绝统一为 PERMISSION_DENIED，其余按业务码查表"""
    if is_access_error(exc):
        return grpc.StatusCode.PERMISSION_DENIED
    try:
        return _STATUS_BY_CODE.get(BusinessCode(exc.code), grpc.StatusCode.FAILED_PRECONDITION)
    except ValueError:
        return grpc.StatusCode.FAILED_PRECONDITION


class ExceptionMappingInterceptor(grpc.aio.ServerInterceptor):
    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None or not handler.unary_unary:
            return handler

        method = handler_call_details.method

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            try:
                return await handler.unary_unary(request, context)
            except BusinessException as exc:
                status = business_exception_to_status(exc)
                context.set_trailing_metadata((
                    ("x-biz-code", str(int(exc.code))),
                    ("x-error-type", exc.error_type or "BusinessError"),
                    ("x-request-id", get_request_id() or ""),
                ))
                log = logger.error if status == grpc.StatusCode.INTERNAL else logger.info
                log(
                    "grpc_mapped_error",
                    method=method,
                    code=str(int(exc.code)),
                    status=str(status),
                    message=exc.message,
                    request_id=get_request_id(),
                )
                await context.abort(status, exc.message)
            except grpc.aio.AbortError:
                raise
            except Exception as exc:
                context.set_trailing_metadata((
                    ("x-biz-code", str(BusinessCode.SYSTEM_ERROR.value)),
                    ("x-error-type", "SystemError"),
                    ("x-request-id", get_request_id() or ""),
                ))
                logger.error(
                    "grpc_unhandled_error",
                    method=method,
                    error=str(exc),
                    exc_info=True,
                    request_id=get_request_id(),
                )
                await context.abort(grpc.StatusCode.INTERNAL, "internal error")

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )

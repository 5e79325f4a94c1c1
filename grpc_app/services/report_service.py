from __future__ import annotations

from typing import Callable, Optional

import grpc
from google.protobuf import struct_pb2

from application.services.authorization_service import JWTAuthorizationService
from application.services.pvz_service import PickupPointApplicationService
from application.services.token_service import TokenService
from domain.common.unit_of_work import AbstractUnitOfWork
from grpc_app.interceptors.auth import get_current_token
from grpc_app.mappers.report import report_query_from_struct, reports_to_struct
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork


SERVICE_NAME = "pvz.v1.PVZReportService"


class PVZReportService:
    """gRPC adapter over the report-listing use case."""

    def __init__(
        self,
        uow_factory: Callable[..., AbstractUnitOfWork] = SQLAlchemyUnitOfWork,
        token_service: Optional[TokenService] = None,
    ) -> None:
        authorization = JWTAuthorizationService(uow_factory, token_service)
        self._svc = PickupPointApplicationService(uow_factory, authorization)

    async def GetPVZReport(self, request: struct_pb2.Struct, context: grpc.aio.ServicerContext) -> struct_pb2.Struct:
        query = report_query_from_struct(request)
        reports = await self._svc.list_reports(get_current_token(), query)
        return reports_to_struct(reports)


def add_PVZReportServiceServicer_to_server(servicer: PVZReportService, server: grpc.aio.Server) -> None:
    """Register without generated stubs: requests and replies are google.protobuf.Struct."""
    handlers = {
        "GetPVZReport": grpc.unary_unary_rpc_method_handler(
            servicer.GetPVZReport,
            request_deserializer=struct_pb2.Struct.FromString,
            response_serializer=struct_pb2.Struct.SerializeToString,
        ),
    }
    server.add_generic_rpc_handlers((grpc.method_handlers_generic_handler(SERVICE_NAME, handlers),))


def get_pvz_report_callable(channel: grpc.aio.Channel):
    """Client-side callable for `/pvz.v1.PVZReportService/GetPVZReport`."""
    return channel.unary_unary(
        f"/{SERVICE_NAME}/GetPVZReport",
        request_serializer=struct_pb2.Struct.SerializeToString,
        response_deserializer=struct_pb2.Struct.FromString,
    )

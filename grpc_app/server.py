from __future__ import annotations

from typing import Callable, Optional, Sequence
import grpc
from grpc_health.v1 import health, health_pb2_grpc, health_pb2

from core.config import GrpcSettings, settings
from core.logging_config import get_logger
from domain.common.unit_of_work import AbstractUnitOfWork
from grpc_app.interceptors.request_id import RequestIdInterceptor
from grpc_app.interceptors.logging import LoggingInterceptor
from grpc_app.interceptors.exceptions import ExceptionMappingInterceptor
from grpc_app.interceptors.auth import AuthInterceptor
from grpc_app.services.report_service import (
    SERVICE_NAME,
    PVZReportService,
    add_PVZReportServiceServicer_to_server,
)
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork


logger = get_logger(__name__)


def _server_credentials(cfg: GrpcSettings) -> grpc.ServerCredentials:
    if not (cfg.tls.cert and cfg.tls.key):
        raise RuntimeError("GRPC TLS enabled but cert/key not provided")
    with open(cfg.tls.cert, "rb") as f:
        cert_chain = f.read()
    with open(cfg.tls.key, "rb") as f:
        private_key = f.read()
    root_certificates = None
    if cfg.tls.ca:
        with open(cfg.tls.ca, "rb") as f:
            root_certificates = f.read()
    return grpc.ssl_server_credentials(
        [(private_key, cert_chain)],
        root_certificates=root_certificates,
        require_client_auth=bool(root_certificates),
    )


async def create_server(
    cfg: Optional[GrpcSettings] = None,
    uow_factory: Callable[..., AbstractUnitOfWork] = SQLAlchemyUnitOfWork,
) -> tuple[grpc.aio.Server, int]:
    """Build the server and bind its port; returns (server, bound_port)."""
    cfg = cfg or settings.grpc
    interceptors: Sequence[grpc.aio.ServerInterceptor] = (
        RequestIdInterceptor(),
        LoggingInterceptor(),
        ExceptionMappingInterceptor(),  # maps business exceptions
        AuthInterceptor(),              # exposes bearer token to adapters
    )

    options = [
        ("grpc.max_concurrent_streams", max(1, cfg.max_concurrent_streams)),
    ]
    server = grpc.aio.server(interceptors=interceptors, options=options)

    add_PVZReportServiceServicer_to_server(PVZReportService(uow_factory), server)

    health_svc = health.aio.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_svc, server)
    await health_svc.set("", health_pb2.HealthCheckResponse.SERVING)
    await health_svc.set(SERVICE_NAME, health_pb2.HealthCheckResponse.SERVING)

    address = f"{cfg.host}:{cfg.port}"
    if cfg.tls.enabled:
        port = server.add_secure_port(address, _server_credentials(cfg))
    else:
        port = server.add_insecure_port(address)
    return server, port


class GrpcServerRunner:
    """Explicit start/stop hooks, driven by the FastAPI lifespan or grpc_main."""

    def __init__(
        self,
        cfg: Optional[GrpcSettings] = None,
        uow_factory: Callable[..., AbstractUnitOfWork] = SQLAlchemyUnitOfWork,
    ) -> None:
        self._cfg = cfg or settings.grpc
        self._uow_factory = uow_factory
        self._server: Optional[grpc.aio.Server] = None
        self.port: Optional[int] = None

    async def start(self) -> None:
        if self._server is not None:
            return
        self._server, self.port = await create_server(self._cfg, self._uow_factory)
        await self._server.start()
        logger.info("grpc_started", host=self._cfg.host, port=self.port, tls=self._cfg.tls.enabled)

    async def wait_for_termination(self) -> None:
        if self._server is not None:
            await self._server.wait_for_termination()

    async def stop(self, grace: Optional[float] = None) -> None:
        if self._server is None:
            return
        grace = self._cfg.shutdown_grace if grace is None else grace
        logger.info("grpc_stopping", grace=grace)
        await self._server.stop(grace)
        self._server = None
        logger.info("grpc_stopped")

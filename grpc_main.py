import asyncio

from core.config import settings
from core.logging_config import configure_logging, get_logger
from grpc_app.server import GrpcServerRunner
from infrastructure.database import dispose_engine, wait_for_database


configure_logging()
logger = get_logger(__name__)


async def main() -> None:
    if not settings.grpc.enabled:
        logger.warning("grpc_disabled", message="gRPC disabled by config (GRPC__ENABLED=false)")
        return

    await wait_for_database()
    runner = GrpcServerRunner()
    await runner.start()
    try:
        await runner.wait_for_termination()
    finally:
        await runner.stop()
        await dispose_engine()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("grpc_interrupted")

"""
Process entry point for the LayoutLens API.

Usage:
    layoutlens-api
    python -m layoutlens.api.server

Host and port come from config (``server.host`` / ``server.port``),
overridable with the HOST and PORT environment variables.
"""
import asyncio

from uvicorn import Config, Server

from layoutlens.config import config


def uvicorn_log_level() -> str:
    """uvicorn wants lowercase level names"""
    return str(config.get("logging", "level", "INFO")).lower()


async def serve() -> None:
    from layoutlens.api.logging_config import logger
    from layoutlens.api.main import app

    host = config.get("server", "host")
    port = int(config.get("server", "port"))

    server_config = Config(app=app, host=host, port=port, reload=False, log_level=uvicorn_log_level())
    server = Server(server_config)
    logger.info(f"listening on {host}:{port}")
    await server.serve()


def main() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    main()

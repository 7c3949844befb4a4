"""Process entry point: fail-fast bind, uvicorn serving, signal-driven shutdown.

On SIGTERM or SIGINT the server announces the signal, stops accepting
connections, drains in-flight requests for up to ``shutdown_timeout`` seconds
and exits with status 0.
"""

import logging
import signal
import socket
import sys
from typing import Optional

import uvicorn
from pydantic import ValidationError

from .config import Settings, get_settings
from .errors import PortUnavailableError
from .main import create_app
from .observability import setup_logging

logger = logging.getLogger(__name__)

BACKLOG = 2048
EXIT_PORT_UNAVAILABLE = 1
EXIT_BAD_CONFIG = 2


def bind_socket(settings: Settings) -> socket.socket:
    """Bind and listen on the configured address or raise PortUnavailableError."""
    family = socket.AF_INET6 if ":" in settings.host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((settings.host, settings.port))
        sock.listen(BACKLOG)
    except OSError as exc:
        sock.close()
        raise PortUnavailableError(settings.host, settings.port, exc.strerror or str(exc)) from exc
    sock.set_inheritable(True)
    return sock


class DemoServer(uvicorn.Server):
    def __init__(self, config: uvicorn.Config, announce_port: int) -> None:
        super().__init__(config)
        self.announce_port = announce_port

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.should_exit:
            return
        port = self.announce_port
        logger.info("Server running on port %d", port, extra={"port": port})
        logger.info("Health check available at http://localhost:%d/health", port)
        logger.info("API info available at http://localhost:%d/api/info", port)

    def handle_exit(self, sig, frame) -> None:
        if not self.should_exit:
            name = signal.Signals(sig).name
            logger.info("%s received, shutting down gracefully", name, extra={"signal": name})
        super().handle_exit(sig, frame)


def _exit_cleanly(signum, frame):
    # uvicorn restores this handler and re-raises the captured signal once it has drained
    raise SystemExit(0)


def run(settings: Optional[Settings] = None) -> int:
    try:
        settings = settings or get_settings()
    except ValidationError as exc:
        setup_logging()
        logger.error("Invalid configuration: %s", exc)
        return EXIT_BAD_CONFIG

    setup_logging(settings.log_level, settings.log_format)
    try:
        sock = bind_socket(settings)
    except PortUnavailableError as exc:
        logger.error("Startup failed, %s", exc, extra={"port": exc.port})
        return EXIT_PORT_UNAVAILABLE

    config = uvicorn.Config(
        create_app(settings),
        log_config=None,
        log_level=settings.log_level.lower(),
        access_log=settings.access_log,
        timeout_graceful_shutdown=settings.shutdown_timeout,
        lifespan="on",
    )
    server = DemoServer(config, announce_port=sock.getsockname()[1])
    for sig in (signal.SIGTERM, signal.SIGINT):
        signal.signal(sig, _exit_cleanly)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
    return 0


def main() -> None:
    sys.exit(run())

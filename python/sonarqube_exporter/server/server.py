"""
Exporter HTTP Server.

Provides endpoints:
- /metrics - Prometheus exposition (text or OpenMetrics, by Accept header)
- /health - Returns 200 if process is running
- / - Landing page listing the endpoints
"""

import asyncio
from typing import Optional

from aiohttp import web
from prometheus_client import CollectorRegistry
from prometheus_client.exposition import choose_encoder

from ..config.logging import get_logger

logger = get_logger("server")

SHUTDOWN_TIMEOUT = 30.0

ROOT_PAGE = """<!DOCTYPE html>
<html>
<head>
    <title>SonarQube Prometheus Exporter</title>
</head>
<body>
    <h1>SonarQube Prometheus Exporter</h1>
    <p>Available endpoints:</p>
    <ul>
        <li><a href="/metrics">/metrics</a> - Prometheus metrics</li>
        <li><a href="/health">/health</a> - Health check</li>
    </ul>
</body>
</html>"""


class ExporterServer:
    """
    HTTP server exposing a Prometheus registry.

    Rendering /metrics runs a full SonarQube collection cycle, so it is
    done in a worker thread to keep the event loop responsive.
    """

    def __init__(
        self,
        registry: CollectorRegistry,
        port: int = 9090,
        host: str = "0.0.0.0",
    ):
        """
        Initialize server.

        Args:
            registry: Registry rendered on /metrics
            port: HTTP port to listen on
            host: Host to bind to
        """
        self.registry = registry
        self.port = port
        self.host = host
        self._runner: Optional[web.AppRunner] = None
        self._started = False

    def create_app(self) -> web.Application:
        """Build the aiohttp application with all routes."""
        app = web.Application()
        app.router.add_get("/metrics", self._metrics_handler)
        app.router.add_get("/health", self._health_handler)
        app.router.add_get("/", self._root_handler)
        return app

    async def _metrics_handler(self, request: web.Request) -> web.Response:
        """Render the registry in the format requested by the scraper."""
        encoder, content_type = choose_encoder(request.headers.get("Accept", ""))
        loop = asyncio.get_running_loop()
        body = await loop.run_in_executor(None, encoder, self.registry)
        return web.Response(body=body, headers={"Content-Type": content_type})

    async def _health_handler(self, request: web.Request) -> web.Response:
        """Liveness probe - just returns OK if process is running."""
        return web.Response(text="OK", status=200)

    async def _root_handler(self, request: web.Request) -> web.Response:
        return web.Response(text=ROOT_PAGE, content_type="text/html")

    async def start(self) -> None:
        """Start the HTTP server."""
        if self._started:
            return

        self._runner = web.AppRunner(self.create_app())
        await self._runner.setup()

        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()

        self._started = True
        logger.info(f"Exporter server started on {self.host}:{self.port}")

    async def stop(self, timeout: float = SHUTDOWN_TIMEOUT) -> None:
        """
        Stop the server, waiting up to `timeout` seconds for in-flight requests.

        Raises:
            asyncio.TimeoutError: If shutdown did not finish in time.
        """
        logger.info("Shutting down server...")
        if self._runner:
            runner, self._runner = self._runner, None
            await asyncio.wait_for(runner.cleanup(), timeout)
        self._started = False
        logger.info("Exporter server stopped")

    @property
    def is_running(self) -> bool:
        return self._started

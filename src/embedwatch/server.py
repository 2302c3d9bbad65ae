"""HTTP surface for the relay (aiohttp).

Routes:
    GET /         liveness probe, or the gated data endpoint when
                  ``serve_data_on_root`` is set (bearer deployments)
    GET /getdata  data endpoint otherwise
"""

from __future__ import annotations

from aiohttp import web

from embedwatch.constants import DEFAULT_HOST, DEFAULT_PORT, LIVENESS_MESSAGE
from embedwatch.logging import get_logger
from embedwatch.relay.query import QueryHandler

log = get_logger("embedwatch.server")


class RelayServer:
    """Wraps a QueryHandler in an aiohttp application."""

    def __init__(
        self,
        *,
        query_handler: QueryHandler,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        serve_data_on_root: bool = False,
    ) -> None:
        self._query_handler = query_handler
        self._host = host
        self._port = port
        self._serve_data_on_root = serve_data_on_root
        self._runner: web.AppRunner | None = None

    def create_app(self) -> web.Application:
        """Build the aiohttp application with the configured routes."""
        app = web.Application()
        if self._serve_data_on_root:
            app.router.add_get("/", self._handle_data)
        else:
            app.router.add_get("/", self._handle_liveness)
            app.router.add_get("/getdata", self._handle_data)
        return app

    async def _handle_liveness(self, request: web.Request) -> web.Response:
        return web.Response(status=200, text=LIVENESS_MESSAGE)

    async def _handle_data(self, request: web.Request) -> web.Response:
        result = self._query_handler.handle(request.headers, request.query)
        return web.json_response(result.body, status=result.status)

    async def start(self) -> None:
        """Start listening."""
        self._runner = web.AppRunner(self.create_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._host, self._port)
        await site.start()
        log.info("http_server_started", host=self._host, port=self._port)

    async def stop(self) -> None:
        """Stop listening and release the runner."""
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        log.info("http_server_stopped")

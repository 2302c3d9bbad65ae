"""Main entry point for EmbedWatch."""

import asyncio

from pydantic import ValidationError

from embedwatch.config import Settings, get_settings
from embedwatch.discord.bot import EmbedWatchBot
from embedwatch.logging import get_logger, setup_logging
from embedwatch.relay.auth import build_authorizer
from embedwatch.relay.buffer import TTLBuffer
from embedwatch.relay.ingest import IngestionHandler
from embedwatch.relay.query import QueryHandler
from embedwatch.relay.store import AnnouncementStore
from embedwatch.server import RelayServer


def load_settings() -> Settings:
    """Load settings, exiting with status 1 when they are invalid."""
    try:
        return get_settings()
    except ValidationError as e:
        log = get_logger("embedwatch.main")
        log.error(
            "configuration_invalid",
            errors=[
                f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
                for err in e.errors(include_input=False)
            ],
        )
        raise SystemExit(1) from e


def build_components(
    settings: Settings,
) -> tuple[IngestionHandler, RelayServer]:
    """Wire the store, handlers and HTTP server from settings."""
    store = AnnouncementStore(buffer=TTLBuffer(max_entries=settings.max_buffer_entries))
    ingestion = IngestionHandler(store=store)
    query = QueryHandler(
        store=store,
        authorizer=build_authorizer(settings),
        window_ms=settings.retention_window_ms,
    )
    server = RelayServer(
        query_handler=query,
        host=settings.host,
        port=settings.port,
        serve_data_on_root=settings.serve_data_on_root,
    )
    return ingestion, server


async def main() -> None:
    """Main application entry point."""
    settings = load_settings()
    setup_logging()
    log = get_logger("embedwatch.main")

    log.info(
        "starting_embedwatch",
        environment=settings.environment,
        auth_mode=str(settings.auth_mode),
        port=settings.port,
        retention_window_ms=settings.retention_window_ms,
        categories=len(settings.category_ids),
    )
    if settings.api_secret is None:
        log.warning("api_secret_not_configured", detail="data endpoint secret check disabled")

    ingestion, server = build_components(settings)
    bot = EmbedWatchBot(ingestion=ingestion, category_ids=settings.category_ids)

    await server.start()
    try:
        await bot.start(settings.discord_token.get_secret_value())
    except KeyboardInterrupt:
        log.info("shutdown_requested")
    finally:
        await bot.close()
        await server.stop()
        log.info("embedwatch_stopped")


def run() -> None:
    """Run the application."""
    asyncio.run(main())


if __name__ == "__main__":
    run()

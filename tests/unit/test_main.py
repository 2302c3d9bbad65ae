"""Unit tests for startup wiring in embedwatch.main."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from embedwatch.config import Settings
from embedwatch.main import build_components, load_settings, main
from embedwatch.relay.auth import QueryParamAuthorizer
from embedwatch.server import RelayServer


def _settings(**overrides) -> Settings:
    defaults = {"discord_token": "t", "api_secret_key": "S", "_env_file": None}
    defaults.update(overrides)
    return Settings(**defaults)


class TestLoadSettings:
    """Configuration errors are fatal before anything connects."""

    def test_exits_when_token_missing(self, monkeypatch):
        monkeypatch.delenv("DISCORD_TOKEN", raising=False)
        with patch(
            "embedwatch.main.get_settings",
            side_effect=lambda: Settings(_env_file=None),
        ):
            with pytest.raises(SystemExit) as exc:
                load_settings()
        assert exc.value.code == 1

    def test_exits_when_token_blank(self, monkeypatch):
        monkeypatch.setenv("DISCORD_TOKEN", "")
        with patch(
            "embedwatch.main.get_settings",
            side_effect=lambda: Settings(_env_file=None),
        ):
            with pytest.raises(SystemExit) as exc:
                load_settings()
        assert exc.value.code == 1

    async def test_blank_token_never_starts_server(self, monkeypatch):
        monkeypatch.setenv("DISCORD_TOKEN", "")
        with (
            patch("embedwatch.main.get_settings", side_effect=lambda: Settings(_env_file=None)),
            patch("embedwatch.main.RelayServer") as mock_server_cls,
        ):
            with pytest.raises(SystemExit):
                await main()
        mock_server_cls.assert_not_called()

    def test_returns_settings(self):
        assert load_settings().discord_token.get_secret_value()


class TestBuildComponents:
    """Tests for build_components wiring."""

    def test_query_mode_wiring(self):
        settings = _settings(
            auth_mode="query", authorized_user_ids="42", retention_window_ms=5000, port=9999
        )
        ingestion, server = build_components(settings)

        assert isinstance(server, RelayServer)
        assert server._port == 9999
        assert server._query_handler.window_ms == 5000
        assert isinstance(server._query_handler._authorizer, QueryParamAuthorizer)
        assert ingestion.monitored_channel_ids == frozenset()

    def test_ingestion_and_query_share_store(self):
        ingestion, server = build_components(_settings())
        assert ingestion._store is server._query_handler._store


class TestMain:
    """Tests for main() lifecycle."""

    async def test_starts_and_stops_everything(self):
        server = AsyncMock()
        bot = MagicMock()
        bot.start = AsyncMock()
        bot.close = AsyncMock()

        with (
            patch("embedwatch.main.load_settings", return_value=_settings(category_ids="1,2")),
            patch("embedwatch.main.setup_logging"),
            patch("embedwatch.main.build_components", return_value=(MagicMock(), server)),
            patch("embedwatch.main.EmbedWatchBot", return_value=bot) as mock_bot_cls,
        ):
            await main()

        assert mock_bot_cls.call_args.kwargs["category_ids"] == ["1", "2"]
        server.start.assert_awaited_once()
        bot.start.assert_awaited_once_with("t")
        bot.close.assert_awaited_once()
        server.stop.assert_awaited_once()

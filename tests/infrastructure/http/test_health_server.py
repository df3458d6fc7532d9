"""Tests for HealthServer."""

from unittest.mock import Mock

import aiohttp
import pytest

from fakeme.infrastructure.http.health_server import HealthServer


@pytest.fixture
def mock_slack_runner() -> Mock:
    """Create a mock SlackAppRunner."""
    mock = Mock()
    mock.is_connected = True
    return mock


@pytest.fixture
def server(mock_slack_runner: Mock) -> HealthServer:
    """Create a server on any available port."""
    return HealthServer(slack_runner=mock_slack_runner, port=0)


class TestHealthServerLiveness:
    """Tests for liveness check."""

    async def test_liveness_returns_alive_when_running(
        self, server: HealthServer
    ) -> None:
        """Test that liveness returns alive once the server is started."""
        await server.start()
        try:
            result = await server.check_liveness()
        finally:
            await server.stop()

        assert result["status"] == "alive"
        assert "timestamp" in result

    async def test_liveness_returns_dead_when_stopped(
        self, server: HealthServer
    ) -> None:
        """Test that liveness returns dead when the server is not running."""
        result = await server.check_liveness()

        assert result["status"] == "dead"


class TestHealthServerReadiness:
    """Tests for readiness check."""

    async def test_readiness_returns_ready_when_connected(
        self, server: HealthServer
    ) -> None:
        """Test that readiness follows the Slack connection."""
        result = await server.check_readiness()

        assert result == {"ready": True, "slack": True}

    async def test_readiness_returns_not_ready_when_slack_disconnected(
        self, server: HealthServer, mock_slack_runner: Mock
    ) -> None:
        """Test that readiness returns not ready when Slack is disconnected."""
        mock_slack_runner.is_connected = False

        result = await server.check_readiness()

        assert result["ready"] is False
        assert result["slack"] is False


class TestHealthServerHTTP:
    """Tests for HTTP server functionality."""

    async def test_server_starts_and_stops(self, server: HealthServer) -> None:
        """Test that server can start and stop."""
        await server.start()
        assert server.is_running is True
        assert server.port > 0

        await server.stop()
        assert server.is_running is False

    async def test_live_endpoint_returns_200(self, server: HealthServer) -> None:
        """Test that /live endpoint returns 200."""
        await server.start()
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(f"http://127.0.0.1:{server.port}/live") as resp:
                    assert resp.status == 200
                    data = await resp.json()
                    assert data["status"] == "alive"
        finally:
            await server.stop()

    async def test_ready_endpoint_returns_200_when_ready(
        self, server: HealthServer
    ) -> None:
        """Test that /ready endpoint returns 200 when ready."""
        await server.start()
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(f"http://127.0.0.1:{server.port}/ready") as resp:
                    assert resp.status == 200
                    data = await resp.json()
                    assert data["ready"] is True
        finally:
            await server.stop()

    async def test_ready_endpoint_returns_503_when_not_ready(
        self, server: HealthServer, mock_slack_runner: Mock
    ) -> None:
        """Test that /ready endpoint returns 503 when not ready."""
        mock_slack_runner.is_connected = False

        await server.start()
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(f"http://127.0.0.1:{server.port}/ready") as resp:
                    assert resp.status == 503
                    data = await resp.json()
                    assert data["ready"] is False
        finally:
            await server.stop()

    async def test_unknown_endpoint_returns_404(self, server: HealthServer) -> None:
        """Test that unknown endpoints return 404."""
        await server.start()
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    f"http://127.0.0.1:{server.port}/unknown"
                ) as resp:
                    assert resp.status == 404
        finally:
            await server.stop()

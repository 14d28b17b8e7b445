"""
Graph API Backend — Route Tests
================================

What we test:
    ✅ GET / and GET /health static payloads
    ✅ GET /api/users list and GET /api/users/{id} parsing rules
    ✅ GET /db/status connected / error paths (mocked and real unwritable path)
    ✅ Unhandled handler errors become 500 JSON without killing the app
"""

import pytest

from api.config import Settings
from api.exceptions import DatabaseError
from api.graph import GraphDatabase
from api.main import create_app
from api.routes.users import parse_user_id


class TestServiceRoutes:

    @pytest.mark.asyncio
    async def test_root_banner(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "API is running"}

    @pytest.mark.asyncio
    async def test_health_ok(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_health_ignores_database_state(self, test_settings, mock_graph_db, make_client):
        mock_graph_db.run_query.side_effect = DatabaseError()
        app = create_app(settings=test_settings, graph_db=mock_graph_db)

        async with make_client(app) as client:
            response = await client.get("/health")

        assert response.status_code == 200
        mock_graph_db.run_query.assert_not_called()


class TestDbStatus:

    @pytest.mark.asyncio
    async def test_connected(self, test_client, mock_graph_db):
        response = await test_client.get("/db/status")

        assert response.status_code == 200
        assert response.json() == {"status": "connected"}
        mock_graph_db.run_query.assert_called_once_with("RETURN 1")

    @pytest.mark.asyncio
    async def test_query_failure_returns_500(self, test_settings, mock_graph_db, make_client):
        mock_graph_db.run_query.side_effect = DatabaseError(context={"error": "boom"})
        app = create_app(settings=test_settings, graph_db=mock_graph_db)

        async with make_client(app) as client:
            response = await client.get("/db/status")

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "Database connection error"}

    @pytest.mark.asyncio
    async def test_unwritable_path_returns_500(self, tmp_path, make_client):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        settings = Settings(kuzu_db_path=str(blocker / "data" / "cve.db"))
        app = create_app(settings=settings)

        async with make_client(app) as client:
            response = await client.get("/db/status")

        assert response.status_code == 500
        assert response.json()["status"] == "error"
        assert isinstance(app.state.graph_db, GraphDatabase)
        assert app.state.graph_db.is_open is False


class TestUserRoutes:

    @pytest.mark.asyncio
    async def test_list_users(self, test_client):
        response = await test_client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == [
            {"id": 1, "name": "User 1"},
            {"id": 2, "name": "User 2"},
            {"id": 3, "name": "User 3"},
        ]

    @pytest.mark.asyncio
    async def test_get_user(self, test_client):
        response = await test_client.get("/api/users/2")

        assert response.status_code == 200
        assert response.json() == {"id": 2, "name": "User 2"}

    @pytest.mark.asyncio
    async def test_get_user_not_limited_to_list(self, test_client):
        response = await test_client.get("/api/users/42")

        assert response.json() == {"id": 42, "name": "User 42"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["-1", "0", "abc", "-5xyz"])
    async def test_invalid_id_returns_400(self, test_client, raw_id):
        response = await test_client.get(f"/api/users/{raw_id}")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid ID"}

    @pytest.mark.asyncio
    async def test_non_ascii_digit_returns_400(self, test_client):
        response = await test_client.get("/api/users/%D9%A3")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid ID"}

    @pytest.mark.asyncio
    async def test_trailing_characters_ignored(self, test_client):
        response = await test_client.get("/api/users/7abc")

        assert response.status_code == 200
        assert response.json() == {"id": 7, "name": "User 7"}


class TestParseUserId:

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("2", 2),
            ("007", 7),
            ("+3", 3),
            ("-1", -1),
            (" 12", 12),
            ("12.9", 12),
            ("abc", None),
            ("", None),
            ("x1", None),
            ("\u0663", None),
            ("1\u0663", 1),
        ],
    )
    def test_leading_integer(self, raw, expected):
        assert parse_user_id(raw) == expected


class TestUnhandledErrors:

    @staticmethod
    def _app_with_failing_route(settings, graph_db):
        app = create_app(settings=settings, graph_db=graph_db)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        return app

    @pytest.mark.asyncio
    async def test_converted_to_500(self, test_settings, mock_graph_db, make_client):
        app = self._app_with_failing_route(test_settings, mock_graph_db)

        async with make_client(app) as client:
            response = await client.get("/boom")
            follow_up = await client.get("/health")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}
        assert follow_up.status_code == 200

    @pytest.mark.asyncio
    async def test_development_exposes_message(self, tmp_path, mock_graph_db, make_client):
        settings = Settings(kuzu_db_path=str(tmp_path / "cve.db"), node_env="development")
        app = self._app_with_failing_route(settings, mock_graph_db)

        async with make_client(app) as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error", "error": "kaboom"}

    @pytest.mark.asyncio
    async def test_database_error_outside_status_route(self, test_settings, mock_graph_db, make_client):
        app = create_app(settings=test_settings, graph_db=mock_graph_db)

        @app.get("/query")
        async def query():
            raise DatabaseError(context={"query": "MATCH (n) RETURN n"})

        async with make_client(app) as client:
            response = await client.get("/query")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}

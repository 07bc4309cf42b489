"""Tests for the server-rendered pages, login and the film editor."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from cinearchive.config import settings
from cinearchive.database import get_db
from cinearchive.models import Film, Genre


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_film(id: str = "f-1", title: str = "Dune", **kwargs) -> Film:
    return Film(id=id, title=title, release_date="2021", image_url=None, **kwargs)


def make_result(scalars_all: list | None = None, rows: list | None = None, rowcount: int = 0) -> MagicMock:
    r = MagicMock()
    r.scalars.return_value.all.return_value = scalars_all or []
    r.all.return_value = rows or []
    r.rowcount = rowcount
    return r


def reference_results() -> list[MagicMock]:
    """Results for the five catalogue filter-option queries."""
    return [
        make_result(rows=[SimpleNamespace(id=1, name="France")]),
        make_result(rows=[SimpleNamespace(id=2, name="Drama")]),
        make_result(rows=[SimpleNamespace(id=3, name="heist")]),
        make_result(rows=[SimpleNamespace(id=4, name="Michael Mann")]),
        make_result(rows=[SimpleNamespace(year="1995")]),
    ]


def make_db(*results: MagicMock, error: Exception | None = None) -> AsyncMock:
    db = AsyncMock()
    db.add = MagicMock()
    db.execute = AsyncMock(side_effect=error if error is not None else list(results))
    return db


def override_db(app: FastAPI, db: AsyncMock) -> None:
    async def _override():
        yield db

    app.dependency_overrides[get_db] = _override


def client_for(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def log_in(client: AsyncClient) -> None:
    response = await client.post(
        "/login",
        data={"username": settings.admin_username, "password": settings.admin_password, "next": "/"},
    )
    assert response.status_code == 303


# ---------------------------------------------------------------------------
# Catalogue and detail pages
# ---------------------------------------------------------------------------


class TestCatalogue:
    async def test_renders_results_and_filter_options(self, test_app: FastAPI) -> None:
        db = make_db(*reference_results(), make_result([make_film(title="Heat")]))
        override_db(test_app, db)
        try:
            async with client_for(test_app) as client:
                response = await client.get("/movies", params={"search": "heat", "genre_id": "2"})
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 200
        assert "Heat" in response.text
        assert "Michael Mann" in response.text
        assert '<option value="2" selected>Drama</option>' in response.text

    async def test_shows_error_message_when_query_fails(self, test_app: FastAPI) -> None:
        db = make_db(error=OperationalError("SELECT", {}, Exception("connection refused")))
        override_db(test_app, db)
        try:
            async with client_for(test_app) as client:
                response = await client.get("/movies")
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 200
        assert "Error loading films:" in response.text
        assert "connection refused" in response.text


class TestHome:
    async def test_renders_featured_latest_and_genre_rows(self, test_app: FastAPI) -> None:
        db = make_db(
            make_result([make_film("f-1", title="Spirited Away", boost=True)]),
            make_result([make_film("f-2", title="Parasite")]),
            make_result([Genre(id=7, name="Animation")]),
            make_result([make_film("f-1", title="Spirited Away")]),
        )
        override_db(test_app, db)
        try:
            async with client_for(test_app) as client:
                response = await client.get("/")
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 200
        assert "Spirited Away" in response.text
        assert "Parasite" in response.text
        assert "Animation" in response.text


class TestDetail:
    async def test_renders_film_without_admin_controls(self, test_app: FastAPI) -> None:
        override_db(test_app, make_db(make_result([make_film(description="Spice must flow.")])))
        try:
            async with client_for(test_app) as client:
                response = await client.get("/movies/f-1")
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 200
        assert "Spice must flow." in response.text
        assert settings.placeholder_image_url in response.text
        assert "/movies/f-1/delete" not in response.text

    async def test_returns_404_for_unknown_film(self, test_app: FastAPI) -> None:
        override_db(test_app, make_db(make_result([])))
        try:
            async with client_for(test_app) as client:
                response = await client.get("/movies/missing")
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 404


class TestStats:
    async def test_lists_keyword_counts(self, test_app: FastAPI) -> None:
        rows = [SimpleNamespace(id=1, name="noir", film_count=4)]
        override_db(test_app, make_db(make_result(rows=rows)))
        try:
            async with client_for(test_app) as client:
                response = await client.get("/stats")
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 200
        assert "noir" in response.text
        assert ">4<" in response.text


# ---------------------------------------------------------------------------
# Login and admin-only pages
# ---------------------------------------------------------------------------


class TestLogin:
    async def test_admin_pages_redirect_anonymous_visitors(self, test_app: FastAPI) -> None:
        async with client_for(test_app) as client:
            response = await client.get("/movies/create")

        assert response.status_code == 302
        assert response.headers["location"] == "/login?next=/movies/create"

    async def test_wrong_password_is_rejected(self, test_app: FastAPI) -> None:
        async with client_for(test_app) as client:
            response = await client.post("/login", data={"username": "admin", "password": "wrong"})

        assert response.status_code == 401
        assert "Invalid username or password" in response.text

    async def test_login_redirects_to_next_page(self, test_app: FastAPI) -> None:
        async with client_for(test_app) as client:
            response = await client.post(
                "/login",
                data={
                    "username": settings.admin_username,
                    "password": settings.admin_password,
                    "next": "/movies/create",
                },
            )

        assert response.status_code == 303
        assert response.headers["location"] == "/movies/create"

    async def test_offsite_next_falls_back_to_home(self, test_app: FastAPI) -> None:
        async with client_for(test_app) as client:
            response = await client.post(
                "/login",
                data={
                    "username": settings.admin_username,
                    "password": settings.admin_password,
                    "next": "//evil.example",
                },
            )

        assert response.headers["location"] == "/"

    async def test_logout_clears_session(self, test_app: FastAPI) -> None:
        async with client_for(test_app) as client:
            await log_in(client)
            await client.post("/logout")
            response = await client.get("/movies/create")

        assert response.status_code == 302


class TestEditor:
    async def test_create_form_renders_for_admin(self, test_app: FastAPI) -> None:
        db = make_db(*reference_results()[:4])
        override_db(test_app, db)
        try:
            async with client_for(test_app) as client:
                await log_in(client)
                response = await client.get("/movies/create")
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 200
        assert 'enctype="multipart/form-data"' in response.text
        assert "Michael Mann" in response.text

    async def test_create_submit_redirects_to_new_film(self, test_app: FastAPI) -> None:
        film = make_film("f-9", title="Heat")
        override_db(test_app, make_db())
        try:
            with patch("cinearchive.web.editor.create_film", AsyncMock(return_value=film)) as create:
                async with client_for(test_app) as client:
                    await log_in(client)
                    response = await client.post(
                        "/movies/create",
                        data={"title": "Heat", "release_date": "1995", "genre_names": "Crime, Drama"},
                    )
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 303
        assert response.headers["location"] == "/movies/f-9"
        data = create.await_args.args[1]
        assert data.title == "Heat"
        assert data.genre_names == ["Crime", "Drama"]
        assert create.await_args.kwargs["image"] is None

    async def test_create_submit_with_blank_title_rerenders_form(self, test_app: FastAPI) -> None:
        override_db(test_app, make_db(*reference_results()[:4]))
        try:
            async with client_for(test_app) as client:
                await log_in(client)
                response = await client.post("/movies/create", data={"title": "  ", "language": "English", "boost": "on"})
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 400
        assert "Title is required" in response.text
        assert 'value="English"' in response.text
        assert "checked" in response.text

    async def test_create_submit_passes_uploaded_image(self, test_app: FastAPI) -> None:
        film = make_film("f-9", title="Heat")
        override_db(test_app, make_db())
        try:
            with patch("cinearchive.web.editor.create_film", AsyncMock(return_value=film)) as create:
                async with client_for(test_app) as client:
                    await log_in(client)
                    response = await client.post(
                        "/movies/create",
                        data={"title": "Heat"},
                        files={"image": ("heat poster.jpg", b"jpeg-bytes", "image/jpeg")},
                    )
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 303
        image = create.await_args.kwargs["image"]
        assert image.filename == "heat poster.jpg"
        assert image.content == b"jpeg-bytes"
        assert image.content_type == "image/jpeg"

    async def test_delete_redirects_to_catalogue(self, test_app: FastAPI) -> None:
        db = make_db(make_result(rowcount=1))
        override_db(test_app, db)
        try:
            async with client_for(test_app) as client:
                await log_in(client)
                response = await client.post("/movies/f-1/delete")
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 303
        assert response.headers["location"] == "/movies"
        db.commit.assert_awaited_once()

    async def test_delete_unknown_film_returns_404(self, test_app: FastAPI) -> None:
        override_db(test_app, make_db(make_result(rowcount=0)))
        try:
            async with client_for(test_app) as client:
                await log_in(client)
                response = await client.post("/movies/missing/delete")
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 404

    async def test_rejected_edit_keeps_submitted_values(self, test_app: FastAPI) -> None:
        db = make_db(
            make_result(rows=[SimpleNamespace(id=4, name="Michael Mann")]),
            make_result(rows=[SimpleNamespace(id=1, name="France")]),
            make_result(rows=[SimpleNamespace(id=2, name="Drama"), SimpleNamespace(id=5, name="Crime")]),
            make_result(rows=[SimpleNamespace(id=3, name="heist")]),
        )
        override_db(test_app, db)
        try:
            with patch("cinearchive.web.editor.update_film", AsyncMock()) as update:
                async with client_for(test_app) as client:
                    await log_in(client)
                    response = await client.post(
                        "/movies/edit/f-1",
                        data={
                            "title": " ",
                            "description": "A cop hunts a thief.",
                            "release_date": "1995",
                            "genre_ids": ["2", "²"],
                            "director_ids": "4",
                            "keyword_names": "heist, la",
                        },
                    )
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 400
        assert "Title is required" in response.text
        assert "A cop hunts a thief." in response.text
        assert 'value="1995"' in response.text
        assert '<option value="2" selected>Drama</option>' in response.text
        assert '<option value="5" >Crime</option>' in response.text
        assert '<option value="4" selected>Michael Mann</option>' in response.text
        assert 'value="heist, la"' in response.text
        update.assert_not_awaited()

    async def test_unicode_digit_runtime_is_ignored_on_create(self, test_app: FastAPI) -> None:
        film = make_film("f-9", title="Heat")
        override_db(test_app, make_db())
        try:
            with patch("cinearchive.web.editor.create_film", AsyncMock(return_value=film)) as create:
                async with client_for(test_app) as client:
                    await log_in(client)
                    response = await client.post(
                        "/movies/create",
                        data={"title": "Heat", "runtime": "²", "genre_ids": "²"},
                    )
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 303
        data = create.await_args.args[1]
        assert data.runtime is None
        assert data.genre_ids == []

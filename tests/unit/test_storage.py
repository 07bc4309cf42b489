"""Tests for image URL resolution and the storage upload client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from cinearchive.config import settings
from cinearchive.errors import StorageError
from cinearchive.services.storage import StorageClient, build_object_name, resolve_image_url


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_http_response(status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        request = httpx.Request("POST", "https://storage.example")
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}",
            request=request,
            response=httpx.Response(status_code, request=request),
        )
    else:
        response.raise_for_status = MagicMock()
    return response


def make_async_client_ctx(response: MagicMock | None = None, error: Exception | None = None) -> AsyncMock:
    """Return an async context manager whose .post() returns *response* or raises *error*."""
    inner = AsyncMock()
    inner.post = AsyncMock(return_value=response, side_effect=error)
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=inner)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


# ---------------------------------------------------------------------------
# resolve_image_url
# ---------------------------------------------------------------------------


class TestResolveImageUrl:
    @pytest.mark.parametrize("ref", [None, "", "   "])
    def test_missing_reference_uses_placeholder(self, ref: str | None) -> None:
        assert resolve_image_url(ref) == settings.placeholder_image_url

    @pytest.mark.parametrize(
        "ref",
        ["https://cdn.example/poster.jpg", "http://cdn.example/poster.jpg", "/static/local.png"],
    )
    def test_urls_and_site_paths_pass_through(self, ref: str) -> None:
        assert resolve_image_url(ref) == ref

    def test_bare_object_key_becomes_public_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "storage_url", "https://project.supabase.co/")
        monkeypatch.setattr(settings, "storage_bucket", "storage")

        assert (
            resolve_image_url("1700000000000-dune.jpg")
            == "https://project.supabase.co/storage/v1/object/public/storage/1700000000000-dune.jpg"
        )


# ---------------------------------------------------------------------------
# build_object_name
# ---------------------------------------------------------------------------


class TestBuildObjectName:
    def test_prefixes_epoch_millis(self) -> None:
        assert build_object_name("dune.jpg", now=1700000000.5) == "1700000000500-dune.jpg"

    def test_whitespace_becomes_hyphens(self) -> None:
        assert build_object_name(" my  poster\tfinal.png ", now=1.0) == "1000-my-poster-final.png"

    def test_blank_filename_gets_default(self) -> None:
        assert build_object_name("   ", now=1.0) == "1000-image"


# ---------------------------------------------------------------------------
# StorageClient.upload
# ---------------------------------------------------------------------------


class TestUpload:
    async def test_raises_without_base_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "storage_url", "")
        client = StorageClient()

        with pytest.raises(StorageError, match="not configured"):
            await client.upload("dune.jpg", b"data")

    async def test_posts_object_and_returns_public_url(self) -> None:
        client = StorageClient(base_url="https://project.supabase.co", api_key="secret", bucket="posters")
        ctx = make_async_client_ctx(make_http_response())

        with (
            patch("httpx.AsyncClient", return_value=ctx),
            patch("cinearchive.services.storage.build_object_name", return_value="1-dune.jpg"),
        ):
            url = await client.upload("dune.jpg", b"jpeg-bytes", "image/jpeg")

        assert url == "https://project.supabase.co/storage/v1/object/public/posters/1-dune.jpg"

        inner = ctx.__aenter__.return_value
        call = inner.post.call_args
        assert call.args[0] == "https://project.supabase.co/storage/v1/object/posters/1-dune.jpg"
        assert call.kwargs["content"] == b"jpeg-bytes"
        headers = call.kwargs["headers"]
        assert headers["authorization"] == "Bearer secret"
        assert headers["content-type"] == "image/jpeg"
        assert headers["x-upsert"] == "true"
        assert headers["cache-control"] == f"max-age={settings.storage_cache_control}"

    async def test_http_error_status_raises_storage_error(self) -> None:
        client = StorageClient(base_url="https://project.supabase.co", api_key="secret")
        ctx = make_async_client_ctx(make_http_response(status_code=403))

        with patch("httpx.AsyncClient", return_value=ctx):
            with pytest.raises(StorageError):
                await client.upload("dune.jpg", b"data")

    async def test_transport_error_raises_storage_error(self) -> None:
        client = StorageClient(base_url="https://project.supabase.co", api_key="secret")
        ctx = make_async_client_ctx(error=httpx.ConnectError("connection refused"))

        with patch("httpx.AsyncClient", return_value=ctx):
            with pytest.raises(StorageError, match="connection refused"):
                await client.upload("dune.jpg", b"data")

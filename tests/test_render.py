import base64

import httpx
import pytest

from sketchify.core.errors import FetchError
from sketchify.core.render import generate_render


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_inline_image_passes_through_without_network():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500)

    inline = "data:image/png;base64,AAAA"
    async with _client(handler) as client:
        first = await generate_render(inline, client=client)
        second = await generate_render(inline, client=client)

    assert first.rendered_image == inline
    assert second.rendered_image == inline
    assert first.rendered_path is None
    assert calls == []


@pytest.mark.asyncio
async def test_remote_image_is_fetched_and_inlined():
    def handler(request):
        return httpx.Response(200, content=b"jpeg-bytes", headers={"content-type": "image/jpeg"})

    async with _client(handler) as client:
        result = await generate_render("https://cdn.example.com/plan.jpg", client=client)

    assert result.rendered_image == "data:image/jpeg;base64," + base64.b64encode(b"jpeg-bytes").decode()


@pytest.mark.asyncio
async def test_missing_image_raises_fetch_error_then_retry_succeeds():
    def handler(request):
        if request.url.path == "/missing.png":
            return httpx.Response(404)
        return httpx.Response(200, content=b"png-bytes", headers={"content-type": "image/png"})

    async with _client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            await generate_render("https://cdn.example.com/missing.png", client=client)
        assert exc_info.value.status == 404
        assert "404" in exc_info.value.message

        result = await generate_render("https://cdn.example.com/plan.png", client=client)

    assert result.rendered_image.startswith("data:image/png;base64,")


@pytest.mark.asyncio
async def test_network_error_is_a_fetch_error_without_status():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            await generate_render("https://cdn.example.com/plan.png", client=client)

    assert exc_info.value.status is None

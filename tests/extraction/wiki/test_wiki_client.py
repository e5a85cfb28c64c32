import httpx
import pytest

from sprite_composer.extraction.base import PageFetchError
from sprite_composer.extraction.wiki.base import WikiClient


class TestWikiClient:
    """Page fetching and client ownership"""

    @pytest.fixture
    def client(self):
        return WikiClient(client=httpx.AsyncClient())

    @pytest.mark.asyncio
    async def test_fetch_page_returns_text(self, client, httpx_mock):
        httpx_mock.add_response(url="https://wiki.test/xytx/list", text="<html>角色</html>")

        assert await client.fetch_page("https://wiki.test/xytx/list") == "<html>角色</html>"

    @pytest.mark.asyncio
    async def test_fetch_page_error_status(self, client, httpx_mock):
        httpx_mock.add_response(url="https://wiki.test/xytx/missing", status_code=404)

        with pytest.raises(PageFetchError, match="HTTP 404") as exc_info:
            await client.fetch_page("https://wiki.test/xytx/missing")

        assert exc_info.value.url == "https://wiki.test/xytx/missing"

    @pytest.mark.asyncio
    async def test_fetch_page_network_error(self, client, httpx_mock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url="https://wiki.test/slow")

        with pytest.raises(PageFetchError, match="timed out"):
            await client.fetch_page("https://wiki.test/slow")

    def test_initialization_custom_client(self):
        custom_client = httpx.AsyncClient()

        assert WikiClient(client=custom_client).http_client is custom_client

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client_open(self):
        custom_client = httpx.AsyncClient()

        await WikiClient(client=custom_client).close()

        assert not custom_client.is_closed

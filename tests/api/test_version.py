import pytest

from esplora_batch.version import __version__


@pytest.mark.asyncio
async def test_get_version(api_client):
    response = await api_client.get("/version")
    assert response.status == 200, await response.text()

    data = await response.json()
    assert data["version"] == __version__

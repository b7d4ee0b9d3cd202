import pytest
import respx
from _helpers import BASE_URL, RecordingFetcher, hal_response, load_fixture
from halcyon_client import Embed, HalEndpointClient


def _collection(fetcher=None) -> HalEndpointClient:
    return HalEndpointClient(load_fixture("thing_collection.json"), fetcher)


def test_embeds_are_separate_from_data():
    client = _collection()
    assert "_embedded" not in client.get_data()
    assert client.has_embed("values")
    assert not client.has_embed("Values")


def test_get_all_clients_preserves_order_and_strips_envelope():
    clients = _collection().get_embed("values").get_all_clients()
    assert [c.get_data() for c in clients] == [
        {"id": 1, "name": "Hammer"},
        {"id": 2, "name": "Saw"},
    ]
    assert clients[0].has_link("update")
    assert not clients[1].has_link("update")


def test_get_all_clients_is_not_cached():
    embed = _collection().get_embed("values")
    first = embed.get_all_clients()
    second = embed.get_all_clients()

    assert len(first) == len(second) == 2
    for a, b in zip(first, second):
        assert a is not b
        assert a.get_data() == b.get_data()
        assert a.get_all_links() == b.get_all_links()


def test_absent_embed_is_empty():
    client = _collection()
    assert not client.has_embed("owners")
    embed = client.get_embed("owners")
    assert isinstance(embed, Embed)
    assert embed.name == "owners"
    assert len(embed) == 0
    assert embed.get_all_clients() == []


def test_client_without_embeds():
    client = HalEndpointClient({"id": 1}, fetcher=None)
    assert not client.has_embed("values")
    assert client.get_all_embeds() == []
    assert client.get_embed("values").get_all_clients() == []


def test_get_all_embeds_one_per_name():
    client = HalEndpointClient(
        {"_embedded": {"a": [{"id": 1}], "b": [{"id": 2}, {"id": 3}]}}, fetcher=None
    )
    embeds = {e.name: e for e in client.get_all_embeds()}
    assert set(embeds) == {"a", "b"}
    assert len(embeds["b"].get_all_clients()) == 2


def test_links_and_embeds_are_independent():
    client = HalEndpointClient({"_embedded": {"a": []}}, fetcher=None)
    assert client.has_embed("a")
    assert client.get_all_links() == []


@pytest.mark.asyncio
async def test_embedded_client_navigates_with_parent_fetcher():
    fetcher = RecordingFetcher(hal_response(200, {"id": 1, "name": "Mallet"}))
    hammer = _collection(fetcher).get_embed("values").get_all_clients()[0]

    updated = await hammer.load_link_with_body("update", {"name": "Mallet"})

    assert fetcher.last["url"] == "/things/1"
    assert fetcher.last["method"] == "PUT"
    assert updated.get_data()["name"] == "Mallet"


@pytest.mark.asyncio
@respx.mock
async def test_collection_paging_over_http(fetcher):
    respx.get(f"{BASE_URL}/things").mock(
        return_value=hal_response(
            200, {"offset": 10, "total": 2, "_embedded": {"values": []}}
        )
    )
    async with fetcher:
        page = await _collection(fetcher).load_link("next")

    assert page.get_data()["offset"] == 10
    assert page.get_embed("values").get_all_clients() == []


def test_null_embed_has_no_clients():
    client = HalEndpointClient({"_embedded": {"items": None}}, fetcher=None)
    assert client.has_embed("items")
    embed = client.get_embed("items")
    assert len(embed) == 0
    assert embed.get_all_clients() == []

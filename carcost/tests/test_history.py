import re

import pytest
from redis.exceptions import RedisError

from carcost.core.enums import SiteName
from carcost.schemas.vehicle import VehicleData
from carcost.services.calculator import calculate_costs
from carcost.services.history import HistoryStore, generate_id


@pytest.fixture
def costs(make_input):
    return calculate_costs(make_input())


def listing(n: int) -> str:
    return f"https://www.blocket.se/annons/{n}"


class TestHistoryStore:

    def test_generate_id(self):
        first, second = generate_id(), generate_id()
        assert re.fullmatch(r"\d{13}-[0-9a-f]{10}", first)
        assert first != second

    @pytest.mark.asyncio
    async def test_empty(self, history_store):
        assert await history_store.load() == []
        assert await history_store.count() == 0

    @pytest.mark.asyncio
    async def test_save(self, history_store, valid_vehicle_data, costs):
        item = await history_store.save(valid_vehicle_data, costs, SiteName.BLOCKET, listing(1))

        assert item.url == listing(1)
        assert item.site == SiteName.BLOCKET
        assert item.vehicle_name == "Volvo V60 2021"
        assert item.purchase_price == 250000
        assert item.fuel_type == "diesel"
        assert item.monthly_total == costs.monthly_total
        assert item.cost_per_mil == costs.cost_per_mil
        assert item.timestamp > 0

        assert await history_store.load() == [item]

    @pytest.mark.asyncio
    async def test_most_recent_first(self, history_store, valid_vehicle_data, costs):
        for n in range(3):
            await history_store.save(valid_vehicle_data, costs, SiteName.WAYKE, listing(n))

        urls = [item.url for item in await history_store.load()]
        assert urls == [listing(2), listing(1), listing(0)]

    @pytest.mark.asyncio
    async def test_same_url_keeps_id_and_moves_up(self, history_store, valid_vehicle_data, costs):
        first = await history_store.save(valid_vehicle_data, costs, SiteName.BLOCKET, listing(1))
        await history_store.save(valid_vehicle_data, costs, SiteName.BLOCKET, listing(2))

        cheaper = valid_vehicle_data.model_copy(update={"purchase_price": 235000})
        again = await history_store.save(cheaper, costs, SiteName.BLOCKET, listing(1))

        items = await history_store.load()
        assert again.id == first.id
        assert len(items) == 2
        assert items[0].url == listing(1)
        assert items[0].purchase_price == 235000

    @pytest.mark.asyncio
    async def test_capped(self, fake_redis, valid_vehicle_data, costs):
        store = HistoryStore(fake_redis, "capped-client", max_items=3)
        for n in range(5):
            await store.save(valid_vehicle_data, costs, SiteName.CARLA, listing(n))

        urls = [item.url for item in await store.load()]
        assert urls == [listing(4), listing(3), listing(2)]

    @pytest.mark.asyncio
    async def test_optional_fields(self, history_store, costs):
        vehicle = VehicleData(purchase_price=99000)
        item = await history_store.save(vehicle, costs, SiteName.BLOCKET, listing(7))

        assert item.vehicle_name is None
        assert item.vehicle_year is None
        assert item.mileage is None
        assert item.fuel_type == "bensin"

    @pytest.mark.asyncio
    async def test_remove(self, history_store, valid_vehicle_data, costs):
        kept = await history_store.save(valid_vehicle_data, costs, SiteName.BLOCKET, listing(1))
        gone = await history_store.save(valid_vehicle_data, costs, SiteName.BLOCKET, listing(2))

        assert await history_store.remove(gone.id) is True
        assert await history_store.load() == [kept]

    @pytest.mark.asyncio
    async def test_remove_unknown(self, history_store, valid_vehicle_data, costs):
        await history_store.save(valid_vehicle_data, costs, SiteName.BLOCKET, listing(1))

        assert await history_store.remove("does-not-exist") is False
        assert await history_store.count() == 1

    @pytest.mark.asyncio
    async def test_clear(self, history_store, valid_vehicle_data, costs):
        await history_store.save(valid_vehicle_data, costs, SiteName.BLOCKET, listing(1))
        await history_store.clear()

        assert await history_store.load() == []

    @pytest.mark.asyncio
    async def test_unreadable_history(self, history_store, fake_redis):
        fake_redis.data["history:test-client"] = b'[{"id": 1}]'
        assert await history_store.load() == []

    @pytest.mark.asyncio
    async def test_read_failure(self, history_store, fake_redis):
        fake_redis.get.side_effect = RedisError("connection lost")
        assert await history_store.load() == []

    @pytest.mark.asyncio
    async def test_write_failure_propagates(self, history_store, fake_redis, valid_vehicle_data, costs):
        fake_redis.set.side_effect = RedisError("read only replica")
        with pytest.raises(RedisError):
            await history_store.save(valid_vehicle_data, costs, SiteName.BLOCKET, listing(1))

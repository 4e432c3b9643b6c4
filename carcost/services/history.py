"""Recently calculated vehicles per client, most recent first."""
import logging
import secrets
import time
from typing import List, Optional

from pydantic import TypeAdapter
from redis.asyncio import Redis
from redis.exceptions import RedisError

from carcost.core.config import settings
from carcost.core.enums import SiteName
from carcost.core.metrics import track_storage_operation
from carcost.schemas.calculator import CostBreakdown
from carcost.schemas.history import HistoryItem
from carcost.schemas.vehicle import VehicleData

logger = logging.getLogger(__name__)

_history_list = TypeAdapter(List[HistoryItem])


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_id() -> str:
    return f"{_now_ms()}-{secrets.token_hex(5)}"


class HistoryStore:
    def __init__(self, redis: Redis, client_id: str, max_items: Optional[int] = None):
        self.redis = redis
        self.client_id = client_id
        self.max_items = max_items if max_items is not None else settings.HISTORY_MAX_ITEMS

    @property
    def key(self) -> str:
        return f"history:{self.client_id}"

    @track_storage_operation("load", "history")
    async def load(self) -> List[HistoryItem]:
        try:
            raw = await self.redis.get(self.key)
        except RedisError as e:
            logger.error(f"Failed to load history for {self.client_id}: {e}")
            return []

        if not raw:
            return []

        try:
            return _history_list.validate_json(raw)
        except ValueError as e:
            logger.error(f"Discarding unreadable history for {self.client_id}: {e}")
            return []

    async def _write(self, items: List[HistoryItem]) -> None:
        await self.redis.set(self.key, _history_list.dump_json(items, by_alias=True))

    @track_storage_operation("save", "history")
    async def save(
        self,
        vehicle: VehicleData,
        costs: CostBreakdown,
        site: SiteName,
        url: str,
    ) -> HistoryItem:
        """Store a viewed vehicle at the front; a known URL keeps its id and moves up."""
        history = await self.load()
        existing = next((item for item in history if item.url == url), None)

        item = HistoryItem(
            id=existing.id if existing else generate_id(),
            url=url,
            site=site,
            vehicle_name=vehicle.vehicle_name,
            purchase_price=vehicle.purchase_price,
            fuel_type=vehicle.fuel_type,
            fuel_type_label=vehicle.fuel_type_label,
            vehicle_year=vehicle.vehicle_year,
            mileage=vehicle.mileage,
            monthly_total=costs.monthly_total,
            cost_per_mil=costs.cost_per_mil,
            timestamp=_now_ms(),
        )

        remaining = [h for h in history if h.url != url]
        await self._write([item, *remaining][:self.max_items])
        logger.info(f"Saved to history: {item.vehicle_name or item.url}")
        return item

    @track_storage_operation("remove", "history")
    async def remove(self, item_id: str) -> bool:
        history = await self.load()
        filtered = [h for h in history if h.id != item_id]
        if len(filtered) == len(history):
            return False
        await self._write(filtered)
        return True

    @track_storage_operation("clear", "history")
    async def clear(self) -> None:
        await self._write([])

    async def count(self) -> int:
        return len(await self.load())

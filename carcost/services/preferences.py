"""Per-client calculator defaults kept in Redis as one JSON document."""
import json
import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from carcost.core.metrics import track_storage_operation
from carcost.schemas.preferences import DEFAULT_PREFERENCES, PreferencesUpdate, UserPreferences

logger = logging.getLogger(__name__)

# fields where an explicit null means "clear the value"
NULLABLE_FIELDS = {"annual_tire_cost"}


class PreferencesStore:
    def __init__(self, redis: Redis, client_id: str):
        self.redis = redis
        self.client_id = client_id

    @property
    def key(self) -> str:
        return f"prefs:{self.client_id}"

    @track_storage_operation("load", "preferences")
    async def load(self) -> UserPreferences:
        """Stored values merged over the defaults; defaults when nothing usable is stored."""
        try:
            raw = await self.redis.get(self.key)
        except RedisError as e:
            logger.error(f"Failed to load preferences for {self.client_id}: {e}")
            return DEFAULT_PREFERENCES.model_copy()

        if not raw:
            return DEFAULT_PREFERENCES.model_copy()

        try:
            stored = json.loads(raw)
            merged = {**DEFAULT_PREFERENCES.model_dump(by_alias=True), **stored}
            return UserPreferences.model_validate(merged)
        except ValueError as e:
            logger.error(f"Discarding unreadable preferences for {self.client_id}: {e}")
            return DEFAULT_PREFERENCES.model_copy()

    async def _write(self, prefs: UserPreferences) -> None:
        await self.redis.set(self.key, prefs.model_dump_json(by_alias=True))

    @track_storage_operation("save", "preferences")
    async def save(self, update: PreferencesUpdate) -> UserPreferences:
        changes = {
            field: value
            for field, value in update.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        current = await self.load()
        updated = UserPreferences.model_validate({**current.model_dump(), **changes})
        await self._write(updated)
        logger.info(f"Saved preferences for {self.client_id}: {sorted(changes)}")
        return updated

    @track_storage_operation("reset", "preferences")
    async def reset(self) -> UserPreferences:
        defaults = DEFAULT_PREFERENCES.model_copy()
        await self._write(defaults)
        return defaults

import logging

from fastapi import APIRouter, Depends, HTTPException
from redis.exceptions import RedisError

from carcost.api.deps import get_preferences_store
from carcost.schemas.preferences import PreferencesUpdate, UserPreferences
from carcost.services.preferences import PreferencesStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=UserPreferences)
async def get_preferences(store: PreferencesStore = Depends(get_preferences_store)):
    return await store.load()


@router.put("", response_model=UserPreferences)
async def update_preferences(
    payload: PreferencesUpdate,
    store: PreferencesStore = Depends(get_preferences_store)
):
    """Merge the given fields into the stored preferences"""
    try:
        return await store.save(payload)
    except RedisError as e:
        logger.error(f"Failed to save preferences: {e}")
        raise HTTPException(status_code=503, detail="Storage not available")


@router.delete("", response_model=UserPreferences)
async def reset_preferences(store: PreferencesStore = Depends(get_preferences_store)):
    try:
        return await store.reset()
    except RedisError as e:
        logger.error(f"Failed to reset preferences: {e}")
        raise HTTPException(status_code=503, detail="Storage not available")

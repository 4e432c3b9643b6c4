import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from redis.exceptions import RedisError

from carcost.api.deps import get_history_store
from carcost.schemas.history import HistoryCount, HistoryCreate, HistoryItem
from carcost.services.history import HistoryStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=List[HistoryItem])
async def list_history(store: HistoryStore = Depends(get_history_store)):
    return await store.load()


@router.get("/count", response_model=HistoryCount)
async def history_count(store: HistoryStore = Depends(get_history_store)):
    return HistoryCount(count=await store.count())


@router.post("", response_model=HistoryItem)
async def add_to_history(
    payload: HistoryCreate,
    store: HistoryStore = Depends(get_history_store)
):
    try:
        return await store.save(payload.vehicle, payload.costs, payload.site, payload.url)
    except RedisError as e:
        logger.error(f"Failed to save to history: {e}")
        raise HTTPException(status_code=503, detail="Storage not available")


@router.delete("/{item_id}")
async def remove_from_history(
    item_id: str,
    store: HistoryStore = Depends(get_history_store)
):
    try:
        removed = await store.remove(item_id)
    except RedisError as e:
        logger.error(f"Failed to remove history item {item_id}: {e}")
        raise HTTPException(status_code=503, detail="Storage not available")
    if not removed:
        raise HTTPException(status_code=404, detail=f"History item {item_id} not found")
    return {"deleted": True}


@router.delete("")
async def clear_history(store: HistoryStore = Depends(get_history_store)):
    try:
        await store.clear()
    except RedisError as e:
        logger.error(f"Failed to clear history: {e}")
        raise HTTPException(status_code=503, detail="Storage not available")
    return {"deleted": True}

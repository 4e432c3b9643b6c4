from typing import Optional

from fastapi import Header, HTTPException

from carcost.core.config import settings
from carcost.core.redis import get_redis
from carcost.services.history import HistoryStore
from carcost.services.preferences import PreferencesStore


def get_client_id(x_client_id: Optional[str] = Header(None, max_length=128)) -> str:
    return x_client_id or settings.DEFAULT_CLIENT_ID


def _require_redis():
    redis = get_redis()
    if redis is None:
        raise HTTPException(status_code=503, detail="Storage not available")
    return redis


def get_preferences_store(x_client_id: Optional[str] = Header(None, max_length=128)) -> PreferencesStore:
    return PreferencesStore(_require_redis(), get_client_id(x_client_id))


def get_history_store(x_client_id: Optional[str] = Header(None, max_length=128)) -> HistoryStore:
    return HistoryStore(_require_redis(), get_client_id(x_client_id))


def get_optional_preferences_store(x_client_id: Optional[str] = Header(None, max_length=128)) -> Optional[PreferencesStore]:
    redis = get_redis()
    return PreferencesStore(redis, get_client_id(x_client_id)) if redis is not None else None


def get_optional_history_store(x_client_id: Optional[str] = Header(None, max_length=128)) -> Optional[HistoryStore]:
    redis = get_redis()
    return HistoryStore(redis, get_client_id(x_client_id)) if redis is not None else None

"""Cost calculation endpoints with Redis caching"""
import json
import hashlib
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from redis.exceptions import RedisError

from carcost.api.deps import get_optional_history_store, get_optional_preferences_store
from carcost.core.config import settings
from carcost.core.metrics import cache_hits, cache_misses, calculations_total
from carcost.core.redis import get_redis
from carcost.schemas.calculator import CalculatorInput, CostBreakdown, DepreciationRateOut
from carcost.schemas.preferences import DEFAULT_PREFERENCES
from carcost.schemas.vehicle import VehicleCostRequest, VehicleCostResponse
from carcost.services.calculator import calculate_costs, get_depreciation_rate_for_age
from carcost.services.history import HistoryStore
from carcost.services.inputs import create_calculator_input
from carcost.services.preferences import PreferencesStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/calculations", tags=["calculations"])


def _generate_cache_key(inp: CalculatorInput) -> str:
    params_str = json.dumps(inp.model_dump(mode="json"), sort_keys=True)
    return f"costs:{hashlib.sha256(params_str.encode()).hexdigest()}"


def _run(inp: CalculatorInput) -> CostBreakdown:
    result = calculate_costs(inp)
    calculations_total.labels(financing_type=str(inp.financing_type)).inc()
    return result


@router.post("/calc", response_model=CostBreakdown)
async def calc_costs(inp: CalculatorInput):
    cache_key = _generate_cache_key(inp)
    redis = get_redis()

    if redis is not None:
        try:
            cached = await redis.get(cache_key)
            if cached:
                cache_hits.labels(cache="costs").inc()
                return CostBreakdown.model_validate_json(cached)
            cache_misses.labels(cache="costs").inc()
        except (RedisError, ValueError) as e:
            logger.warning(f"Cache retrieval failed: {e}")

    result = _run(inp)

    if redis is not None:
        try:
            await redis.set(
                cache_key,
                result.model_dump_json(by_alias=True),
                ex=settings.CALC_CACHE_TTL
            )
        except RedisError as e:
            logger.warning(f"Cache write failed: {e}")

    return result


@router.get("/depreciation-rate", response_model=DepreciationRateOut)
async def depreciation_rate(age: float = Query(..., ge=0)):
    return DepreciationRateOut(age=age, rate=get_depreciation_rate_for_age(age))


@router.post("/vehicle", response_model=VehicleCostResponse)
async def calc_vehicle_costs(
    payload: VehicleCostRequest,
    prefs_store: Optional[PreferencesStore] = Depends(get_optional_preferences_store),
    history_store: Optional[HistoryStore] = Depends(get_optional_history_store),
):
    """Fill the gaps in listing data from stored preferences, then calculate."""
    if prefs_store is not None:
        prefs = await prefs_store.load()
    else:
        logger.warning("Preferences store unavailable, using defaults")
        prefs = DEFAULT_PREFERENCES

    inp = create_calculator_input(payload.vehicle, prefs)
    breakdown = _run(inp)

    history_id = None
    if payload.url and payload.site:
        if history_store is None:
            logger.warning("History store unavailable, calculation not recorded")
        else:
            try:
                item = await history_store.save(payload.vehicle, breakdown, payload.site, payload.url)
                history_id = item.id
            except RedisError as e:
                logger.warning(f"History write failed: {e}")

    return VehicleCostResponse(input=inp, breakdown=breakdown, history_id=history_id)

import inspect
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from carcost.api.deps import (
    get_history_store,
    get_optional_history_store,
    get_optional_preferences_store,
    get_preferences_store,
)
from carcost.main import app
from carcost.schemas.calculator import CalculatorInput
from carcost.schemas.vehicle import VehicleData
from carcost.services.history import HistoryStore
from carcost.services.preferences import PreferencesStore

TEST_CLIENT_ID = "test-client"


@pytest.fixture
def fake_redis():
    """Dict-backed stand-in for the two Redis commands the stores use."""
    store = {}

    def _get(key):
        return store.get(key)

    def _set(key, value, ex=None):
        store[key] = value.encode() if isinstance(value, str) else value
        return True

    redis = AsyncMock()
    redis.get.side_effect = _get
    redis.set.side_effect = _set
    redis.data = store
    return redis


@pytest.fixture
def preferences_store(fake_redis):
    return PreferencesStore(fake_redis, TEST_CLIENT_ID)


@pytest.fixture
def history_store(fake_redis):
    return HistoryStore(fake_redis, TEST_CLIENT_ID, max_items=50)


@pytest.fixture
async def test_client(preferences_store, history_store):
    app.dependency_overrides[get_preferences_store] = lambda: preferences_store
    app.dependency_overrides[get_optional_preferences_store] = lambda: preferences_store
    app.dependency_overrides[get_history_store] = lambda: history_store
    app.dependency_overrides[get_optional_history_store] = lambda: history_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def storeless_client():
    """Client for an app that never reached Redis."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def make_input():
    """Factory for a typical petrol car bought for cash, with keyword overrides."""
    def _make_input(**overrides) -> CalculatorInput:
        data = {
            "purchase_price": 300000,
            "fuel_consumption": 0.7,
            "primary_fuel_type": "bensin",
            "primary_fuel_price": 18.5,
            "has_secondary_fuel": False,
            "secondary_fuel_type": "el",
            "secondary_fuel_price": 2.5,
            "secondary_fuel_share": 0,
            "annual_mileage": 1500,
            "vehicle_type": "normal",
            "maintenance_level": "normal",
            "depreciation_rate": "normal",
            "vehicle_age": 3,
            "ownership_years": 5,
            "insurance": 500,
            "parking": 0,
            "washing_care": 250,
            "monthly_admin_fee": 60,
            "financing_type": "cash",
            "loan_type": "annuity",
            "loan_amount": 0,
            "down_payment_percent": 20,
            "residual_value_percent": 50,
            "interest_rate": 5.0,
            "loan_years": 3,
            "leasing_type": "private",
            "monthly_leasing_fee": 3500,
            "leasing_includes_insurance": False,
            "annual_tax": 2000,
            "has_malus_tax": False,
            "malus_tax_amount": 0,
        }
        data.update(overrides)
        return CalculatorInput(**data)

    return _make_input


@pytest.fixture
def valid_vehicle_data():
    return VehicleData(
        purchase_price=250000,
        fuel_type="diesel",
        fuel_type_label="Diesel",
        fuel_consumption=None,
        vehicle_year=2021,
        mileage=6500,
        vehicle_type="normal",
        vehicle_name="Volvo V60 2021",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "calculator: marks tests related to the cost engine"
    )
    config.addinivalue_line(
        "markers", "storage: marks tests related to preferences and history"
    )
    config.addinivalue_line(
        "markers", "api: marks tests that go through the HTTP layer"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to handle asyncio tests
    """
    for item in items:
        if inspect.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)

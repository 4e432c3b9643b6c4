"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry
import time
from functools import wraps
from typing import Callable

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

calculations_total = Counter(
    'cost_calculations_total',
    'Total cost calculations',
    ['financing_type'],
    registry=registry
)

storage_operations = Counter(
    'storage_operations_total',
    'Total key-value store operations',
    ['operation', 'store', 'status'],
    registry=registry
)

storage_duration = Histogram(
    'storage_operation_duration_seconds',
    'Key-value store operation duration in seconds',
    ['store', 'operation'],
    registry=registry
)

cache_hits = Counter(
    'cache_hits_total',
    'Total cache hits',
    ['cache'],
    registry=registry
)

cache_misses = Counter(
    'cache_misses_total',
    'Total cache misses',
    ['cache'],
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)


def track_storage_operation(operation: str, store: str):
    """Decorator to track key-value store operation metrics"""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = await func(*args, **kwargs)
                storage_operations.labels(
                    operation=operation,
                    store=store,
                    status='success'
                ).inc()
                return result
            except Exception:
                storage_operations.labels(
                    operation=operation,
                    store=store,
                    status='error'
                ).inc()
                raise
            finally:
                storage_duration.labels(
                    store=store,
                    operation=operation
                ).observe(time.time() - start_time)
        return wrapper
    return decorator


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    from prometheus_client import generate_latest
    return generate_latest(registry).decode('utf-8')

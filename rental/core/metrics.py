"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry, generate_latest
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

db_operations = Counter(
    'db_operations_total',
    'Total database operations',
    ['operation', 'table', 'status'],
    registry=registry
)

db_query_duration = Histogram(
    'db_query_duration_seconds',
    'Database query duration in seconds',
    ['table', 'operation'],
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

bookings_created = Counter(
    'bookings_created_total',
    'Total bookings persisted',
    ['car_id'],
    registry=registry
)

bookings_rejected = Counter(
    'bookings_rejected_total',
    'Total booking submissions rejected',
    ['reason'],
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)

db_connected = Gauge(
    'db_connected',
    'Database connection status (1=connected, 0=disconnected)',
    registry=registry
)


def track_db_operation(operation: str, table: str):
    """Decorator to track database operation metrics"""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()
            status = 'success'
            try:
                return await func(*args, **kwargs)
            except Exception:
                status = 'error'
                raise
            finally:
                db_operations.labels(
                    operation=operation,
                    table=table,
                    status=status
                ).inc()
                db_query_duration.labels(
                    table=table,
                    operation=operation
                ).observe(time.time() - start_time)
        return wrapper
    return decorator


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    return generate_latest(registry).decode('utf-8')

"""Video use cases."""

from .reconcile_counters import (
    ReconcileCountersRequest,
    ReconcileCountersResponse,
    ReconcileCountersUseCase,
)

__all__ = [
    "ReconcileCountersRequest",
    "ReconcileCountersResponse",
    "ReconcileCountersUseCase",
]

"""Dependency injection wiring."""

from typing import Type

from reel.util.di.application import ProdApplicationProvider
from reel.util.di.base import Component, ProviderBase
from reel.util.di.core import ProdConfigProvider
from reel.util.di.domain import ProdDomainProvider
from reel.util.di.infrastructure import (
    CacheProvider,
    PersistenceProvider,
    ProdCacheProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable infrastructure
    PersistenceProvider,
    CacheProvider,
]


def mockable_components() -> set[Component]:
    """Components in ``PROVIDERS`` that currently have a mock registered."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__
        and any(c.__is_mock__ for c in base.__subclasses__())
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation to instantiate for a ``PROVIDERS`` entry.

    Concrete providers (no subclasses) are returned unchanged. For a
    component slot, the subclass whose ``__is_mock__`` equals ``use_mock``
    is returned.

    Raises:
        ValueError: If the slot has no implementation of the requested kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation registered for "
        f"{base.__mock_component__ or base.__name__}"
    )


__all__ = [
    "CacheProvider",
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdCacheProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
    "mockable_components",
]

"""Test container builder."""

from dishka import AsyncContainer, make_async_container

from reel.util.di import PROVIDERS, Component, get_provider, mockable_components


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every swappable component is mocked by default.

    Args:
        unmock: Components to run against their production implementation

    Raises:
        ValueError: If ``unmock`` names a component without a mock

    Examples:
        # Unit tests: in-memory repositories and cache
        container = build_test_container()

        # Real Postgres, in-memory cache
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    unknown = unmock - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers)

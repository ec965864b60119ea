"""Provider base class and component names."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests may swap for in-process fakes
Component = Literal["cache", "persistence"]


class ProviderBase(Provider):
    """Common base for every provider in ``PROVIDERS``.

    A provider that declares ``__mock_component__`` is an abstract slot: its
    subclasses are the interchangeable implementations, told apart by
    ``__is_mock__``. Providers without subclasses are used as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

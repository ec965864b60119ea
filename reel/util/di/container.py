"""Production container and FastAPI integration."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from reel.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Container with the production implementation of every component.

    Postgres and Redis connections are opened lazily, on first use.
    """
    providers = [get_provider(base)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app`` so routes can use ``FromDishka``."""
    setup_dishka(container, app)

"""Production container assembly and FastAPI integration."""

import logfire
from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from agora.util.di import instantiate_providers


def create_container() -> AsyncContainer:
    """Build the production container: real PostgreSQL persistence.

    Settings come from the environment when first resolved.
    """
    providers = instantiate_providers(mocked=())
    logfire.debug(
        "DI container assembled",
        providers=", ".join(type(p).__name__ for p in providers),
    )
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container so routes can declare ``FromDishka`` parameters."""
    setup_dishka(container, app)

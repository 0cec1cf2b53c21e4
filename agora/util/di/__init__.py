"""Dependency injection wiring for the discussion engine.

Every provider class is listed once in ``PROVIDERS``. Concrete providers are
instantiated as-is; mockable components are resolved to their production or
mock subclass depending on which components the caller wants mocked.
"""

from collections.abc import Collection
from typing import Type

from agora.util.di.application import ProdApplicationProvider
from agora.util.di.base import Component, ProviderBase
from agora.util.di.core import ProdConfigProvider
from agora.util.di.domain import ProdDomainProvider
from agora.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider
from agora.util.error import DependencyInjectionError, UnknownComponentError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable
    PersistenceProvider,
]


def mockable_components() -> set[Component]:
    """Names of every component with swappable implementations."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ is not None
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider base to the class that should be instantiated.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Pick the mock implementation of a mockable component

    Returns:
        Provider class (not instantiated)

    Raises:
        DependencyInjectionError: If no implementation, or more than one,
            matches the requested kind
    """
    if not base.is_mockable():
        return base

    component = base.__mock_component__ or base.__name__
    candidates = [c for c in base.__subclasses__() if c.__is_mock__ == use_mock]
    kind = "mock" if use_mock else "production"

    if not candidates:
        raise DependencyInjectionError(component, f"no {kind} implementation")
    if len(candidates) > 1:
        names = ", ".join(sorted(c.__name__ for c in candidates))
        raise DependencyInjectionError(
            component, f"ambiguous {kind} implementations: {names}"
        )

    return candidates[0]


def instantiate_providers(mocked: Collection[str] = ()) -> list[ProviderBase]:
    """Instantiate every provider, mocking the named components.

    Raises:
        UnknownComponentError: If ``mocked`` names an undeclared component
    """
    known = mockable_components()
    for name in mocked:
        if name not in known:
            raise UnknownComponentError(name)

    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "instantiate_providers",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]

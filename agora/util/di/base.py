"""Provider base class shared by every dishka provider in the engine."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with swappable implementations. Persistence is the only one:
# PostgreSQL in production, in-memory repositories in unit tests.
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Marks which component a provider implements and whether it is a mock.

    Concrete providers (config, domain services, use cases) leave
    ``__mock_component__`` unset and have no subclasses. A mockable
    component declares an abstract base carrying the component name, with
    one production subclass and one mock subclass.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_mockable(cls) -> bool:
        return cls.__mock_component__ is not None and bool(cls.__subclasses__())

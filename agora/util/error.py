"""Errors raised while wiring the application together."""


class UtilError(Exception):
    """Base utility error."""

    pass


class DependencyInjectionError(UtilError):
    """A provider for a component could not be resolved."""

    def __init__(self, component: str, reason: str):
        self.component = component
        self.reason = reason
        super().__init__(f"{component}: {reason}")


class UnknownComponentError(DependencyInjectionError):
    """A component name that no mockable provider declares."""

    def __init__(self, component: str):
        super().__init__(component, "no provider declares this component")

"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal, Type

from dishka import Provider

Component = Literal["persistence", "storage"]


class ProviderBase(Provider):
    """Base for all DI providers.

    A swappable component is a ``ProviderBase`` subclass naming the component
    in ``__mock_component__``, with exactly one production and one mock
    subclass told apart by ``__is_mock__``. Providers with a single
    implementation leave ``__mock_component__`` unset.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False


def select_implementation(
    base: Type[ProviderBase], mock: bool = False
) -> Type[ProviderBase]:
    """Pick the production or mock implementation of a provider base.

    Raises:
        LookupError: If the component has no implementation of that kind
            (mock providers live in the test package and must be imported)
    """
    if base.__mock_component__ is None:
        return base

    for impl in base.__subclasses__():
        if impl.__is_mock__ == mock:
            return impl

    kind = "mock" if mock else "production"
    raise LookupError(f"No {kind} provider for component '{base.__mock_component__}'")

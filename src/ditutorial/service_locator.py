"""
A service locator: a registry queried by string key at the point of use.

This is what the third section of the tutorial argues against. It is kept
small on purpose; classes that depend on it hide their real dependencies
behind ``locator.get("...")`` calls.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator


class ServiceNotFoundError(KeyError):
    """No service is registered under the requested key."""


@dataclass(kw_only=True, frozen=True, slots=True)
class _Registration:
    factory: Callable[[], Any]
    shared: bool


@dataclass(kw_only=True, slots=True)
class ServiceLocator:
    _registrations: dict[str, _Registration] = field(default_factory=dict, repr=False)
    _instances: dict[str, Any] = field(default_factory=dict, repr=False)

    def register(
        self,
        key: str,
        factory: Callable[[], Any],
        *,
        shared: bool = True,
        replace: bool = False,
    ) -> None:
        """
        Register ``factory`` under ``key``.

        A shared service is built on the first :meth:`get` and cached; otherwise
        every :meth:`get` builds a new one.
        """
        if key in self._registrations and not replace:
            raise ValueError(f"Service {key!r} is already registered")
        self._registrations[key] = _Registration(factory=factory, shared=shared)
        self._instances.pop(key, None)

    def set(self, key: str, instance: object, *, replace: bool = False) -> None:
        self.register(key, lambda: instance, replace=replace)
        self._instances[key] = instance

    def get(self, key: str) -> Any:
        try:
            registration = self._registrations[key]
        except KeyError as e:
            raise ServiceNotFoundError(key) from e
        if not registration.shared:
            return registration.factory()
        try:
            return self._instances[key]
        except KeyError:
            instance = self._instances[key] = registration.factory()
            return instance

    def has(self, key: str) -> bool:
        return key in self._registrations

    __contains__ = has

    def has_instance(self, key: str) -> bool:
        """Whether a shared instance for ``key`` has been built."""
        return key in self._instances

    def keys(self) -> Iterator[str]:
        return iter(self._registrations)

    def __len__(self) -> int:
        return len(self._registrations)

    def reset(self) -> None:
        """Forget cached shared instances; registrations stay."""
        self._instances.clear()

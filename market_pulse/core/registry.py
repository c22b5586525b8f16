from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

from market_pulse.core.errors import ProviderNotFoundError

ProviderFactory = Callable[..., Any]


class ProviderRegistry:
    """Factories keyed by ``(module, provider_id)``.

    Built-in providers are registered with ``register_default`` so that a
    provider registered earlier under the same id (a test double, or an
    alternative feed) is left in place.
    """

    def __init__(self) -> None:
        self._factories: Dict[Tuple[str, str], ProviderFactory] = {}

    def register(self, module: str, provider_id: str, factory: ProviderFactory) -> None:
        self._factories[(module, provider_id.strip().lower())] = factory

    def register_default(self, module: str, provider_id: str, factory: ProviderFactory) -> None:
        if not self.has(module, provider_id):
            self.register(module, provider_id, factory)

    def has(self, module: str, provider_id: str) -> bool:
        return (module, provider_id.strip().lower()) in self._factories

    def resolve(self, module: str, provider_id: str, **kwargs: Any) -> Any:
        factory = self._factories.get((module, provider_id.strip().lower()))
        if factory is None:
            known = ", ".join(self.list_ids(module)) or "none"
            raise ProviderNotFoundError(
                f"Unknown {module} provider '{provider_id}' (available: {known})"
            )
        return factory(**kwargs)

    def list_ids(self, module: str) -> List[str]:
        return sorted(pid for mod, pid in self._factories if mod == module)

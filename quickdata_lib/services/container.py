from typing import Any, Dict


class ServiceContainer:
    """Explicit registry owned by the composition root.

    The application registers the single `TypedStore` (and its config) here
    instead of reaching for a process-wide global.
    """

    def __init__(self) -> None:
        self._singletons: Dict[str, Any] = {}

    def register_singleton(self, key: str, instance: Any) -> None:
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        if key in self._singletons:
            return self._singletons[key]
        raise KeyError(f"No service registered for key '{key}'")

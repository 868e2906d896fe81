from typing import Any, Dict


class ServiceContainer:
    """Registry of the composed services, exposed as `app.state.container`.

    Register by key in `create_app`, resolve via `get` at request time.
    """

    def __init__(self) -> None:
        self._singletons: Dict[str, Any] = {}

    def register_singleton(self, key: str, instance: Any) -> None:
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        if key in self._singletons:
            return self._singletons[key]
        raise KeyError(f"No service registered for key '{key}'")

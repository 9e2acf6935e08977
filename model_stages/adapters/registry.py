#!filepath: model_stages/adapters/registry.py
from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional

from model_stages import logs
from model_stages.adapters.base_adapter import Adapter
from model_stages.config.settings import get_settings
from model_stages.utils.errors import UnknownAdapterError

AdapterFactory = Callable[[], Adapter]


def default_adapter() -> str:
    """Keyword used when a configuration names no adapter."""
    return get_settings().default_adapter.lower()


class AdapterRegistry:
    """
    AdapterRegistry

    Maps an adapter keyword to the factory building that adapter.

    Rules:
      - keywords are case-insensitive
      - resolve(None) falls back to the default keyword
      - unknown keyword -> UnknownAdapterError (never a silent default)
    """

    def __init__(self, default_keyword: Optional[str] = None):
        self._factories: Dict[str, AdapterFactory] = {}
        self._default_keyword = default_keyword

    # --------------------------------------------------
    @property
    def default_keyword(self) -> str:
        if self._default_keyword is not None:
            return self._default_keyword.lower()
        return default_adapter()

    # --------------------------------------------------
    def register(self, keyword: str) -> Callable[[AdapterFactory], AdapterFactory]:
        """
        Decorator registering an adapter class (or any zero-arg factory).

            @registry.register("s3")
            class S3Adapter(BaseAdapter):
                keyword = "s3"
                ...
        """

        def deco(factory: AdapterFactory) -> AdapterFactory:
            key = keyword.lower()
            if key in self._factories:
                logs.warning(f"[AdapterRegistry] overriding adapter {key!r}")
            self._factories[key] = factory
            return factory

        return deco

    def unregister(self, keyword: str) -> None:
        self._factories.pop(keyword.lower(), None)

    # --------------------------------------------------
    def resolve(self, keyword: Optional[str] = None) -> Adapter:
        key = (keyword or self.default_keyword).lower()

        factory = self._factories.get(key)
        if factory is None:
            raise UnknownAdapterError(key, self._factories.keys())

        return factory()

    def keywords(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, keyword: str) -> bool:
        return keyword.lower() in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.keywords())


# ------------------------------------------------------------------
# Process-wide registry
# ------------------------------------------------------------------
_ADAPTER_REGISTRY = AdapterRegistry()


def get_registry() -> AdapterRegistry:
    return _ADAPTER_REGISTRY


def register_adapter(keyword: str) -> Callable[[AdapterFactory], AdapterFactory]:
    return _ADAPTER_REGISTRY.register(keyword)


def resolve_adapter(keyword: Optional[str] = None) -> Adapter:
    return _ADAPTER_REGISTRY.resolve(keyword)


def list_adapters() -> List[str]:
    return _ADAPTER_REGISTRY.keywords()

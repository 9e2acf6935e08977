from .base_adapter import Adapter, BaseAdapter
from .registry import (
    AdapterRegistry,
    default_adapter,
    get_registry,
    list_adapters,
    register_adapter,
    resolve_adapter,
)

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Adapter(Protocol):
    """
    Storage capability an export step writes through.
    """

    keyword: str

    def write(self, artifact: Any, options: Any) -> None: ...


class BaseAdapter(ABC):
    """
    Common base for storage adapters.

    - ``keyword`` is the immutable identity used for lookup and reporting
    - ``write`` persists an artifact; failures are raised, never returned
    """

    keyword: str = ""

    def __init__(self):
        if not self.keyword:
            raise TypeError(
                f"{self.__class__.__name__} must define a non-empty keyword"
            )

    @abstractmethod
    def write(self, artifact: Any, options: Any) -> None:
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(keyword={self.keyword!r})"

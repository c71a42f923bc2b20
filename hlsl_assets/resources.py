# hlsl_assets/resources.py
from typing import Any, Dict, Type, TypeVar

T = TypeVar("T")


class ResourceManager:
    """
    Explicit process context: at most one instance per resource type.
    Owned by the application and passed to whoever needs it.
    """

    def __init__(self) -> None:
        self._resources: Dict[Type[Any], Any] = {}

    def add(self, resource: T) -> T:
        """Insert or replace the resource of this type. Returns it."""
        self._resources[type(resource)] = resource
        return resource

    def get(self, resource_type: Type[T]) -> T:
        res = self._resources.get(resource_type)
        if res is None:
            raise KeyError(f"Resource not found: {resource_type.__name__}")
        return res

    def try_get(self, resource_type: Type[T]) -> T | None:
        return self._resources.get(resource_type)

    def __contains__(self, resource_type: Type[Any]) -> bool:
        return resource_type in self._resources

"""
Registry and factory for node storage backends.

This module associates storage variant schema classes with their runtime
implementations and provides a factory to instantiate the runtime storage for a
given schema.

Example usage:
    .. code-block:: python

        from esoperator.storage.registry import build_storage
        storage = build_storage(descriptor.spec.storage.selected())
"""

from typing import Type, Callable, Any, Dict
from esoperator.exceptions import ESOperatorException
from esoperator.storage.backend import NodeStorage

# Registry mapping schema classes to storage runtime classes
STORAGE_REGISTRY: Dict[Type[Any], Type[NodeStorage]] = {}


def register_storage(schema_cls: Type[Any]) -> Callable[[Type[NodeStorage]], Type[NodeStorage]]:
    """
    Decorator to register a storage class for a given schema class.

    Args:
        schema_cls (Type[Any]): The schema class to associate with the storage class.

    Returns:
        Callable: A decorator that registers the storage class and returns it.

    Example usage:
       .. code-block:: python

          @register_storage(HostPathStorageConfig)
          class HostPathStorage(NodeStorage):
              ...
    """
    def decorator(runtime_cls):
        STORAGE_REGISTRY[schema_cls] = runtime_cls
        return runtime_cls
    return decorator


def build_storage(schema: Any) -> NodeStorage:
    """
    Factory function to instantiate the runtime storage for a given schema.

    Args:
        schema (Any): An instance of a storage variant schema.

    Returns:
        NodeStorage: Runtime storage instance.

    Raises:
        ESOperatorException: If no storage class is registered for the schema type.
    """
    storage_cls = STORAGE_REGISTRY.get(type(schema))
    if storage_cls is None:
        raise ESOperatorException(f"No storage registered for schema type {type(schema).__name__}")
    return storage_cls(schema)

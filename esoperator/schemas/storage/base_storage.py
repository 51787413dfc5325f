"""
Base configuration schema for all node storage variants.

This module defines the :class:`.BaseStorageConfig` class, which serves as the
foundation for the storage variant schemas of an Elasticsearch node
(host path, empty dir, claim template, existing claim).

Note:
    - Use subclasses to define fields specific to each variant.
    - The `extra="forbid"` option ensures that typos or unexpected fields in
      node description files raise validation errors.
    - Runtime storage instances are obtained with
      :meth:`.BaseStorageConfig.create_storage_instance`, which looks up the
      storage class registered for the schema.

Warning:
    The `BaseStorageConfig` class is an abstract class not intented to be used.
"""

from pydantic import BaseModel, ConfigDict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from esoperator.storage.backend import NodeStorage


class BaseStorageConfig(BaseModel):
    """
    Base configuration schema for all node storage variants.

    .. admonition:: Adding a new storage variant

          1. Create a subclass of :class:`BaseStorageConfig` with its specific fields.
          2. Add a field for it to :class:`esoperator.schemas.storage.storage.StorageSpec` and place it in the precedence order.
          3. Implement and register the corresponding :class:`esoperator.storage.backend.NodeStorage` subclass.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    def create_storage_instance(self) -> "NodeStorage":
        """
        Create the runtime storage instance for this configuration.

        Returns:
            NodeStorage: Runtime storage instance registered for this schema.

        Raises:
            ESOperatorException: If no storage class is registered for this schema.
        """
        from esoperator.storage.registry import build_storage
        return build_storage(self)

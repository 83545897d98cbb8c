"""
Audited Entity Use Cases

Create, read, update and delete of every audited entity kind.
"""

from .create_entity_use_case import CreateEntityUseCase
from .delete_entity_use_case import DeleteEntityUseCase
from .get_entity_use_case import GetEntityUseCase
from .kinds import ENTITY_KINDS, EntityKind, get_kind
from .update_entity_use_case import UpdateEntityUseCase

__all__ = [
    "CreateEntityUseCase",
    "DeleteEntityUseCase",
    "GetEntityUseCase",
    "ENTITY_KINDS",
    "EntityKind",
    "get_kind",
    "UpdateEntityUseCase",
]

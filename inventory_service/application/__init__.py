from .dispatcher import AuthorizationDispatcher, OPERATIONS, Operation, UnknownOperation
from .gateway import PersistenceGateway

__all__ = ["AuthorizationDispatcher", "OPERATIONS", "Operation", "UnknownOperation", "PersistenceGateway"]

import time
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import sessionmaker
from inventory_service.domain.results import Ok, Result
from .catalog_types import CatalogTypeOperations
from .entity_schemas import EntitySchemaOperations
from .facilities import FacilityOperations
from .inventory_items import InventoryItemOperations
from .products import ProductOperations
from .store import GatewayBase
from .subareas import SubareaOperations

@dataclass(frozen=True)
class ServerVersion:
    version: str
    uptime: int

class PersistenceGateway(
    FacilityOperations,
    CatalogTypeOperations,
    SubareaOperations,
    ProductOperations,
    InventoryItemOperations,
    EntitySchemaOperations,
    GatewayBase,
):
    """Tenant-scoped, version-checked CRUD over the inventory tables.

    Every method takes a request whose ``mservice_id`` has already been set
    from a verified token and returns ``Ok`` or ``Failure``.
    """

    def __init__(self, session_factory: sessionmaker, service_version: str = "1.0.0",
                 start_time: Optional[float] = None):
        super().__init__(session_factory)
        self.service_version = service_version
        self.start_time = start_time if start_time is not None else time.time()

    def get_server_version(self, req=None) -> Result:
        return Ok(ServerVersion(self.service_version, int(time.time() - self.start_time)))

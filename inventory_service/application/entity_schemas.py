"""
Per-tenant JSON schema documents describing the ``json_data`` extension
payload of an entity kind. Keyed by entity name.
"""

from sqlalchemy import select
from inventory_service.domain.models import EntitySchema
from inventory_service.domain.results import Created, Result, entity_not_supported
from .schemas import (
    CreateEntitySchemaRequest, UpdateEntitySchemaRequest, DeleteEntitySchemaRequest,
    GetEntitySchemaRequest, GetEntitySchemasRequest, EntitySchemaRead,
)
from .store import entity, first_failure, live_rows, require_json, require_text

# Entity kinds that carry json_data
SUPPORTED_ENTITIES = frozenset({"facility", "subarea", "product", "inventory_item"})

class EntitySchemaOperations:
    def create_entity_schema(self, req: CreateEntitySchemaRequest) -> Result:
        if req.entity_name not in SUPPORTED_ENTITIES:
            return entity_not_supported()
        failure = first_failure(
            require_text("json_schema", req.json_schema),
            require_json("json_schema", req.json_schema),
        )
        if failure:
            return failure
        row = EntitySchema(
            mservice_id=req.mservice_id,
            entity_name=req.entity_name,
            json_schema=req.json_schema,
            version=1,
        )
        return self._insert("CreateEntitySchema", row, key=lambda r: Created(r.entity_name))

    def update_entity_schema(self, req: UpdateEntitySchemaRequest) -> Result:
        failure = first_failure(
            require_text("json_schema", req.json_schema),
            require_json("json_schema", req.json_schema),
        )
        if failure:
            return failure
        return self._modify(
            "UpdateEntitySchema", EntitySchema, req.mservice_id,
            (EntitySchema.entity_name == req.entity_name,), req.version,
            json_schema=req.json_schema,
        )

    def delete_entity_schema(self, req: DeleteEntitySchemaRequest) -> Result:
        return self._soft_delete(
            "DeleteEntitySchema", EntitySchema, req.mservice_id,
            (EntitySchema.entity_name == req.entity_name,), req.version,
        )

    def get_entity_schema(self, req: GetEntitySchemaRequest) -> Result:
        stmt = select(EntitySchema).where(
            *live_rows(EntitySchema, req.mservice_id),
            EntitySchema.entity_name == req.entity_name,
        )
        return self._fetch_one("GetEntitySchema", stmt, entity(EntitySchemaRead))

    def get_entity_schemas(self, req: GetEntitySchemasRequest) -> Result:
        stmt = (
            select(EntitySchema)
            .where(*live_rows(EntitySchema, req.mservice_id))
            .order_by(EntitySchema.entity_name)
        )
        return self._fetch_all("GetEntitySchemas", stmt, entity(EntitySchemaRead))

"""Subarea and item type catalogs. Type ids are chosen by the caller."""

from sqlalchemy import select
from inventory_service.domain.models import ItemType, SubareaType
from inventory_service.domain.results import Created, Result
from .schemas import (
    CreateSubareaTypeRequest, UpdateSubareaTypeRequest, DeleteSubareaTypeRequest,
    GetSubareaTypeRequest, GetSubareaTypesRequest, SubareaTypeRead,
    CreateItemTypeRequest, UpdateItemTypeRequest, DeleteItemTypeRequest,
    GetItemTypeRequest, GetItemTypesRequest, ItemTypeRead,
)
from .store import entity, live_rows, require_text

class CatalogTypeOperations:
    def create_subarea_type(self, req: CreateSubareaTypeRequest) -> Result:
        failure = require_text("subarea_type_name", req.subarea_type_name)
        if failure:
            return failure
        row = SubareaType(
            mservice_id=req.mservice_id,
            subarea_type_id=req.subarea_type_id,
            subarea_type_name=req.subarea_type_name.strip(),
            version=1,
        )
        return self._insert("CreateSubareaType", row, key=lambda r: Created(r.subarea_type_id))

    def update_subarea_type(self, req: UpdateSubareaTypeRequest) -> Result:
        failure = require_text("subarea_type_name", req.subarea_type_name)
        if failure:
            return failure
        return self._modify(
            "UpdateSubareaType", SubareaType, req.mservice_id,
            (SubareaType.subarea_type_id == req.subarea_type_id,), req.version,
            subarea_type_name=req.subarea_type_name.strip(),
        )

    def delete_subarea_type(self, req: DeleteSubareaTypeRequest) -> Result:
        return self._soft_delete(
            "DeleteSubareaType", SubareaType, req.mservice_id,
            (SubareaType.subarea_type_id == req.subarea_type_id,), req.version,
        )

    def get_subarea_type(self, req: GetSubareaTypeRequest) -> Result:
        stmt = select(SubareaType).where(
            *live_rows(SubareaType, req.mservice_id),
            SubareaType.subarea_type_id == req.subarea_type_id,
        )
        return self._fetch_one("GetSubareaType", stmt, entity(SubareaTypeRead))

    def get_subarea_types(self, req: GetSubareaTypesRequest) -> Result:
        stmt = (
            select(SubareaType)
            .where(*live_rows(SubareaType, req.mservice_id))
            .order_by(SubareaType.subarea_type_id)
        )
        return self._fetch_all("GetSubareaTypes", stmt, entity(SubareaTypeRead))

    def create_item_type(self, req: CreateItemTypeRequest) -> Result:
        failure = require_text("item_type_name", req.item_type_name)
        if failure:
            return failure
        row = ItemType(
            mservice_id=req.mservice_id,
            item_type_id=req.item_type_id,
            item_type_name=req.item_type_name.strip(),
            version=1,
        )
        return self._insert("CreateItemType", row, key=lambda r: Created(r.item_type_id))

    def update_item_type(self, req: UpdateItemTypeRequest) -> Result:
        failure = require_text("item_type_name", req.item_type_name)
        if failure:
            return failure
        return self._modify(
            "UpdateItemType", ItemType, req.mservice_id,
            (ItemType.item_type_id == req.item_type_id,), req.version,
            item_type_name=req.item_type_name.strip(),
        )

    def delete_item_type(self, req: DeleteItemTypeRequest) -> Result:
        return self._soft_delete(
            "DeleteItemType", ItemType, req.mservice_id,
            (ItemType.item_type_id == req.item_type_id,), req.version,
        )

    def get_item_type(self, req: GetItemTypeRequest) -> Result:
        stmt = select(ItemType).where(
            *live_rows(ItemType, req.mservice_id),
            ItemType.item_type_id == req.item_type_id,
        )
        return self._fetch_one("GetItemType", stmt, entity(ItemTypeRead))

    def get_item_types(self, req: GetItemTypesRequest) -> Result:
        stmt = (
            select(ItemType)
            .where(*live_rows(ItemType, req.mservice_id))
            .order_by(ItemType.item_type_id)
        )
        return self._fetch_all("GetItemTypes", stmt, entity(ItemTypeRead))

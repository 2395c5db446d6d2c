from sqlalchemy import and_, select
from inventory_service.domain.models import InventoryItem, ItemType, Product, Subarea
from inventory_service.domain.results import Created, Result
from .schemas import (
    CreateInventoryItemRequest, UpdateInventoryItemRequest, DeleteInventoryItemRequest,
    GetInventoryItemRequest, GetInventoryItemsByProductRequest,
    GetInventoryItemsBySubareaRequest, GetInventoryItemsByFacilityRequest,
    InventoryItemRead,
)
from .store import live_rows, require_json

def _with_names():
    # Display names only come from live rows of the same tenant
    return (
        select(InventoryItem, ItemType.item_type_name, Product.product_name)
        .outerjoin(ItemType, and_(
            InventoryItem.mservice_id == ItemType.mservice_id,
            InventoryItem.item_type_id == ItemType.item_type_id,
            ItemType.is_deleted.is_(False),
        ))
        .outerjoin(Product, and_(
            InventoryItem.mservice_id == Product.mservice_id,
            InventoryItem.product_id == Product.product_id,
            Product.is_deleted.is_(False),
        ))
    )

def _to_read(row) -> InventoryItemRead:
    item, item_type_name, product_name = row
    return InventoryItemRead.model_validate(item).model_copy(update={
        "item_type_name": item_type_name or "",
        "product_name": product_name or "",
    })

class InventoryItemOperations:
    # Items have no required text field; only the JSON payload is checked

    def create_inventory_item(self, req: CreateInventoryItemRequest) -> Result:
        failure = require_json("json_data", req.json_data)
        if failure:
            return failure
        row = InventoryItem(
            mservice_id=req.mservice_id,
            subarea_id=req.subarea_id,
            item_type_id=req.item_type_id,
            quantity=req.quantity,
            serial_number=req.serial_number,
            product_id=req.product_id,
            json_data=req.json_data,
            version=1,
        )
        return self._insert("CreateInventoryItem", row, key=lambda r: Created(r.inventory_item_id))

    def update_inventory_item(self, req: UpdateInventoryItemRequest) -> Result:
        failure = require_json("json_data", req.json_data)
        if failure:
            return failure
        return self._modify(
            "UpdateInventoryItem", InventoryItem, req.mservice_id,
            (InventoryItem.inventory_item_id == req.inventory_item_id,), req.version,
            subarea_id=req.subarea_id,
            item_type_id=req.item_type_id,
            quantity=req.quantity,
            serial_number=req.serial_number,
            product_id=req.product_id,
            json_data=req.json_data,
        )

    def delete_inventory_item(self, req: DeleteInventoryItemRequest) -> Result:
        return self._soft_delete(
            "DeleteInventoryItem", InventoryItem, req.mservice_id,
            (InventoryItem.inventory_item_id == req.inventory_item_id,), req.version,
        )

    def get_inventory_item(self, req: GetInventoryItemRequest) -> Result:
        stmt = _with_names().where(
            *live_rows(InventoryItem, req.mservice_id),
            InventoryItem.inventory_item_id == req.inventory_item_id,
        )
        return self._fetch_one("GetInventoryItem", stmt, _to_read)

    def get_inventory_items_by_product(self, req: GetInventoryItemsByProductRequest) -> Result:
        stmt = (
            _with_names()
            .where(*live_rows(InventoryItem, req.mservice_id), InventoryItem.product_id == req.product_id)
            .order_by(InventoryItem.inventory_item_id)
        )
        return self._fetch_all("GetInventoryItemsByProduct", stmt, _to_read)

    def get_inventory_items_by_subarea(self, req: GetInventoryItemsBySubareaRequest) -> Result:
        stmt = (
            _with_names()
            .where(*live_rows(InventoryItem, req.mservice_id), InventoryItem.subarea_id == req.subarea_id)
            .order_by(InventoryItem.inventory_item_id)
        )
        return self._fetch_all("GetInventoryItemsBySubarea", stmt, _to_read)

    def get_inventory_items_by_facility(self, req: GetInventoryItemsByFacilityRequest) -> Result:
        # Inner join: an item is in a facility through a live subarea of its own tenant
        stmt = (
            _with_names()
            .join(Subarea, and_(
                InventoryItem.mservice_id == Subarea.mservice_id,
                InventoryItem.subarea_id == Subarea.subarea_id,
            ))
            .where(
                *live_rows(InventoryItem, req.mservice_id),
                *live_rows(Subarea, req.mservice_id),
                Subarea.facility_id == req.facility_id,
            )
            .order_by(InventoryItem.inventory_item_id)
        )
        return self._fetch_all("GetInventoryItemsByFacility", stmt, _to_read)

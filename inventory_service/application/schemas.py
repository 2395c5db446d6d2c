from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from inventory_service.domain.tree import FacilityWrapper, SubareaWrapper

# Read models

class FacilityRead(BaseModel):
    facility_id: int = 0
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    version: int = 0
    mservice_id: int = 0
    facility_name: str = ""
    json_data: str = ""
    class Config:
        from_attributes = True

class SubareaTypeRead(BaseModel):
    mservice_id: int = 0
    subarea_type_id: int = 0
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    version: int = 0
    subarea_type_name: str = ""
    class Config:
        from_attributes = True

class ItemTypeRead(BaseModel):
    mservice_id: int = 0
    item_type_id: int = 0
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    version: int = 0
    item_type_name: str = ""
    class Config:
        from_attributes = True

class SubareaRead(BaseModel):
    subarea_id: int = 0
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    version: int = 0
    mservice_id: int = 0
    facility_id: int = 0
    parent_subarea_id: int = 0
    position: int = 0
    subarea_type_id: int = 0
    subarea_name: str = ""
    json_data: str = ""
    # Display names from outer joins, empty when the referenced row is gone
    facility_name: str = ""
    subarea_type_name: str = ""
    class Config:
        from_attributes = True

class ProductRead(BaseModel):
    product_id: int = 0
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    version: int = 0
    mservice_id: int = 0
    sku: str = ""
    product_name: str = ""
    comment: str = ""
    json_data: str = ""
    class Config:
        from_attributes = True

class InventoryItemRead(BaseModel):
    inventory_item_id: int = 0
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    version: int = 0
    mservice_id: int = 0
    subarea_id: int = 0
    item_type_id: int = 0
    quantity: int = 0
    serial_number: str = ""
    product_id: int = 0
    json_data: str = ""
    item_type_name: str = ""
    product_name: str = ""
    class Config:
        from_attributes = True

class EntitySchemaRead(BaseModel):
    mservice_id: int = 0
    entity_name: str = ""
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    version: int = 0
    json_schema: str = ""
    class Config:
        from_attributes = True

# Requests. mservice_id is always overwritten from the verified token.

class TenantRequest(BaseModel):
    mservice_id: int = 0

class CreateFacilityRequest(TenantRequest):
    facility_name: str = ""
    json_data: str = ""

class UpdateFacilityRequest(TenantRequest):
    facility_id: int = 0
    version: int = 0
    facility_name: str = ""
    json_data: str = ""

class DeleteFacilityRequest(TenantRequest):
    facility_id: int = 0
    version: int = 0

class GetFacilityRequest(TenantRequest):
    facility_id: int = 0

class GetFacilitiesRequest(TenantRequest):
    pass

class GetFacilityWrapperRequest(TenantRequest):
    facility_id: int = 0

class CreateSubareaTypeRequest(TenantRequest):
    subarea_type_id: int = 0
    subarea_type_name: str = ""

class UpdateSubareaTypeRequest(TenantRequest):
    subarea_type_id: int = 0
    version: int = 0
    subarea_type_name: str = ""

class DeleteSubareaTypeRequest(TenantRequest):
    subarea_type_id: int = 0
    version: int = 0

class GetSubareaTypeRequest(TenantRequest):
    subarea_type_id: int = 0

class GetSubareaTypesRequest(TenantRequest):
    pass

class CreateItemTypeRequest(TenantRequest):
    item_type_id: int = 0
    item_type_name: str = ""

class UpdateItemTypeRequest(TenantRequest):
    item_type_id: int = 0
    version: int = 0
    item_type_name: str = ""

class DeleteItemTypeRequest(TenantRequest):
    item_type_id: int = 0
    version: int = 0

class GetItemTypeRequest(TenantRequest):
    item_type_id: int = 0

class GetItemTypesRequest(TenantRequest):
    pass

class CreateSubareaRequest(TenantRequest):
    facility_id: int = 0
    parent_subarea_id: int = 0
    position: int = 0
    subarea_type_id: int = 0
    subarea_name: str = ""
    json_data: str = ""

class UpdateSubareaRequest(TenantRequest):
    subarea_id: int = 0
    version: int = 0
    parent_subarea_id: int = 0
    position: int = 0
    subarea_type_id: int = 0
    subarea_name: str = ""
    json_data: str = ""

class DeleteSubareaRequest(TenantRequest):
    subarea_id: int = 0
    version: int = 0

class GetSubareaRequest(TenantRequest):
    subarea_id: int = 0

class GetSubareasRequest(TenantRequest):
    facility_id: int = 0

class CreateProductRequest(TenantRequest):
    sku: str = ""
    product_name: str = ""
    comment: str = ""
    json_data: str = ""

class UpdateProductRequest(TenantRequest):
    product_id: int = 0
    version: int = 0
    sku: str = ""
    product_name: str = ""
    comment: str = ""
    json_data: str = ""

class DeleteProductRequest(TenantRequest):
    product_id: int = 0
    version: int = 0

class GetProductRequest(TenantRequest):
    product_id: int = 0

class GetProductsRequest(TenantRequest):
    pass

class CreateInventoryItemRequest(TenantRequest):
    subarea_id: int = 0
    item_type_id: int = 0
    quantity: int = 0
    serial_number: str = ""
    product_id: int = 0
    json_data: str = ""

class UpdateInventoryItemRequest(TenantRequest):
    inventory_item_id: int = 0
    version: int = 0
    subarea_id: int = 0
    item_type_id: int = 0
    quantity: int = 0
    serial_number: str = ""
    product_id: int = 0
    json_data: str = ""

class DeleteInventoryItemRequest(TenantRequest):
    inventory_item_id: int = 0
    version: int = 0

class GetInventoryItemRequest(TenantRequest):
    inventory_item_id: int = 0

class GetInventoryItemsByProductRequest(TenantRequest):
    product_id: int = 0

class GetInventoryItemsBySubareaRequest(TenantRequest):
    subarea_id: int = 0

class GetInventoryItemsByFacilityRequest(TenantRequest):
    facility_id: int = 0

class CreateEntitySchemaRequest(TenantRequest):
    entity_name: str = ""
    json_schema: str = ""

class UpdateEntitySchemaRequest(TenantRequest):
    entity_name: str = ""
    version: int = 0
    json_schema: str = ""

class DeleteEntitySchemaRequest(TenantRequest):
    entity_name: str = ""
    version: int = 0

class GetEntitySchemaRequest(TenantRequest):
    entity_name: str = ""

class GetEntitySchemasRequest(TenantRequest):
    pass

class GetServerVersionRequest(BaseModel):
    pass

# Responses. error_code 0 means success; payload fields are left at their
# defaults on failure.

class Response(BaseModel):
    error_code: int = 0
    error_message: str = ""

class VersionResponse(Response):
    version: int = 0

class CreateFacilityResponse(VersionResponse):
    facility_id: int = 0

class UpdateFacilityResponse(VersionResponse):
    pass

class DeleteFacilityResponse(VersionResponse):
    pass

class GetFacilityResponse(Response):
    facility: Optional[FacilityRead] = None

class GetFacilitiesResponse(Response):
    facilities: list[FacilityRead] = []

class GetFacilityWrapperResponse(Response):
    facility_wrapper: Optional[FacilityWrapper] = None

class CreateSubareaTypeResponse(VersionResponse):
    pass

class UpdateSubareaTypeResponse(VersionResponse):
    pass

class DeleteSubareaTypeResponse(VersionResponse):
    pass

class GetSubareaTypeResponse(Response):
    subarea_type: Optional[SubareaTypeRead] = None

class GetSubareaTypesResponse(Response):
    subarea_types: list[SubareaTypeRead] = []

class CreateItemTypeResponse(VersionResponse):
    pass

class UpdateItemTypeResponse(VersionResponse):
    pass

class DeleteItemTypeResponse(VersionResponse):
    pass

class GetItemTypeResponse(Response):
    item_type: Optional[ItemTypeRead] = None

class GetItemTypesResponse(Response):
    item_types: list[ItemTypeRead] = []

class CreateSubareaResponse(VersionResponse):
    subarea_id: int = 0

class UpdateSubareaResponse(VersionResponse):
    pass

class DeleteSubareaResponse(VersionResponse):
    pass

class GetSubareaResponse(Response):
    subarea: Optional[SubareaRead] = None

class GetSubareasResponse(Response):
    subareas: list[SubareaRead] = []

class CreateProductResponse(VersionResponse):
    product_id: int = 0

class UpdateProductResponse(VersionResponse):
    pass

class DeleteProductResponse(VersionResponse):
    pass

class GetProductResponse(Response):
    product: Optional[ProductRead] = None

class GetProductsResponse(Response):
    products: list[ProductRead] = []

class CreateInventoryItemResponse(VersionResponse):
    inventory_item_id: int = 0

class UpdateInventoryItemResponse(VersionResponse):
    pass

class DeleteInventoryItemResponse(VersionResponse):
    pass

class GetInventoryItemResponse(Response):
    inventory_item: Optional[InventoryItemRead] = None

class GetInventoryItemsByProductResponse(Response):
    inventory_items: list[InventoryItemRead] = []

class GetInventoryItemsBySubareaResponse(Response):
    inventory_items: list[InventoryItemRead] = []

class GetInventoryItemsByFacilityResponse(Response):
    inventory_items: list[InventoryItemRead] = []

class CreateEntitySchemaResponse(VersionResponse):
    pass

class UpdateEntitySchemaResponse(VersionResponse):
    pass

class DeleteEntitySchemaResponse(VersionResponse):
    pass

class GetEntitySchemaResponse(Response):
    entity_schema: Optional[EntitySchemaRead] = None

class GetEntitySchemasResponse(Response):
    entity_schemas: list[EntitySchemaRead] = []

class GetServerVersionResponse(Response):
    version: str = ""
    uptime: int = 0

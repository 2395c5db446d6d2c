"""
Authorization dispatcher.

Every operation goes through ``AuthorizationDispatcher.call``:

1. verify the bearer token (expired tokens get 498, anything else 401);
2. check the caller's tier against the operation's required tier (401);
3. overwrite ``mservice_id`` with the tenant from the token;
4. run the gateway handler and fold its result into the response message.

Failures never raise. They come back as a response with ``error_code`` and
``error_message`` set, and each call is logged once with its duration.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type
from pydantic import BaseModel
from inventory_service.auth.policy import Tier, authorize
from inventory_service.auth.verifier import CredentialVerifier, ExpiredToken, InvalidToken
from inventory_service.core.logging_config import LoggerAdapter, get_logger, mservice_id_var
from inventory_service.domain.results import Failure, StatusCode, not_authorized, token_expired
from . import schemas as s
from .gateway import PersistenceGateway

def _created(key_field: Optional[str] = None) -> Callable[[Any], dict]:
    def convert(created) -> dict:
        fields = {"version": created.version}
        if key_field:
            fields[key_field] = created.key
        return fields
    return convert

def _version(version: int) -> dict:
    return {"version": version}

def _payload(field: str) -> Callable[[Any], dict]:
    return lambda value: {field: value}

def _wrapper(tree) -> dict:
    return {"facility_wrapper": tree.wrapper}

def _server_version(info) -> dict:
    return {"version": info.version, "uptime": info.uptime}

@dataclass(frozen=True)
class Operation:
    name: str
    required: Optional[Tier]
    request_cls: Type[BaseModel]
    response_cls: Type[s.Response]
    handler: str
    log_field: Optional[str]
    convert: Callable[[Any], dict]

ADMIN, RW, RO = Tier.ADMIN, Tier.READ_WRITE, Tier.READ_ONLY

_TABLE = [
    Operation("CreateFacility", ADMIN, s.CreateFacilityRequest, s.CreateFacilityResponse,
              "create_facility", "facility_name", _created("facility_id")),
    Operation("UpdateFacility", ADMIN, s.UpdateFacilityRequest, s.UpdateFacilityResponse,
              "update_facility", "facility_id", _version),
    Operation("DeleteFacility", ADMIN, s.DeleteFacilityRequest, s.DeleteFacilityResponse,
              "delete_facility", "facility_id", _version),
    Operation("GetFacility", RO, s.GetFacilityRequest, s.GetFacilityResponse,
              "get_facility", "facility_id", _payload("facility")),
    Operation("GetFacilities", RO, s.GetFacilitiesRequest, s.GetFacilitiesResponse,
              "get_facilities", None, _payload("facilities")),
    Operation("GetFacilityWrapper", RO, s.GetFacilityWrapperRequest, s.GetFacilityWrapperResponse,
              "get_facility_wrapper", "facility_id", _wrapper),

    Operation("CreateSubareaType", RW, s.CreateSubareaTypeRequest, s.CreateSubareaTypeResponse,
              "create_subarea_type", "subarea_type_name", _created()),
    Operation("UpdateSubareaType", RW, s.UpdateSubareaTypeRequest, s.UpdateSubareaTypeResponse,
              "update_subarea_type", "subarea_type_id", _version),
    Operation("DeleteSubareaType", RW, s.DeleteSubareaTypeRequest, s.DeleteSubareaTypeResponse,
              "delete_subarea_type", "subarea_type_id", _version),
    Operation("GetSubareaType", RO, s.GetSubareaTypeRequest, s.GetSubareaTypeResponse,
              "get_subarea_type", "subarea_type_id", _payload("subarea_type")),
    Operation("GetSubareaTypes", RO, s.GetSubareaTypesRequest, s.GetSubareaTypesResponse,
              "get_subarea_types", None, _payload("subarea_types")),

    Operation("CreateItemType", RW, s.CreateItemTypeRequest, s.CreateItemTypeResponse,
              "create_item_type", "item_type_name", _created()),
    Operation("UpdateItemType", RW, s.UpdateItemTypeRequest, s.UpdateItemTypeResponse,
              "update_item_type", "item_type_id", _version),
    Operation("DeleteItemType", RW, s.DeleteItemTypeRequest, s.DeleteItemTypeResponse,
              "delete_item_type", "item_type_id", _version),
    Operation("GetItemType", RO, s.GetItemTypeRequest, s.GetItemTypeResponse,
              "get_item_type", "item_type_id", _payload("item_type")),
    Operation("GetItemTypes", RO, s.GetItemTypesRequest, s.GetItemTypesResponse,
              "get_item_types", None, _payload("item_types")),

    Operation("CreateSubarea", RW, s.CreateSubareaRequest, s.CreateSubareaResponse,
              "create_subarea", "subarea_name", _created("subarea_id")),
    Operation("UpdateSubarea", RW, s.UpdateSubareaRequest, s.UpdateSubareaResponse,
              "update_subarea", "subarea_id", _version),
    Operation("DeleteSubarea", RW, s.DeleteSubareaRequest, s.DeleteSubareaResponse,
              "delete_subarea", "subarea_id", _version),
    Operation("GetSubarea", RO, s.GetSubareaRequest, s.GetSubareaResponse,
              "get_subarea", "subarea_id", _payload("subarea")),
    Operation("GetSubareas", RO, s.GetSubareasRequest, s.GetSubareasResponse,
              "get_subareas", "facility_id", _payload("subareas")),

    Operation("CreateProduct", RW, s.CreateProductRequest, s.CreateProductResponse,
              "create_product", "product_name", _created("product_id")),
    Operation("UpdateProduct", RW, s.UpdateProductRequest, s.UpdateProductResponse,
              "update_product", "product_id", _version),
    Operation("DeleteProduct", RW, s.DeleteProductRequest, s.DeleteProductResponse,
              "delete_product", "product_id", _version),
    Operation("GetProduct", RO, s.GetProductRequest, s.GetProductResponse,
              "get_product", "product_id", _payload("product")),
    Operation("GetProducts", RO, s.GetProductsRequest, s.GetProductsResponse,
              "get_products", None, _payload("products")),

    Operation("CreateInventoryItem", RW, s.CreateInventoryItemRequest, s.CreateInventoryItemResponse,
              "create_inventory_item", "subarea_id", _created("inventory_item_id")),
    Operation("UpdateInventoryItem", RW, s.UpdateInventoryItemRequest, s.UpdateInventoryItemResponse,
              "update_inventory_item", "inventory_item_id", _version),
    Operation("DeleteInventoryItem", RW, s.DeleteInventoryItemRequest, s.DeleteInventoryItemResponse,
              "delete_inventory_item", "inventory_item_id", _version),
    Operation("GetInventoryItem", RO, s.GetInventoryItemRequest, s.GetInventoryItemResponse,
              "get_inventory_item", "inventory_item_id", _payload("inventory_item")),
    Operation("GetInventoryItemsByProduct", RO, s.GetInventoryItemsByProductRequest,
              s.GetInventoryItemsByProductResponse,
              "get_inventory_items_by_product", "product_id", _payload("inventory_items")),
    Operation("GetInventoryItemsBySubarea", RO, s.GetInventoryItemsBySubareaRequest,
              s.GetInventoryItemsBySubareaResponse,
              "get_inventory_items_by_subarea", "subarea_id", _payload("inventory_items")),
    Operation("GetInventoryItemsByFacility", RO, s.GetInventoryItemsByFacilityRequest,
              s.GetInventoryItemsByFacilityResponse,
              "get_inventory_items_by_facility", "facility_id", _payload("inventory_items")),

    Operation("CreateEntitySchema", RW, s.CreateEntitySchemaRequest, s.CreateEntitySchemaResponse,
              "create_entity_schema", "entity_name", _created()),
    Operation("UpdateEntitySchema", RW, s.UpdateEntitySchemaRequest, s.UpdateEntitySchemaResponse,
              "update_entity_schema", "entity_name", _version),
    Operation("DeleteEntitySchema", RW, s.DeleteEntitySchemaRequest, s.DeleteEntitySchemaResponse,
              "delete_entity_schema", "entity_name", _version),
    Operation("GetEntitySchema", RO, s.GetEntitySchemaRequest, s.GetEntitySchemaResponse,
              "get_entity_schema", "entity_name", _payload("entity_schema")),
    Operation("GetEntitySchemas", RO, s.GetEntitySchemasRequest, s.GetEntitySchemasResponse,
              "get_entity_schemas", None, _payload("entity_schemas")),

    # No credential needed
    Operation("GetServerVersion", None, s.GetServerVersionRequest, s.GetServerVersionResponse,
              "get_server_version", None, _server_version),
]

OPERATIONS: Dict[str, Operation] = {op.name: op for op in _TABLE}

class UnknownOperation(KeyError):
    pass

def _entry(name: str):
    def method(self, token: Optional[str], request: Optional[BaseModel] = None) -> s.Response:
        return self.call(name, token, request)
    method.__name__ = OPERATIONS[name].handler
    method.__doc__ = f"Dispatch ``{name}``."
    return method

class AuthorizationDispatcher:
    def __init__(self, verifier: CredentialVerifier, gateway: PersistenceGateway,
                 logger: Optional[LoggerAdapter] = None):
        self.verifier = verifier
        self.gateway = gateway
        self.logger = logger or get_logger(__name__)

    @staticmethod
    def operation(name: str) -> Operation:
        try:
            return OPERATIONS[name]
        except KeyError:
            raise UnknownOperation(name) from None

    def call(self, name: str, token: Optional[str], request: Optional[BaseModel] = None) -> s.Response:
        op = self.operation(name)
        if request is None:
            request = op.request_cls()

        start_time = time.perf_counter()
        mservice_id = None
        # Tenant stays in the log context for this call only
        context_token = None

        try:
            if op.required is None:
                result = getattr(self.gateway, op.handler)(request)
            else:
                try:
                    claims = self.verifier.verify(token)
                except ExpiredToken:
                    result = token_expired()
                except InvalidToken:
                    result = not_authorized()
                else:
                    if not authorize(claims.tier, op.required):
                        result = not_authorized()
                    else:
                        mservice_id = claims.tenant_id
                        context_token = mservice_id_var.set(mservice_id)
                        request = request.model_copy(update={"mservice_id": mservice_id})
                        result = getattr(self.gateway, op.handler)(request)

            if isinstance(result, Failure):
                response = op.response_cls(error_code=int(result.code), error_message=result.message)
            else:
                response = op.response_cls(**op.convert(result.value))

            self._log(op, request, response, mservice_id, time.perf_counter() - start_time)
        finally:
            if context_token is not None:
                mservice_id_var.reset(context_token)
        return response

    def _log(self, op: Operation, request: BaseModel, response: s.Response,
             mservice_id: Optional[int], duration: float) -> None:
        fields = {"endpoint": op.name, "errcode": response.error_code}
        if op.log_field:
            fields[op.log_field] = getattr(request, op.log_field, None)
        if mservice_id is not None:
            fields["mservice_id"] = mservice_id

        extra = {"extra_fields": fields, "duration": duration}
        if response.error_code == StatusCode.TOKEN_EXPIRED:
            self.logger.warning(f"{op.name}: token expired", extra=extra)
        elif response.error_code == StatusCode.NOT_AUTHORIZED:
            self.logger.warning(f"{op.name}: {response.error_message}", extra=extra)
        elif response.error_code:
            self.logger.info(f"{op.name} failed: {response.error_message}", extra=extra)
        else:
            self.logger.info(f"{op.name} completed", extra=extra)

    create_facility = _entry("CreateFacility")
    update_facility = _entry("UpdateFacility")
    delete_facility = _entry("DeleteFacility")
    get_facility = _entry("GetFacility")
    get_facilities = _entry("GetFacilities")
    get_facility_wrapper = _entry("GetFacilityWrapper")

    create_subarea_type = _entry("CreateSubareaType")
    update_subarea_type = _entry("UpdateSubareaType")
    delete_subarea_type = _entry("DeleteSubareaType")
    get_subarea_type = _entry("GetSubareaType")
    get_subarea_types = _entry("GetSubareaTypes")

    create_item_type = _entry("CreateItemType")
    update_item_type = _entry("UpdateItemType")
    delete_item_type = _entry("DeleteItemType")
    get_item_type = _entry("GetItemType")
    get_item_types = _entry("GetItemTypes")

    create_subarea = _entry("CreateSubarea")
    update_subarea = _entry("UpdateSubarea")
    delete_subarea = _entry("DeleteSubarea")
    get_subarea = _entry("GetSubarea")
    get_subareas = _entry("GetSubareas")

    create_product = _entry("CreateProduct")
    update_product = _entry("UpdateProduct")
    delete_product = _entry("DeleteProduct")
    get_product = _entry("GetProduct")
    get_products = _entry("GetProducts")

    create_inventory_item = _entry("CreateInventoryItem")
    update_inventory_item = _entry("UpdateInventoryItem")
    delete_inventory_item = _entry("DeleteInventoryItem")
    get_inventory_item = _entry("GetInventoryItem")
    get_inventory_items_by_product = _entry("GetInventoryItemsByProduct")
    get_inventory_items_by_subarea = _entry("GetInventoryItemsBySubarea")
    get_inventory_items_by_facility = _entry("GetInventoryItemsByFacility")

    create_entity_schema = _entry("CreateEntitySchema")
    update_entity_schema = _entry("UpdateEntitySchema")
    delete_entity_schema = _entry("DeleteEntitySchema")
    get_entity_schema = _entry("GetEntitySchema")
    get_entity_schemas = _entry("GetEntitySchemas")

    get_server_version = _entry("GetServerVersion")

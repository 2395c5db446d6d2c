"""
REST/JSON mirror of the dispatcher operations.

The HTTP status is the in-band ``error_code`` (200 when it is 0). This layer
has its own codes for its own failures: 501 body unreadable, 502 body not a
valid message, 503 dispatch raised, 504 response not serializable.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect
from inventory_service.application.dispatcher import AuthorizationDispatcher
from inventory_service.core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["inventory"])

BEARER_PREFIX = "Bearer "

def get_dispatcher(request: Request) -> AuthorizationDispatcher:
    return request.app.state.dispatcher

def bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        return None
    return auth_header[len(BEARER_PREFIX):] or None

async def _dispatch(request: Request, dispatcher: AuthorizationDispatcher, name: str,
                    message: BaseModel) -> Response:
    try:
        response = await run_in_threadpool(dispatcher.call, name, bearer_token(request), message)
    except Exception:
        logger.error(f"{name} dispatch failed", exc_info=True)
        return Response(status_code=503)

    try:
        content = response.model_dump(mode="json")
    except (TypeError, ValueError):
        logger.error(f"{name} response serialization failed", exc_info=True)
        return Response(status_code=504)

    return JSONResponse(status_code=response.error_code or 200, content=content)

async def _with_body(request: Request, dispatcher: AuthorizationDispatcher, name: str,
                     **path) -> Response:
    try:
        body = await request.body()
    except ClientDisconnect:
        return Response(status_code=501)
    try:
        message = dispatcher.operation(name).request_cls.model_validate_json(body)
    except ValidationError:
        return Response(status_code=502)
    if path:
        message = message.model_copy(update=path)
    return await _dispatch(request, dispatcher, name, message)

async def _with_path(request: Request, dispatcher: AuthorizationDispatcher, name: str,
                     **path) -> Response:
    message = dispatcher.operation(name).request_cls(**path)
    return await _dispatch(request, dispatcher, name, message)

# Facilities

@router.post("/facility")
async def create_facility(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "CreateFacility")

@router.put("/facility/{facility_id}")
async def update_facility(facility_id: int, request: Request,
                          dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "UpdateFacility", facility_id=facility_id)

@router.delete("/facility/{facility_id}/{version}")
async def delete_facility(facility_id: int, version: int, request: Request,
                          dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "DeleteFacility", facility_id=facility_id, version=version)

@router.get("/facility/id/{facility_id}")
async def get_facility(facility_id: int, request: Request,
                       dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetFacility", facility_id=facility_id)

@router.get("/facilities")
async def get_facilities(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetFacilities")

@router.get("/facility/wrapper/{facility_id}")
async def get_facility_wrapper(facility_id: int, request: Request,
                               dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetFacilityWrapper", facility_id=facility_id)

# Subarea types

@router.post("/subareatype")
async def create_subarea_type(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "CreateSubareaType")

@router.put("/subareatype/{subarea_type_id}")
async def update_subarea_type(subarea_type_id: int, request: Request,
                              dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "UpdateSubareaType", subarea_type_id=subarea_type_id)

@router.delete("/subareatype/{subarea_type_id}/{version}")
async def delete_subarea_type(subarea_type_id: int, version: int, request: Request,
                              dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "DeleteSubareaType",
                            subarea_type_id=subarea_type_id, version=version)

@router.get("/subareatype/id/{subarea_type_id}")
async def get_subarea_type(subarea_type_id: int, request: Request,
                           dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetSubareaType", subarea_type_id=subarea_type_id)

@router.get("/subareatypes")
async def get_subarea_types(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetSubareaTypes")

# Item types

@router.post("/itemtype")
async def create_item_type(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "CreateItemType")

@router.put("/itemtype/{item_type_id}")
async def update_item_type(item_type_id: int, request: Request,
                           dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "UpdateItemType", item_type_id=item_type_id)

@router.delete("/itemtype/{item_type_id}/{version}")
async def delete_item_type(item_type_id: int, version: int, request: Request,
                           dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "DeleteItemType", item_type_id=item_type_id, version=version)

@router.get("/itemtype/id/{item_type_id}")
async def get_item_type(item_type_id: int, request: Request,
                        dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetItemType", item_type_id=item_type_id)

@router.get("/itemtypes")
async def get_item_types(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetItemTypes")

# Subareas

@router.post("/subarea")
async def create_subarea(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "CreateSubarea")

@router.put("/subarea/{subarea_id}")
async def update_subarea(subarea_id: int, request: Request,
                         dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "UpdateSubarea", subarea_id=subarea_id)

@router.delete("/subarea/{subarea_id}/{version}")
async def delete_subarea(subarea_id: int, version: int, request: Request,
                         dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "DeleteSubarea", subarea_id=subarea_id, version=version)

@router.get("/subarea/id/{subarea_id}")
async def get_subarea(subarea_id: int, request: Request,
                      dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetSubarea", subarea_id=subarea_id)

@router.get("/subareas/{facility_id}")
async def get_subareas(facility_id: int, request: Request,
                       dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetSubareas", facility_id=facility_id)

# Products

@router.post("/product")
async def create_product(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "CreateProduct")

@router.put("/product/{product_id}")
async def update_product(product_id: int, request: Request,
                         dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "UpdateProduct", product_id=product_id)

@router.delete("/product/{product_id}/{version}")
async def delete_product(product_id: int, version: int, request: Request,
                         dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "DeleteProduct", product_id=product_id, version=version)

@router.get("/product/id/{product_id}")
async def get_product(product_id: int, request: Request,
                      dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetProduct", product_id=product_id)

@router.get("/products")
async def get_products(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetProducts")

# Inventory items

@router.post("/item")
async def create_inventory_item(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "CreateInventoryItem")

@router.put("/item/{inventory_item_id}")
async def update_inventory_item(inventory_item_id: int, request: Request,
                                dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "UpdateInventoryItem", inventory_item_id=inventory_item_id)

@router.delete("/item/{inventory_item_id}/{version}")
async def delete_inventory_item(inventory_item_id: int, version: int, request: Request,
                                dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "DeleteInventoryItem",
                            inventory_item_id=inventory_item_id, version=version)

@router.get("/item/id/{inventory_item_id}")
async def get_inventory_item(inventory_item_id: int, request: Request,
                             dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetInventoryItem", inventory_item_id=inventory_item_id)

@router.get("/items/product/{product_id}")
async def get_items_by_product(product_id: int, request: Request,
                               dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetInventoryItemsByProduct", product_id=product_id)

@router.get("/items/subarea/{subarea_id}")
async def get_items_by_subarea(subarea_id: int, request: Request,
                               dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetInventoryItemsBySubarea", subarea_id=subarea_id)

@router.get("/items/facility/{facility_id}")
async def get_items_by_facility(facility_id: int, request: Request,
                                dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetInventoryItemsByFacility", facility_id=facility_id)

# Entity schemas

@router.post("/schema")
async def create_entity_schema(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "CreateEntitySchema")

@router.put("/schema/{entity_name}")
async def update_entity_schema(entity_name: str, request: Request,
                               dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_body(request, dispatcher, "UpdateEntitySchema", entity_name=entity_name)

@router.delete("/schema/{entity_name}/{version}")
async def delete_entity_schema(entity_name: str, version: int, request: Request,
                               dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "DeleteEntitySchema", entity_name=entity_name, version=version)

@router.get("/schema/{entity_name}")
async def get_entity_schema(entity_name: str, request: Request,
                            dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetEntitySchema", entity_name=entity_name)

@router.get("/schemas")
async def get_entity_schemas(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetEntitySchemas")

@router.get("/server/version")
async def get_server_version(request: Request, dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    return await _with_path(request, dispatcher, "GetServerVersion")

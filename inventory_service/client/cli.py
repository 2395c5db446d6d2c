"""
Command-line client for the inventory REST API.

    invclient create_facility --name "Warehouse A"
    invclient get_facility_wrapper --id 101

The bearer token is read from ``INV_TOKEN_FILE`` (default ``~/.mservice.token``).
"""

import argparse
import json
import os
import sys
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence
import httpx
from pydantic_settings import BaseSettings

class ClientSettings(BaseSettings):
    SERVER_URL: str = "http://localhost:8000"
    TOKEN_FILE: str = "~/.mservice.token"
    TIMEOUT: float = 10.0

    class Config:
        env_prefix = "INV_"

class Command(NamedTuple):
    method: str
    path: Callable[[argparse.Namespace], str]
    body: Optional[Callable[[argparse.Namespace], dict]]
    required: Sequence[str] = ()

def _facility_body(a):
    return {"facility_name": a.name, "json_data": a.json_data}

def _subarea_body(a):
    return {"facility_id": a.facility, "parent_subarea_id": a.parent, "position": a.position,
            "subarea_type_id": a.subtype, "subarea_name": a.name, "json_data": a.json_data}

def _product_body(a):
    return {"sku": a.sku, "product_name": a.name, "comment": a.comment, "json_data": a.json_data}

def _item_body(a):
    return {"subarea_id": a.subarea, "item_type_id": a.itemtype, "quantity": a.quantity,
            "serial_number": a.serial, "product_id": a.product, "json_data": a.json_data}

COMMANDS: Dict[str, Command] = {
    "create_facility": Command("POST", lambda a: "/api/facility", _facility_body, ("name",)),
    "update_facility": Command("PUT", lambda a: f"/api/facility/{a.id}",
                               lambda a: dict(_facility_body(a), version=a.version), ("id", "version", "name")),
    "delete_facility": Command("DELETE", lambda a: f"/api/facility/{a.id}/{a.version}", None, ("id", "version")),
    "get_facility": Command("GET", lambda a: f"/api/facility/id/{a.id}", None, ("id",)),
    "get_facilities": Command("GET", lambda a: "/api/facilities", None),
    "get_facility_wrapper": Command("GET", lambda a: f"/api/facility/wrapper/{a.id}", None, ("id",)),

    "create_subarea_type": Command("POST", lambda a: "/api/subareatype",
                                   lambda a: {"subarea_type_id": a.id, "subarea_type_name": a.name}, ("id", "name")),
    "update_subarea_type": Command("PUT", lambda a: f"/api/subareatype/{a.id}",
                                   lambda a: {"subarea_type_name": a.name, "version": a.version},
                                   ("id", "name", "version")),
    "delete_subarea_type": Command("DELETE", lambda a: f"/api/subareatype/{a.id}/{a.version}", None,
                                   ("id", "version")),
    "get_subarea_type": Command("GET", lambda a: f"/api/subareatype/id/{a.id}", None, ("id",)),
    "get_subarea_types": Command("GET", lambda a: "/api/subareatypes", None),

    "create_item_type": Command("POST", lambda a: "/api/itemtype",
                                lambda a: {"item_type_id": a.id, "item_type_name": a.name}, ("id", "name")),
    "update_item_type": Command("PUT", lambda a: f"/api/itemtype/{a.id}",
                                lambda a: {"item_type_name": a.name, "version": a.version},
                                ("id", "name", "version")),
    "delete_item_type": Command("DELETE", lambda a: f"/api/itemtype/{a.id}/{a.version}", None, ("id", "version")),
    "get_item_type": Command("GET", lambda a: f"/api/itemtype/id/{a.id}", None, ("id",)),
    "get_item_types": Command("GET", lambda a: "/api/itemtypes", None),

    "create_subarea": Command("POST", lambda a: "/api/subarea", _subarea_body,
                              ("facility", "position", "subtype", "name")),
    "update_subarea": Command("PUT", lambda a: f"/api/subarea/{a.id}",
                              lambda a: dict(_subarea_body(a), version=a.version),
                              ("id", "position", "subtype", "name", "version")),
    "delete_subarea": Command("DELETE", lambda a: f"/api/subarea/{a.id}/{a.version}", None, ("id", "version")),
    "get_subarea": Command("GET", lambda a: f"/api/subarea/id/{a.id}", None, ("id",)),
    "get_subareas": Command("GET", lambda a: f"/api/subareas/{a.facility}", None, ("facility",)),

    "create_product": Command("POST", lambda a: "/api/product", _product_body, ("name",)),
    "update_product": Command("PUT", lambda a: f"/api/product/{a.id}",
                              lambda a: dict(_product_body(a), version=a.version), ("id", "name", "version")),
    "delete_product": Command("DELETE", lambda a: f"/api/product/{a.id}/{a.version}", None, ("id", "version")),
    "get_product": Command("GET", lambda a: f"/api/product/id/{a.id}", None, ("id",)),
    "get_products": Command("GET", lambda a: "/api/products", None),

    "create_item": Command("POST", lambda a: "/api/item", _item_body,
                           ("subarea", "itemtype", "quantity", "product")),
    "update_item": Command("PUT", lambda a: f"/api/item/{a.id}",
                           lambda a: dict(_item_body(a), version=a.version),
                           ("id", "version", "subarea", "itemtype", "quantity", "product")),
    "delete_item": Command("DELETE", lambda a: f"/api/item/{a.id}/{a.version}", None, ("id", "version")),
    "get_item": Command("GET", lambda a: f"/api/item/id/{a.id}", None, ("id",)),
    "get_items_by_product": Command("GET", lambda a: f"/api/items/product/{a.product}", None, ("product",)),
    "get_items_by_subarea": Command("GET", lambda a: f"/api/items/subarea/{a.subarea}", None, ("subarea",)),
    "get_items_by_facility": Command("GET", lambda a: f"/api/items/facility/{a.facility}", None, ("facility",)),

    "create_entity_schema": Command("POST", lambda a: "/api/schema",
                                    lambda a: {"entity_name": a.entity_name, "json_schema": a.json_data},
                                    ("entity_name", "json_data")),
    "update_entity_schema": Command("PUT", lambda a: f"/api/schema/{a.entity_name}",
                                    lambda a: {"json_schema": a.json_data, "version": a.version},
                                    ("entity_name", "json_data", "version")),
    "delete_entity_schema": Command("DELETE", lambda a: f"/api/schema/{a.entity_name}/{a.version}", None,
                                    ("entity_name", "version")),
    "get_entity_schema": Command("GET", lambda a: f"/api/schema/{a.entity_name}", None, ("entity_name",)),
    "get_entity_schemas": Command("GET", lambda a: "/api/schemas", None),

    "get_server_version": Command("GET", lambda a: "/api/server/version", None),
}

# Flag name shown in "missing parameter" messages
_FLAG_NAMES = {"json_data": "j"}

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="invclient", description="Command line client for the inventory service")
    parser.add_argument("command", choices=sorted(COMMANDS), help="Operation to invoke")
    parser.add_argument("--id", type=int)
    parser.add_argument("--version", type=int)
    parser.add_argument("--name")
    parser.add_argument("--facility", type=int)
    parser.add_argument("--parent", type=int, default=0, help="Parent subarea id, 0 for top level")
    parser.add_argument("--position", type=int)
    parser.add_argument("--subtype", type=int, help="Subarea type id")
    parser.add_argument("--itemtype", type=int, help="Item type id")
    parser.add_argument("--sku", default="")
    parser.add_argument("--comment", default="")
    parser.add_argument("--subarea", type=int)
    parser.add_argument("--quantity", type=int)
    parser.add_argument("--serial", default="")
    parser.add_argument("--product", type=int)
    parser.add_argument("-j", dest="json_data", default="", help="JSON extension data or schema")
    parser.add_argument("--entity_name", help="Name of the entity to be extended")
    return parser

def read_token(path: str) -> str:
    path = os.path.expanduser(path)
    if not os.path.exists(path):
        return ""
    with open(path) as fh:
        return fh.read().strip()

def main(argv: Optional[List[str]] = None, transport: Optional[httpx.BaseTransport] = None) -> int:
    args = _build_parser().parse_args(argv)
    command = COMMANDS[args.command]

    for field in command.required:
        value = getattr(args, field)
        if value is None or value == "":
            print(f"{_FLAG_NAMES.get(field, field)} parameter missing", file=sys.stderr)
            return 2

    settings = ClientSettings()
    headers = {}
    token = read_token(settings.TOKEN_FILE)
    if token:
        headers["Authorization"] = f"Bearer {token}"

    body = command.body(args) if command.body else None
    try:
        with httpx.Client(base_url=settings.SERVER_URL, timeout=settings.TIMEOUT,
                          transport=transport) as client:
            resp = client.request(command.method, command.path(args), json=body, headers=headers)
    except httpx.HTTPError as exc:
        print(f"request failed: {exc}", file=sys.stderr)
        return 1

    try:
        print(json.dumps(resp.json(), indent=2))
    except ValueError:
        print(f"http status: {resp.status_code}")
    return 0

if __name__ == "__main__":
    sys.exit(main())

import json
from inventory_service.application import schemas as s
from inventory_service.domain.models import Base
from inventory_service.domain.results import Created, Failure, FailureKind, Ok, StatusCode

T1, T2 = 1, 2

def _create_facility(gateway, name="Warehouse A", tenant=T1, **kwargs):
    result = gateway.create_facility(s.CreateFacilityRequest(mservice_id=tenant, facility_name=name, **kwargs))
    assert isinstance(result, Ok)
    return result.value.key

def _create_subarea(gateway, facility_id, name, parent=0, position=0, tenant=T1, subtype=0):
    result = gateway.create_subarea(s.CreateSubareaRequest(
        mservice_id=tenant, facility_id=facility_id, parent_subarea_id=parent,
        position=position, subarea_type_id=subtype, subarea_name=name,
    ))
    return result.value.key

def test_create_returns_version_one_and_reads_back(gateway):
    result = gateway.create_facility(s.CreateFacilityRequest(mservice_id=T1, facility_name="  Dock 1  "))
    assert result.ok
    assert isinstance(result.value, Created)
    assert result.value.version == 1

    got = gateway.get_facility(s.GetFacilityRequest(mservice_id=T1, facility_id=result.value.key))
    assert got.ok
    assert got.value.facility_name == "Dock 1"
    assert got.value.version == 1
    assert got.value.mservice_id == T1
    assert got.value.created is not None

def test_blank_required_field_is_a_validation_failure(gateway):
    result = gateway.create_facility(s.CreateFacilityRequest(mservice_id=T1, facility_name="   "))
    assert isinstance(result, Failure)
    assert result.code == StatusCode.VALIDATION_FAILED
    assert result.message == "facility_name missing"
    assert result.kind is FailureKind.VALIDATION
    assert gateway.get_facilities(s.GetFacilitiesRequest(mservice_id=T1)).value == []

def test_malformed_json_data_is_rejected(gateway):
    result = gateway.create_product(s.CreateProductRequest(mservice_id=T1, product_name="Bolt", json_data="{nope"))
    assert result.code == StatusCode.VALIDATION_FAILED
    assert result.message == "json_data invalid"

def test_well_formed_json_data_is_stored(gateway):
    payload = json.dumps({"color": "red"})
    created = gateway.create_product(s.CreateProductRequest(
        mservice_id=T1, product_name="Bolt", sku="B-1", comment="m8", json_data=payload,
    ))
    product = gateway.get_product(s.GetProductRequest(mservice_id=T1, product_id=created.value.key)).value
    assert json.loads(product.json_data) == {"color": "red"}
    assert product.sku == "B-1"
    assert product.comment == "m8"

def test_update_increments_version_once(gateway):
    facility_id = _create_facility(gateway)
    req = s.UpdateFacilityRequest(mservice_id=T1, facility_id=facility_id, version=1, facility_name="Warehouse A2")

    first = gateway.update_facility(req)
    assert first.ok and first.value == 2

    second = gateway.update_facility(req)
    assert second.code == StatusCode.NOT_FOUND
    assert second.message == "not found"

    got = gateway.get_facility(s.GetFacilityRequest(mservice_id=T1, facility_id=facility_id)).value
    assert got.facility_name == "Warehouse A2"
    assert got.version == 2

def test_update_validates_before_touching_the_row(gateway):
    facility_id = _create_facility(gateway)
    result = gateway.update_facility(s.UpdateFacilityRequest(
        mservice_id=T1, facility_id=facility_id, version=1, facility_name="",
    ))
    assert result.code == StatusCode.VALIDATION_FAILED
    got = gateway.get_facility(s.GetFacilityRequest(mservice_id=T1, facility_id=facility_id)).value
    assert got.version == 1

def test_soft_deleted_rows_are_invisible(gateway, engine):
    facility_id = _create_facility(gateway)
    _create_facility(gateway, name="Warehouse B")

    deleted = gateway.delete_facility(s.DeleteFacilityRequest(mservice_id=T1, facility_id=facility_id, version=1))
    assert deleted.ok and deleted.value == 2

    got = gateway.get_facility(s.GetFacilityRequest(mservice_id=T1, facility_id=facility_id))
    assert got.code == StatusCode.NOT_FOUND
    names = [f.facility_name for f in gateway.get_facilities(s.GetFacilitiesRequest(mservice_id=T1)).value]
    assert names == ["Warehouse B"]

    # Row still exists in storage
    with engine.connect() as conn:
        row = conn.exec_driver_sql(
            "SELECT is_deleted, version, deleted FROM facility WHERE facility_id = ?", (facility_id,)
        ).one()
    assert row[0] in (1, True)
    assert row[1] == 2
    assert row[2] is not None

def test_deleted_row_cannot_be_updated_or_deleted_again(gateway):
    facility_id = _create_facility(gateway)
    gateway.delete_facility(s.DeleteFacilityRequest(mservice_id=T1, facility_id=facility_id, version=1))
    again = gateway.delete_facility(s.DeleteFacilityRequest(mservice_id=T1, facility_id=facility_id, version=2))
    assert again.code == StatusCode.NOT_FOUND
    update = gateway.update_facility(s.UpdateFacilityRequest(
        mservice_id=T1, facility_id=facility_id, version=2, facility_name="x",
    ))
    assert update.code == StatusCode.NOT_FOUND

def test_cross_tenant_access_is_not_found(gateway):
    facility_id = _create_facility(gateway, tenant=T1)

    assert gateway.get_facility(s.GetFacilityRequest(mservice_id=T2, facility_id=facility_id)).code == 404
    assert gateway.update_facility(s.UpdateFacilityRequest(
        mservice_id=T2, facility_id=facility_id, version=1, facility_name="stolen",
    )).code == 404
    assert gateway.delete_facility(s.DeleteFacilityRequest(
        mservice_id=T2, facility_id=facility_id, version=1,
    )).code == 404
    assert gateway.get_facilities(s.GetFacilitiesRequest(mservice_id=T2)).value == []

    got = gateway.get_facility(s.GetFacilityRequest(mservice_id=T1, facility_id=facility_id)).value
    assert got.facility_name == "Warehouse A"
    assert got.version == 1

def test_catalog_type_ids_are_caller_assigned(gateway):
    created = gateway.create_subarea_type(s.CreateSubareaTypeRequest(
        mservice_id=T1, subarea_type_id=5, subarea_type_name="room",
    ))
    assert created.ok and created.value.version == 1

    duplicate = gateway.create_subarea_type(s.CreateSubareaTypeRequest(
        mservice_id=T1, subarea_type_id=5, subarea_type_name="shelf",
    ))
    assert duplicate.code == StatusCode.EXECUTION_FAILED
    assert duplicate.message

    # Same id is free in another tenant
    assert gateway.create_subarea_type(s.CreateSubareaTypeRequest(
        mservice_id=T2, subarea_type_id=5, subarea_type_name="bay",
    )).ok

    got = gateway.get_subarea_type(s.GetSubareaTypeRequest(mservice_id=T1, subarea_type_id=5)).value
    assert got.subarea_type_name == "room"

def test_item_type_lifecycle(gateway):
    gateway.create_item_type(s.CreateItemTypeRequest(mservice_id=T1, item_type_id=1, item_type_name="serialized"))
    gateway.create_item_type(s.CreateItemTypeRequest(mservice_id=T1, item_type_id=2, item_type_name="bulk"))

    updated = gateway.update_item_type(s.UpdateItemTypeRequest(
        mservice_id=T1, item_type_id=2, version=1, item_type_name="bulk goods",
    ))
    assert updated.value == 2
    assert gateway.delete_item_type(s.DeleteItemTypeRequest(mservice_id=T1, item_type_id=1, version=1)).value == 2

    listed = gateway.get_item_types(s.GetItemTypesRequest(mservice_id=T1)).value
    assert [(t.item_type_id, t.item_type_name) for t in listed] == [(2, "bulk goods")]

def test_missing_item_type_name(gateway):
    result = gateway.create_item_type(s.CreateItemTypeRequest(mservice_id=T1, item_type_id=1))
    assert result.message == "item_type_name missing"

def test_subareas_are_ordered_by_parent_then_position(gateway):
    facility_id = _create_facility(gateway)
    b = _create_subarea(gateway, facility_id, "B", position=1)
    a = _create_subarea(gateway, facility_id, "A", position=0)
    c = _create_subarea(gateway, facility_id, "C", parent=a, position=0)

    listed = gateway.get_subareas(s.GetSubareasRequest(mservice_id=T1, facility_id=facility_id)).value
    assert [x.subarea_id for x in listed] == [a, b, c]

def test_subarea_display_names_from_outer_joins(gateway):
    facility_id = _create_facility(gateway)
    gateway.create_subarea_type(s.CreateSubareaTypeRequest(mservice_id=T1, subarea_type_id=3, subarea_type_name="room"))
    with_type = _create_subarea(gateway, facility_id, "Room 1", subtype=3)
    without_type = _create_subarea(gateway, facility_id, "Yard", subtype=42)

    got = gateway.get_subarea(s.GetSubareaRequest(mservice_id=T1, subarea_id=with_type)).value
    assert got.facility_name == "Warehouse A"
    assert got.subarea_type_name == "room"

    got = gateway.get_subarea(s.GetSubareaRequest(mservice_id=T1, subarea_id=without_type)).value
    assert got.subarea_name == "Yard"
    assert got.subarea_type_name == ""

def test_update_subarea_moves_it(gateway):
    facility_id = _create_facility(gateway)
    a = _create_subarea(gateway, facility_id, "A")
    b = _create_subarea(gateway, facility_id, "B", position=1)

    result = gateway.update_subarea(s.UpdateSubareaRequest(
        mservice_id=T1, subarea_id=b, version=1, parent_subarea_id=a, position=0, subarea_name="B",
    ))
    assert result.value == 2
    got = gateway.get_subarea(s.GetSubareaRequest(mservice_id=T1, subarea_id=b)).value
    assert got.parent_subarea_id == a
    assert got.facility_id == facility_id

def test_facility_wrapper(gateway):
    facility_id = _create_facility(gateway)
    a = _create_subarea(gateway, facility_id, "A", position=0)
    b = _create_subarea(gateway, facility_id, "B", position=1)
    c = _create_subarea(gateway, facility_id, "C", parent=a, position=0)
    orphan = _create_subarea(gateway, facility_id, "lost", parent=9999)

    result = gateway.get_facility_wrapper(s.GetFacilityWrapperRequest(mservice_id=T1, facility_id=facility_id))
    assert result.ok
    tree = result.value
    wrapper = tree.wrapper
    assert wrapper.facility_name == "Warehouse A"
    assert [x.subarea_id for x in wrapper.child_subareas] == [a, b]
    assert [x.subarea_id for x in wrapper.child_subareas[0].child_subareas] == [c]
    assert tree.orphaned_subarea_ids == [orphan]
    assert tree.dropped_count == 1

def test_facility_wrapper_of_missing_facility(gateway):
    result = gateway.get_facility_wrapper(s.GetFacilityWrapperRequest(mservice_id=T1, facility_id=12345))
    assert result.code == StatusCode.NOT_FOUND

def test_deleted_subareas_leave_the_wrapper(gateway):
    facility_id = _create_facility(gateway)
    a = _create_subarea(gateway, facility_id, "A")
    gateway.delete_subarea(s.DeleteSubareaRequest(mservice_id=T1, subarea_id=a, version=1))
    wrapper = gateway.get_facility_wrapper(s.GetFacilityWrapperRequest(mservice_id=T1, facility_id=facility_id)).value.wrapper
    assert wrapper.child_subareas == []

def test_inventory_items_queries(gateway):
    facility_id = _create_facility(gateway)
    other_facility = _create_facility(gateway, name="Warehouse B")
    shelf = _create_subarea(gateway, facility_id, "Shelf")
    bin_ = _create_subarea(gateway, other_facility, "Bin")
    gateway.create_item_type(s.CreateItemTypeRequest(mservice_id=T1, item_type_id=1, item_type_name="serialized"))
    product_id = gateway.create_product(s.CreateProductRequest(mservice_id=T1, product_name="Drill")).value.key

    first = gateway.create_inventory_item(s.CreateInventoryItemRequest(
        mservice_id=T1, subarea_id=shelf, item_type_id=1, quantity=1, serial_number="SN-1", product_id=product_id,
    ))
    assert first.ok and first.value.version == 1
    gateway.create_inventory_item(s.CreateInventoryItemRequest(
        mservice_id=T1, subarea_id=bin_, item_type_id=7, quantity=5, product_id=product_id,
    ))

    item = gateway.get_inventory_item(s.GetInventoryItemRequest(mservice_id=T1, inventory_item_id=first.value.key)).value
    assert item.item_type_name == "serialized"
    assert item.product_name == "Drill"
    assert item.serial_number == "SN-1"

    by_product = gateway.get_inventory_items_by_product(
        s.GetInventoryItemsByProductRequest(mservice_id=T1, product_id=product_id)).value
    assert len(by_product) == 2
    assert by_product[1].item_type_name == ""

    by_subarea = gateway.get_inventory_items_by_subarea(
        s.GetInventoryItemsBySubareaRequest(mservice_id=T1, subarea_id=bin_)).value
    assert [i.quantity for i in by_subarea] == [5]

    by_facility = gateway.get_inventory_items_by_facility(
        s.GetInventoryItemsByFacilityRequest(mservice_id=T1, facility_id=facility_id)).value
    assert [i.inventory_item_id for i in by_facility] == [first.value.key]

    assert gateway.get_inventory_items_by_product(
        s.GetInventoryItemsByProductRequest(mservice_id=T2, product_id=product_id)).value == []

def test_inventory_item_update_and_delete(gateway):
    item_id = gateway.create_inventory_item(s.CreateInventoryItemRequest(
        mservice_id=T1, subarea_id=1, quantity=1, product_id=1,
    )).value.key
    updated = gateway.update_inventory_item(s.UpdateInventoryItemRequest(
        mservice_id=T1, inventory_item_id=item_id, version=1, subarea_id=1, quantity=9, product_id=1,
    ))
    assert updated.value == 2
    assert gateway.get_inventory_item(
        s.GetInventoryItemRequest(mservice_id=T1, inventory_item_id=item_id)).value.quantity == 9
    assert gateway.delete_inventory_item(
        s.DeleteInventoryItemRequest(mservice_id=T1, inventory_item_id=item_id, version=2)).value == 3
    assert gateway.get_inventory_item(
        s.GetInventoryItemRequest(mservice_id=T1, inventory_item_id=item_id)).code == StatusCode.NOT_FOUND

def test_entity_schema_allow_list(gateway):
    result = gateway.create_entity_schema(s.CreateEntitySchemaRequest(
        mservice_id=T1, entity_name="customer", json_schema="{}",
    ))
    assert result.code == StatusCode.NOT_AUTHORIZED
    assert result.message == "entity not supported"
    assert result.kind is FailureKind.AUTHORIZATION

def test_entity_schema_requires_well_formed_schema(gateway):
    blank = gateway.create_entity_schema(s.CreateEntitySchemaRequest(mservice_id=T1, entity_name="product"))
    assert blank.message == "json_schema missing"
    bad = gateway.create_entity_schema(s.CreateEntitySchemaRequest(
        mservice_id=T1, entity_name="product", json_schema="{",
    ))
    assert bad.message == "json_schema invalid"

def test_entity_schema_lifecycle(gateway):
    schema = json.dumps({"type": "object"})
    created = gateway.create_entity_schema(s.CreateEntitySchemaRequest(
        mservice_id=T1, entity_name="product", json_schema=schema,
    ))
    assert created.ok and created.value.version == 1

    updated = gateway.update_entity_schema(s.UpdateEntitySchemaRequest(
        mservice_id=T1, entity_name="product", version=1, json_schema=json.dumps({"type": "array"}),
    ))
    assert updated.value == 2

    got = gateway.get_entity_schema(s.GetEntitySchemaRequest(mservice_id=T1, entity_name="product")).value
    assert json.loads(got.json_schema) == {"type": "array"}
    assert [e.entity_name for e in gateway.get_entity_schemas(s.GetEntitySchemasRequest(mservice_id=T1)).value] == ["product"]

    assert gateway.delete_entity_schema(s.DeleteEntitySchemaRequest(
        mservice_id=T1, entity_name="product", version=2,
    )).value == 3
    assert gateway.get_entity_schemas(s.GetEntitySchemasRequest(mservice_id=T1)).value == []

def test_server_version(gateway):
    result = gateway.get_server_version()
    assert result.ok
    assert result.value.version == "9.9.9"
    assert result.value.uptime >= 0

def test_store_failures_are_reported_in_band(gateway, engine):
    Base.metadata.drop_all(engine)

    read = gateway.get_facilities(s.GetFacilitiesRequest(mservice_id=T1))
    assert read.code == StatusCode.INTERNAL_ERROR
    assert "facility" in read.message

    write = gateway.create_facility(s.CreateFacilityRequest(mservice_id=T1, facility_name="x"))
    assert write.code == StatusCode.EXECUTION_FAILED
    assert write.kind is FailureKind.INTERNAL

    update = gateway.update_product(s.UpdateProductRequest(mservice_id=T1, product_id=1, version=1, product_name="x"))
    assert update.code == StatusCode.EXECUTION_FAILED

def test_display_names_never_come_from_another_tenant(gateway):
    foreign_facility = _create_facility(gateway, name="T2 secret site", tenant=T2)
    foreign_product = gateway.create_product(s.CreateProductRequest(
        mservice_id=T2, product_name="T2 secret product")).value.key
    gateway.create_subarea_type(s.CreateSubareaTypeRequest(
        mservice_id=T2, subarea_type_id=3, subarea_type_name="T2 room"))

    subarea_id = _create_subarea(gateway, foreign_facility, "Shelf", tenant=T1, subtype=3)
    item_id = gateway.create_inventory_item(s.CreateInventoryItemRequest(
        mservice_id=T1, subarea_id=subarea_id, product_id=foreign_product, quantity=1)).value.key

    subarea = gateway.get_subarea(s.GetSubareaRequest(mservice_id=T1, subarea_id=subarea_id)).value
    assert subarea.facility_name == ""
    assert subarea.subarea_type_name == ""

    item = gateway.get_inventory_item(s.GetInventoryItemRequest(mservice_id=T1, inventory_item_id=item_id)).value
    assert item.product_name == ""

def test_items_by_facility_ignore_another_tenants_subarea(gateway):
    foreign_facility = _create_facility(gateway, tenant=T2)
    foreign_subarea = _create_subarea(gateway, foreign_facility, "Bin", tenant=T2)
    gateway.create_inventory_item(s.CreateInventoryItemRequest(
        mservice_id=T1, subarea_id=foreign_subarea, product_id=1, quantity=1))

    items = gateway.get_inventory_items_by_facility(
        s.GetInventoryItemsByFacilityRequest(mservice_id=T1, facility_id=foreign_facility)).value
    assert items == []

def test_deleted_references_leave_display_names_empty(gateway):
    facility_id = _create_facility(gateway)
    gateway.create_subarea_type(s.CreateSubareaTypeRequest(mservice_id=T1, subarea_type_id=3, subarea_type_name="room"))
    gateway.create_item_type(s.CreateItemTypeRequest(mservice_id=T1, item_type_id=1, item_type_name="bulk"))
    product_id = gateway.create_product(s.CreateProductRequest(mservice_id=T1, product_name="gone")).value.key
    subarea_id = _create_subarea(gateway, facility_id, "Shelf", subtype=3)
    item_id = gateway.create_inventory_item(s.CreateInventoryItemRequest(
        mservice_id=T1, subarea_id=subarea_id, item_type_id=1, product_id=product_id, quantity=1)).value.key

    gateway.delete_product(s.DeleteProductRequest(mservice_id=T1, product_id=product_id, version=1))
    gateway.delete_item_type(s.DeleteItemTypeRequest(mservice_id=T1, item_type_id=1, version=1))
    gateway.delete_subarea_type(s.DeleteSubareaTypeRequest(mservice_id=T1, subarea_type_id=3, version=1))
    gateway.delete_facility(s.DeleteFacilityRequest(mservice_id=T1, facility_id=facility_id, version=1))

    item = gateway.get_inventory_item(s.GetInventoryItemRequest(mservice_id=T1, inventory_item_id=item_id)).value
    assert item.product_name == ""
    assert item.item_type_name == ""

    subarea = gateway.get_subarea(s.GetSubareaRequest(mservice_id=T1, subarea_id=subarea_id)).value
    assert subarea.facility_name == ""
    assert subarea.subarea_type_name == ""

def test_items_in_deleted_subarea_leave_the_facility_listing(gateway):
    facility_id = _create_facility(gateway)
    subarea_id = _create_subarea(gateway, facility_id, "Shelf")
    gateway.create_inventory_item(s.CreateInventoryItemRequest(
        mservice_id=T1, subarea_id=subarea_id, product_id=1, quantity=1))
    gateway.delete_subarea(s.DeleteSubareaRequest(mservice_id=T1, subarea_id=subarea_id, version=1))

    items = gateway.get_inventory_items_by_facility(
        s.GetInventoryItemsByFacilityRequest(mservice_id=T1, facility_id=facility_id)).value
    assert items == []

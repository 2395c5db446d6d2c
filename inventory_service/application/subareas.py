from sqlalchemy import and_, select
from inventory_service.domain.models import Facility, Subarea, SubareaType
from inventory_service.domain.results import Created, Result
from .schemas import (
    CreateSubareaRequest, UpdateSubareaRequest, DeleteSubareaRequest,
    GetSubareaRequest, GetSubareasRequest, SubareaRead,
)
from .store import first_failure, live_rows, require_json, require_text

def _with_names():
    # Missing, deleted or foreign facility and type rows leave the display names empty
    return (
        select(Subarea, Facility.facility_name, SubareaType.subarea_type_name)
        .outerjoin(Facility, and_(
            Subarea.mservice_id == Facility.mservice_id,
            Subarea.facility_id == Facility.facility_id,
            Facility.is_deleted.is_(False),
        ))
        .outerjoin(SubareaType, and_(
            Subarea.mservice_id == SubareaType.mservice_id,
            Subarea.subarea_type_id == SubareaType.subarea_type_id,
            SubareaType.is_deleted.is_(False),
        ))
    )

def _to_read(row) -> SubareaRead:
    subarea, facility_name, subarea_type_name = row
    return SubareaRead.model_validate(subarea).model_copy(update={
        "facility_name": facility_name or "",
        "subarea_type_name": subarea_type_name or "",
    })

class SubareaOperations:
    def create_subarea(self, req: CreateSubareaRequest) -> Result:
        failure = first_failure(
            require_text("subarea_name", req.subarea_name),
            require_json("json_data", req.json_data),
        )
        if failure:
            return failure
        row = Subarea(
            mservice_id=req.mservice_id,
            facility_id=req.facility_id,
            parent_subarea_id=req.parent_subarea_id,
            position=req.position,
            subarea_type_id=req.subarea_type_id,
            subarea_name=req.subarea_name.strip(),
            json_data=req.json_data,
            version=1,
        )
        return self._insert("CreateSubarea", row, key=lambda r: Created(r.subarea_id))

    def update_subarea(self, req: UpdateSubareaRequest) -> Result:
        # The owning facility is fixed at creation
        failure = first_failure(
            require_text("subarea_name", req.subarea_name),
            require_json("json_data", req.json_data),
        )
        if failure:
            return failure
        return self._modify(
            "UpdateSubarea", Subarea, req.mservice_id,
            (Subarea.subarea_id == req.subarea_id,), req.version,
            parent_subarea_id=req.parent_subarea_id,
            position=req.position,
            subarea_type_id=req.subarea_type_id,
            subarea_name=req.subarea_name.strip(),
            json_data=req.json_data,
        )

    def delete_subarea(self, req: DeleteSubareaRequest) -> Result:
        return self._soft_delete(
            "DeleteSubarea", Subarea, req.mservice_id,
            (Subarea.subarea_id == req.subarea_id,), req.version,
        )

    def get_subarea(self, req: GetSubareaRequest) -> Result:
        stmt = _with_names().where(
            *live_rows(Subarea, req.mservice_id), Subarea.subarea_id == req.subarea_id,
        )
        return self._fetch_one("GetSubarea", stmt, _to_read)

    def get_subareas(self, req: GetSubareasRequest) -> Result:
        return self.list_subareas(req.mservice_id, req.facility_id, "GetSubareas")

    def list_subareas(self, mservice_id: int, facility_id: int, operation: str) -> Result:
        """Subareas of one facility, ordered for tree assembly."""
        stmt = (
            _with_names()
            .where(*live_rows(Subarea, mservice_id), Subarea.facility_id == facility_id)
            .order_by(Subarea.parent_subarea_id, Subarea.position, Subarea.subarea_id)
        )
        return self._fetch_all(operation, stmt, _to_read)

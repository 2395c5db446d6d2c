from sqlalchemy import select
from inventory_service.domain.models import Facility
from inventory_service.domain.results import Created, Failure, Ok, Result
from inventory_service.domain.tree import assemble
from .schemas import (
    CreateFacilityRequest, UpdateFacilityRequest, DeleteFacilityRequest,
    GetFacilityRequest, GetFacilitiesRequest, GetFacilityWrapperRequest, FacilityRead,
)
from .store import entity, first_failure, live_rows, require_json, require_text

class FacilityOperations:
    def create_facility(self, req: CreateFacilityRequest) -> Result:
        failure = first_failure(
            require_text("facility_name", req.facility_name),
            require_json("json_data", req.json_data),
        )
        if failure:
            return failure
        row = Facility(
            mservice_id=req.mservice_id,
            facility_name=req.facility_name.strip(),
            json_data=req.json_data,
            version=1,
        )
        return self._insert("CreateFacility", row, key=lambda r: Created(r.facility_id))

    def update_facility(self, req: UpdateFacilityRequest) -> Result:
        failure = first_failure(
            require_text("facility_name", req.facility_name),
            require_json("json_data", req.json_data),
        )
        if failure:
            return failure
        return self._modify(
            "UpdateFacility", Facility, req.mservice_id,
            (Facility.facility_id == req.facility_id,), req.version,
            facility_name=req.facility_name.strip(), json_data=req.json_data,
        )

    def delete_facility(self, req: DeleteFacilityRequest) -> Result:
        return self._soft_delete(
            "DeleteFacility", Facility, req.mservice_id,
            (Facility.facility_id == req.facility_id,), req.version,
        )

    def get_facility(self, req: GetFacilityRequest) -> Result:
        stmt = select(Facility).where(
            *live_rows(Facility, req.mservice_id), Facility.facility_id == req.facility_id,
        )
        return self._fetch_one("GetFacility", stmt, entity(FacilityRead))

    def get_facilities(self, req: GetFacilitiesRequest) -> Result:
        stmt = (
            select(Facility)
            .where(*live_rows(Facility, req.mservice_id))
            .order_by(Facility.facility_id)
        )
        return self._fetch_all("GetFacilities", stmt, entity(FacilityRead))

    def get_facility_wrapper(self, req: GetFacilityWrapperRequest) -> Result:
        """Facility plus its nested subarea tree.

        Two independent reads; a write landing between them is visible in
        the subarea list but not in the facility header.
        """
        facility = self.get_facility(GetFacilityRequest(mservice_id=req.mservice_id, facility_id=req.facility_id))
        if isinstance(facility, Failure):
            return facility
        subareas = self.list_subareas(req.mservice_id, req.facility_id, "GetFacilityWrapper")
        if isinstance(subareas, Failure):
            return subareas
        return Ok(assemble(facility.value, subareas.value))

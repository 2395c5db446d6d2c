"""
Facility hierarchy assembly.

Subareas are stored flat with a ``parent_subarea_id`` (0 for top level).
``assemble`` rebuilds the nested view in two passes: index every row by id,
then attach each node to the facility root or to its parent. Sibling order
is the input order; callers pass rows already sorted by
``(parent_subarea_id, position)``.

A row whose non-zero parent is not in the input cannot be placed, and neither
can its descendants or rows whose parents form a cycle. All of them are left
out of the tree and their ids are reported on
``FacilityTree.orphaned_subarea_ids`` in input order.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional
from pydantic import BaseModel

class SubareaWrapper(BaseModel):
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
    facility_name: str = ""
    subarea_type_name: str = ""
    child_subareas: List["SubareaWrapper"] = []

    class Config:
        from_attributes = True

class FacilityWrapper(BaseModel):
    facility_id: int = 0
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    version: int = 0
    mservice_id: int = 0
    facility_name: str = ""
    json_data: str = ""
    child_subareas: List[SubareaWrapper] = []

    class Config:
        from_attributes = True

@dataclass
class FacilityTree:
    wrapper: FacilityWrapper
    orphaned_subarea_ids: List[int] = field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        return len(self.orphaned_subarea_ids)

def _copy(model_cls, source):
    # Fresh node; the source row is never mutated
    node = model_cls.model_validate(source, from_attributes=True)
    return node.model_copy(update={"child_subareas": []})

def _reachable(top: List[SubareaWrapper]) -> set:
    seen = set()
    stack = list(top)
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        stack.extend(node.child_subareas)
    return seen

def assemble(facility, subareas: Iterable) -> FacilityTree:
    root = _copy(FacilityWrapper, facility)

    nodes: List[SubareaWrapper] = []
    by_id = {}
    for row in subareas:
        node = _copy(SubareaWrapper, row)
        nodes.append(node)
        by_id[node.subarea_id] = node

    for node in nodes:
        if node.parent_subarea_id == 0:
            root.child_subareas.append(node)
            continue
        parent = by_id.get(node.parent_subarea_id)
        if parent is not None:
            parent.child_subareas.append(node)

    reached = _reachable(root.child_subareas)
    orphans = [node.subarea_id for node in nodes if id(node) not in reached]
    return FacilityTree(wrapper=root, orphaned_subarea_ids=orphans)

"""
Table management router.

Staff create, list, edit and delete tables and assign or release them.
Mutations answer with {"message": ...}; assign also returns the table with
its new access code so staff can hand it to the customer.
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pos_api.core.dependencies import get_app_settings, require_staff_role
from pos_api.services.domain import AssignmentService, TableService
from pos_shared.config.settings import Settings
from pos_shared.infrastructure.db import get_db
from pos_shared.security.auth import StaffIdentity
from pos_shared.utils.schemas import (
    AddTableRequest,
    AssignTableRequest,
    EditTableRequest,
    MessageResponse,
    ReleaseTableRequest,
    TableDetail,
)


router = APIRouter(
    prefix="/manage",
    tags=["manage"],
    dependencies=[Depends(require_staff_role)],
)


@router.post("/tables", response_model=MessageResponse)
def add_table(
    body: AddTableRequest,
    db: Session = Depends(get_db),
    staff: StaffIdentity = Depends(require_staff_role),
) -> MessageResponse:
    TableService(db).add(body.name, body.capacity, user_id=staff.user_id)
    return MessageResponse(message="Table added successfully")


@router.get("/tables", response_model=list[TableDetail])
def list_tables(db: Session = Depends(get_db)) -> list[TableDetail]:
    return TableService(db).find_all()


@router.get("/tables/{table_id}", response_model=TableDetail)
def get_table(table_id: uuid.UUID, db: Session = Depends(get_db)) -> TableDetail:
    return TableService(db).find_by_id(table_id)


@router.put("/tables", response_model=MessageResponse)
def edit_table(
    body: EditTableRequest,
    db: Session = Depends(get_db),
    staff: StaffIdentity = Depends(require_staff_role),
) -> MessageResponse:
    TableService(db).edit(body.id, body.name, body.capacity, user_id=staff.user_id)
    return MessageResponse(message="Table edited successfully")


@router.delete("/tables/{table_id}", response_model=MessageResponse)
def delete_table(
    table_id: uuid.UUID,
    db: Session = Depends(get_db),
    staff: StaffIdentity = Depends(require_staff_role),
) -> MessageResponse:
    TableService(db).delete(table_id, user_id=staff.user_id)
    return MessageResponse(message="Table deleted successfully")


@router.post("/tables/assign", response_model=TableDetail)
def assign_table(
    body: AssignTableRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    staff: StaffIdentity = Depends(require_staff_role),
) -> TableDetail:
    return AssignmentService(db, settings).assign(body.table_id, user_id=staff.user_id)


@router.post("/tables/release", response_model=MessageResponse)
def release_table(
    body: ReleaseTableRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    staff: StaffIdentity = Depends(require_staff_role),
) -> MessageResponse:
    AssignmentService(db, settings).release(body.table_id, user_id=staff.user_id)
    return MessageResponse(message="Table released successfully")

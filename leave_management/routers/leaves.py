from typing import List, Optional
from fastapi import APIRouter, Depends

from leave_management.core.schemas import ApiResponse
from leave_management.routers.auth_deps import Identity, get_current_identity, get_lifecycle_engine, require_admin
from leave_management.schemas.leave import (
    ApplyLeaveRequest,
    LeaveCategoryResponse,
    LeaveRequestResponse,
    UpdateLeaveStatusRequest,
)
from leave_management.services.leave_lifecycle import LeaveLifecycleEngine

router = APIRouter(
    prefix="/leaves",
    tags=["leaves"]
)

@router.post("/apply", response_model=ApiResponse[LeaveRequestResponse])
def apply_leave(
    data: ApplyLeaveRequest,
    identity: Identity = Depends(get_current_identity),
    engine: LeaveLifecycleEngine = Depends(get_lifecycle_engine),
):
    leave = engine.create(
        identity.employee_id,
        data.category_id,
        data.start_date,
        data.end_date,
        data.reason,
    ).unwrap()
    return ApiResponse.ok(LeaveRequestResponse.from_record(leave), message="Leave applied successfully")

@router.get("/my-leaves", response_model=ApiResponse[List[LeaveRequestResponse]])
def my_leaves(
    identity: Identity = Depends(get_current_identity),
    engine: LeaveLifecycleEngine = Depends(get_lifecycle_engine),
):
    leaves = engine.requests_for(identity.employee_id)
    return ApiResponse.ok([LeaveRequestResponse.from_record(leave) for leave in leaves])

@router.get("/all", response_model=ApiResponse[List[LeaveRequestResponse]])
def all_leaves(
    employee_id: Optional[int] = None,
    admin: Identity = Depends(require_admin),
    engine: LeaveLifecycleEngine = Depends(get_lifecycle_engine),
):
    leaves = engine.all_requests(employee_id)
    return ApiResponse.ok([LeaveRequestResponse.from_record(leave) for leave in leaves])

@router.put("/{leave_id}/cancel", response_model=ApiResponse[LeaveRequestResponse])
def cancel_leave(
    leave_id: int,
    identity: Identity = Depends(get_current_identity),
    engine: LeaveLifecycleEngine = Depends(get_lifecycle_engine),
):
    leave = engine.cancel(leave_id, identity.employee_id).unwrap()
    return ApiResponse.ok(LeaveRequestResponse.from_record(leave), message="Leave cancelled successfully")

@router.put("/update-status", response_model=ApiResponse[LeaveRequestResponse])
def update_leave_status(
    data: UpdateLeaveStatusRequest,
    admin: Identity = Depends(require_admin),
    engine: LeaveLifecycleEngine = Depends(get_lifecycle_engine),
):
    leave = engine.update_status(data.leave_id, data.status).unwrap()
    return ApiResponse.ok(LeaveRequestResponse.from_record(leave), message="Leave status updated successfully")

@router.get("/types", response_model=ApiResponse[List[LeaveCategoryResponse]])
def leave_types(
    identity: Identity = Depends(get_current_identity),
    engine: LeaveLifecycleEngine = Depends(get_lifecycle_engine),
):
    return ApiResponse.ok([LeaveCategoryResponse.from_record(c) for c in engine.categories()])

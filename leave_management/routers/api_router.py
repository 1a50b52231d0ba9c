from fastapi import APIRouter
from leave_management.routers import auth, employees, leaves

# Everything served under settings.api_prefix
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(leaves.router, tags=["Leaves"])
api_router.include_router(employees.router, tags=["Employees"])

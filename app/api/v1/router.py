# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.modules.sales.router import router as sales_router

# Crear router principal de la API v1
api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["authentication"])

api_router.include_router(
    sales_router,
    prefix="/organizations/{org_id}/sales",
    tags=["Sales"]
)

"""API v1 router aggregation."""

from fastapi import APIRouter

from site_content.api.v1.endpoints import admin, health, navigation, pages

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(pages.router, prefix="/pages", tags=["pages"])
api_router.include_router(navigation.router, prefix="/navigation", tags=["navigation"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])

"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from app.api.orders import router as orders_router
from app.api.photos import router as photos_router
from app.api.templates import router as templates_router
from app.api.reports import router as reports_router
from app.api.websocket import router as websocket_router

api_router = APIRouter()
api_router.include_router(orders_router)
api_router.include_router(photos_router)
api_router.include_router(templates_router)
api_router.include_router(reports_router)
api_router.include_router(websocket_router)

from fastapi import APIRouter

from hrdesk.api.admin import admin_router
from hrdesk.api.catalog import catalog_router
from hrdesk.api.employees import employees_router
from hrdesk.api.requests import requests_router

api_router = APIRouter()
api_router.include_router(catalog_router)
api_router.include_router(requests_router)
api_router.include_router(admin_router)
api_router.include_router(employees_router)

from fastapi import APIRouter

from hrdesk.schemas.catalog import FormCatalogResponse
from hrdesk.services.catalog import get_form_catalog

catalog_router = APIRouter(tags=["forms"])


@catalog_router.get("/forms", response_model=FormCatalogResponse)
async def list_forms() -> FormCatalogResponse:
    """Return the form catalog and the option lists each form offers."""
    return get_form_catalog()

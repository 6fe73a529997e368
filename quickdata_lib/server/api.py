from fastapi import APIRouter, Request
from quickdata_lib.services.resolver import resolve_service
from .health import get_health

router = APIRouter()


@router.get('/health')
async def api_health(request: Request):
    store = resolve_service(request, 'quickdata_store')
    return get_health(store)

"""
REST API endpoints for the QuickData store.

Exposes typed get/set on the six tables, key listing per table and the
serialized snapshot. The store instance is resolved from the service
container registered by `quickdata_lib.main.create_app`.
"""
from typing import Any
from fastapi import APIRouter, Request, HTTPException
from pydantic import BaseModel

from quickdata_lib.services.resolver import resolve_service
from .kinds import ValueKind

import logging
router = APIRouter()
logger = logging.getLogger(__name__)


class ValuePayload(BaseModel):
    value: Any


def _kind(kind: str) -> ValueKind:
    try:
        return ValueKind(kind)
    except ValueError:
        raise HTTPException(status_code=404, detail={'error': 'unknown_kind', 'message': f"Unknown value kind '{kind}'"})


@router.get('/quickdata/info')
async def api_quickdata_info(request: Request, decrypt: bool = False):
    """
    Serialized snapshot of every table.

    Query params:
        decrypt: when true return the plain JSON, otherwise the encrypted
                 text as it is written to disk
    """
    store = resolve_service(request, 'quickdata_store')
    return {'info': store.get_all_info(decrypt)}


@router.get('/quickdata/{kind}')
async def api_quickdata_keys(request: Request, kind: str):
    k = _kind(kind)
    store = resolve_service(request, 'quickdata_store')
    return {'kind': k.value, 'keys': store.keys(k)}


@router.get('/quickdata/{kind}/{key}')
async def api_quickdata_get(request: Request, kind: str, key: str):
    k = _kind(kind)
    store = resolve_service(request, 'quickdata_store')
    result = store.lookup(k, key)
    if not result.ok:
        raise HTTPException(status_code=404, detail={'error': 'not_found', 'message': f"No {k.value} value for '{key}'"})
    return {'kind': k.value, 'key': key, 'status': result.status.value, 'value': result.value}


@router.put('/quickdata/{kind}/{key}')
async def api_quickdata_put(request: Request, kind: str, key: str, payload: ValuePayload):
    k = _kind(kind)
    store = resolve_service(request, 'quickdata_store')
    logger.debug("Setting %s value for %s", k.value, key)
    try:
        store.set(k, key, payload.value)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail={'error': 'invalid_value', 'message': str(e)})
    return {'kind': k.value, 'key': key, 'status': 'found', 'value': store.get(k, key)}

from fastapi import APIRouter, Request
from postdir_lib.services.resolver import get_post_store
from .health import get_health

router = APIRouter()


@router.get('/health')
def api_health(request: Request):
    return get_health(get_post_store(request))

"""
Work (ad) catalog endpoints.

Any logged-in user can list ads; changes are admin-only.
"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_work_store
from api.middleware.auth import get_current_user, require_admin
from modules.auth.models import AuthContext, MessageResponse

from .exceptions import WorkNotFoundError
from .interfaces import IWorkStore
from .models import NewWork, Work, WorkListResponse, WorkUpdate

router = APIRouter()


@router.get("", response_model=WorkListResponse)
async def list_works(
    user: AuthContext = Depends(get_current_user),
    catalog: IWorkStore = Depends(get_work_store),
) -> WorkListResponse:
    """List the ads users can click to earn."""
    return WorkListResponse(works=catalog.list_all())


@router.post("", response_model=Work, status_code=status.HTTP_201_CREATED)
async def create_work(
    request: NewWork,
    admin: AuthContext = Depends(require_admin),
    catalog: IWorkStore = Depends(get_work_store),
) -> Work:
    return catalog.create(request)


@router.get("/{ad_id}", response_model=Work)
async def get_work(
    ad_id: str,
    user: AuthContext = Depends(get_current_user),
    catalog: IWorkStore = Depends(get_work_store),
) -> Work:
    work = catalog.get_by_id(ad_id)
    if work is None:
        raise WorkNotFoundError(ad_id)
    return work


@router.put("/{ad_id}", response_model=Work)
async def update_work(
    ad_id: str,
    request: WorkUpdate,
    admin: AuthContext = Depends(require_admin),
    catalog: IWorkStore = Depends(get_work_store),
) -> Work:
    work = catalog.update(ad_id, request)
    if work is None:
        raise WorkNotFoundError(ad_id)
    return work


@router.delete("/{ad_id}", response_model=MessageResponse)
async def delete_work(
    ad_id: str,
    admin: AuthContext = Depends(require_admin),
    catalog: IWorkStore = Depends(get_work_store),
) -> MessageResponse:
    """Remove an ad. Grants already held for it simply run out."""
    if not catalog.delete(ad_id):
        raise WorkNotFoundError(ad_id)
    return MessageResponse(message="Work deleted")

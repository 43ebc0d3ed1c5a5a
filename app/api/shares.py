"""Share link management routes."""
from fastapi import APIRouter, Response, status

from app.core.deps import CurrentUserDep, ShareServiceDep

router = APIRouter()


@router.delete("/{share_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_share_link(share_id: str, current_user: CurrentUserDep, shares: ShareServiceDep):
    """Revoke a share link. Only the owner of the linked note may do this."""
    await shares.delete(share_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

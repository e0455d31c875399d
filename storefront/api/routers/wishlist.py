# storefront/api/routers/wishlist.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_db, get_lock_service
from storefront.data.models.user import UserModel
from storefront.domain.schemas import WishlistLineOut, WishlistToggleIn, WishlistToggleOut
from storefront.services.lock_service import LockService
from storefront.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> WishlistService:
    return WishlistService(db=db, lock_service=lock_service)


@router.get("", response_model=List[WishlistLineOut])
def list_wishlist(
    user: UserModel = Depends(get_current_user),
    svc: WishlistService = Depends(get_service),
):
    return svc.list_wishlist(user.id)


@router.post("/toggle", response_model=WishlistToggleOut)
def toggle(
    payload: WishlistToggleIn,
    user: UserModel = Depends(get_current_user),
    svc: WishlistService = Depends(get_service),
):
    try:
        return {"added": svc.toggle(user.id, payload.product_id)}
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))

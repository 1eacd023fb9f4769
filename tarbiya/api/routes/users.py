from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...schemas.account import AccountOut, ProfileUpdate, PremiumUpdate
from ...models.account import Account
from ...services.account_service import update_profile, set_premium
from ..deps import get_db, get_current_account

router = APIRouter()


@router.get("/me", response_model=AccountOut)
def me(current: Account = Depends(get_current_account)):
    return AccountOut.model_validate(current)


# Completing the profile flips is_profile_complete
@router.put("/me/profile", response_model=AccountOut)
def update_my_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
):
    account = update_profile(
        db,
        account_id=current.id,
        name=payload.name,
        birth_date=payload.birth_date,
        gender=payload.gender,
        photo_url=payload.photo_url,
    )
    return AccountOut.model_validate(account)


@router.put("/me/premium", response_model=AccountOut)
def update_my_premium(
    payload: PremiumUpdate,
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
):
    account = set_premium(db, account_id=current.id, is_premium=payload.is_premium)
    return AccountOut.model_validate(account)

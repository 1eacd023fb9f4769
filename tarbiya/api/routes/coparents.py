from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...schemas.account import AccountPublicOut
from ...schemas.common import MessageOut
from ...schemas.pairing import PairIn, PairOut, UnpairIn
from ...services.pairing_service import pair, unpair, list_paired
from ...models.account import Account
from ..deps import get_db, get_current_account
router = APIRouter()

@router.get("", response_model=list[AccountPublicOut])
def my_coparents(db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    return list_paired(db, current.id)

@router.post("/pair", response_model=PairOut)
def pair_with_code(payload: PairIn, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    partner = pair(db, account_id=current.id, invite_code=payload.invite_code)
    return PairOut(detail="Co-parent paired", coparent=AccountPublicOut.model_validate(partner))

@router.post("/unpair", response_model=MessageOut)
def unpair_coparent(payload: UnpairIn, db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    unpair(db, account_id=current.id, partner_id=payload.target_account_id)
    return MessageOut(detail="Co-parent unpaired")

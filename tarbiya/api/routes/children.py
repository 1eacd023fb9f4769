from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...schemas.child import ChildCreate, ChildUpdate, ChildSettingsUpdate, ChildReorder, ChildOut
from ...schemas.common import MessageOut
from ...services.child_service import (
    list_visible_children,
    create_child,
    get_visible_child,
    update_child,
    update_child_settings,
    delete_child,
    reorder_children,
)
from ...models.account import Account
from ..deps import get_db, get_current_account

router = APIRouter()


@router.get("", response_model=list[ChildOut])
def my_children(db: Session = Depends(get_db), current: Account = Depends(get_current_account)):
    return [ChildOut.model_validate(c) for c in list_visible_children(db, account_id=current.id)]


@router.post("", response_model=ChildOut, status_code=201)
def add_child(
    payload: ChildCreate,
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
):
    child = create_child(
        db,
        owner_id=current.id,
        name=payload.name,
        birth_date=payload.birth_date,
        gender=payload.gender,
        photo_uri=payload.photo_uri,
        card_color=payload.card_color,
        invited_member_ids=payload.invited_member_ids,
    )
    return ChildOut.model_validate(child)


@router.post("/reorder", response_model=MessageOut)
def reorder(
    payload: ChildReorder,
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
):
    reorder_children(db, account_id=current.id, ordered_ids=payload.ordered_ids)
    return MessageOut(detail="Order updated")


# Any member may edit or delete; non-members get a 404 as if the child did not exist
@router.put("/{child_id}", response_model=ChildOut)
def edit_child(
    child_id: str,
    payload: ChildUpdate,
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
):
    get_visible_child(db, child_id=child_id, account_id=current.id)
    child = update_child(db, child_id, payload.model_dump(exclude_unset=True))
    return ChildOut.model_validate(child)


@router.delete("/{child_id}", response_model=MessageOut)
def remove_child(
    child_id: str,
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
):
    get_visible_child(db, child_id=child_id, account_id=current.id)
    delete_child(db, child_id)
    return MessageOut(detail="Child removed")


@router.patch("/{child_id}/settings", response_model=ChildOut)
def edit_settings(
    child_id: str,
    payload: ChildSettingsUpdate,
    db: Session = Depends(get_db),
    current: Account = Depends(get_current_account),
):
    get_visible_child(db, child_id=child_id, account_id=current.id)
    child = update_child_settings(db, child_id, payload.model_dump(exclude_unset=True), account_id=current.id)
    return ChildOut.model_validate(child)

from datetime import date
import logging
from typing import Any, Iterable

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import InvalidOperation, NotFound, QuotaExceeded
from ..models.account import Account
from ..models.child import Child, ChildMember
from ..models.activity import ActivityCategory
from .activity_service import add_activity_log
from .pairing_service import are_paired

logger = logging.getLogger(__name__)

# Fields a member may change through update_child
CHILD_FIELDS = ("name", "birth_date", "gender", "photo_uri", "card_color")

def _visible_query(account_id: str):
    member_of = select(ChildMember.child_id).where(ChildMember.account_id == account_id)
    # owner_id covers rows whose owner membership row is missing
    return select(Child).where(or_(Child.id.in_(member_of), Child.owner_id == account_id))

def list_visible_children(db: Session, *, account_id: str) -> list[Child]:
    q = _visible_query(account_id).order_by(Child.created_at.desc())
    return list(db.execute(q).scalars())

def get_child(db: Session, child_id: str) -> Child:
    child = db.get(Child, child_id)
    if not child:
        raise NotFound(f"Child {child_id} not found")
    return child

def is_member(db: Session, *, child_id: str, account_id: str) -> bool:
    q = _visible_query(account_id).where(Child.id == child_id)
    return db.execute(q).first() is not None

def get_visible_child(db: Session, *, child_id: str, account_id: str) -> Child:
    """Load a child the account can see. Hidden children are reported as missing."""
    if not is_member(db, child_id=child_id, account_id=account_id):
        raise NotFound(f"Child {child_id} not found")
    return get_child(db, child_id)

def count_owned(db: Session, *, owner_id: str) -> int:
    return db.execute(select(func.count(Child.id)).where(Child.owner_id == owner_id)).scalar_one()

def _membership_list(owner_id: str, invited: Iterable[str]) -> list[str]:
    ids = [owner_id]
    for account_id in invited:
        if account_id not in ids:
            ids.append(account_id)
    return ids

def create_child(
    db: Session, *,
    owner_id: str,
    name: str,
    birth_date: date,
    gender: str | None = None,
    photo_uri: str | None = None,
    card_color: str | None = None,
    invited_member_ids: Iterable[str] = (),
) -> Child:
    owner = db.get(Account, owner_id)
    if not owner:
        raise NotFound(f"Account {owner_id} not found")

    if not owner.is_premium:
        owned = count_owned(db, owner_id=owner_id)
        if owned >= settings.FREE_CHILD_LIMIT:
            logger.warning(f"Child limit reached for account {owner_id}: {owned}/{settings.FREE_CHILD_LIMIT}")
            raise QuotaExceeded(
                "Child limit reached. Upgrade to premium for unlimited children",
                current_count=owned,
                max_allowed=settings.FREE_CHILD_LIMIT,
            )

    member_ids = _membership_list(owner_id, invited_member_ids)
    for account_id in member_ids[1:]:
        if not db.get(Account, account_id):
            raise NotFound(f"Account {account_id} not found")
        if not are_paired(db, owner_id, account_id):
            raise InvalidOperation(f"Account {account_id} is not a paired co-parent", error_code="NOT_PAIRED")

    try:
        child = Child(
            owner_id=owner_id,
            name=name,
            birth_date=birth_date,
            gender=gender,
            photo_uri=photo_uri,
            card_color=card_color,
        )
        child.members = [ChildMember(account_id=a, position=i) for i, a in enumerate(member_ids)]
        db.add(child)
        db.commit()
        db.refresh(child)
    except Exception as e:
        logger.error(f"Error creating child for account {owner_id}: {str(e)}", exc_info=True)
        db.rollback()
        raise
    logger.info(f"Child created: id={child.id}, owner={owner_id}, members={member_ids}")
    return child

def add_member(db: Session, *, child_id: str, account_id: str, commit: bool = True) -> bool:
    """Merge ``account_id`` into the child's members. Returns False when it already was one."""
    child = get_child(db, child_id)
    if account_id in child.member_ids:
        return False
    position = max((m.position for m in child.members), default=-1) + 1
    child.members.append(ChildMember(account_id=account_id, position=position))
    if commit:
        db.commit()
    logger.info(f"Account {account_id} joined child {child_id}")
    return True

def update_child(db: Session, child_id: str, patch: dict[str, Any], *, commit: bool = True) -> Child:
    child = get_child(db, child_id)
    for field, value in patch.items():
        if field not in CHILD_FIELDS:
            continue
        if value is None and field in ("name", "birth_date"):
            continue
        setattr(child, field, value)
    if commit:
        db.commit()
        db.refresh(child)
    return child

def delete_child(db: Session, child_id: str) -> None:
    child = get_child(db, child_id)
    db.delete(child)
    db.commit()
    logger.info(f"Child {child_id} deleted")

def reorder_children(db: Session, *, account_id: str, ordered_ids: list[str]) -> None:
    children = {c.id: c for c in list_visible_children(db, account_id=account_id)}
    missing = [i for i in ordered_ids if i not in children]
    if missing:
        raise NotFound(f"Child {missing[0]} not found")
    for position, child_id in enumerate(ordered_ids):
        children[child_id].display_order = position
    db.commit()
    logger.info(f"Reordered {len(ordered_ids)} children for account {account_id}")

SETTINGS_FIELDS = (
    "salah_enabled",
    "fasting_enabled",
    "track_quran_today",
    "arabic_learned_letters",
    "has_harakat",
    "can_read_arabic",
    "can_write_arabic",
    "akhlaq_adab_checked",
)

# list settings whose new items are written to the child's journal
JOURNALED_LISTS = {
    "akhlaq_adab_checked": ActivityCategory.AKHLAQ,
    "arabic_learned_letters": ActivityCategory.ARABIC,
}

def update_child_settings(db: Session, child_id: str, patch: dict[str, Any], *, account_id: str) -> Child:
    """
    Apply dashboard settings. Omitted or null fields are left alone.

    Items newly added to the akhlaq checklist or the learned Arabic letters
    become journal entries, committed together with the settings.
    """
    child = get_child(db, child_id)
    try:
        for field, value in patch.items():
            if field not in SETTINGS_FIELDS or value is None:
                continue
            category = JOURNALED_LISTS.get(field)
            if category:
                value = list(dict.fromkeys(value))
                old = set(getattr(child, field) or [])
                for item in value:
                    if item not in old:
                        add_activity_log(
                            db, child_id=child_id, account_id=account_id, text=item, category=category, commit=False
                        )
            setattr(child, field, value)
        db.commit()
        db.refresh(child)
    except Exception as e:
        logger.error(f"Error updating settings for child {child_id}: {str(e)}", exc_info=True)
        db.rollback()
        raise
    return child

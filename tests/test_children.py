from datetime import datetime, timedelta, timezone

import pytest

from tarbiya.core.errors import InvalidOperation, NotFound, QuotaExceeded
from tarbiya.models.child import ChildMember
from tarbiya.services.child_service import (
    add_member,
    create_child,
    delete_child,
    get_visible_child,
    list_visible_children,
    reorder_children,
    update_child,
)
from tarbiya.services.pairing_service import pair

from conftest import BIRTHDAY


def test_child_visible_only_to_members(db, make_account):
    a, b = make_account(), make_account()

    create_child(db, owner_id=a.id, name="Aisha", birth_date=BIRTHDAY)

    visible = list_visible_children(db, account_id=a.id)
    assert [c.name for c in visible] == ["Aisha"]
    assert visible[0].member_ids == [a.id]
    assert list_visible_children(db, account_id=b.id) == []


def test_invited_members_are_deduplicated_with_owner_first(db, make_account):
    a, b, c = make_account(), make_account(), make_account()
    pair(db, account_id=a.id, invite_code=b.invite_code)
    pair(db, account_id=a.id, invite_code=c.invite_code)

    child = create_child(
        db,
        owner_id=a.id,
        name="Yusuf",
        birth_date=BIRTHDAY,
        invited_member_ids=[c.id, a.id, b.id, c.id],
    )

    assert child.member_ids == [a.id, c.id, b.id]
    assert [x.name for x in list_visible_children(db, account_id=b.id)] == ["Yusuf"]


def test_invited_members_must_be_paired(db, make_account):
    a, stranger = make_account(), make_account()

    with pytest.raises(InvalidOperation):
        create_child(db, owner_id=a.id, name="Aisha", birth_date=BIRTHDAY, invited_member_ids=[stranger.id])
    with pytest.raises(NotFound):
        create_child(db, owner_id=a.id, name="Aisha", birth_date=BIRTHDAY, invited_member_ids=["missing"])

    assert list_visible_children(db, account_id=a.id) == []


def test_free_accounts_are_limited_to_one_child(db, make_account):
    a = make_account()
    create_child(db, owner_id=a.id, name="Aisha", birth_date=BIRTHDAY)

    with pytest.raises(QuotaExceeded) as exc:
        create_child(db, owner_id=a.id, name="Yusuf", birth_date=BIRTHDAY)
    assert exc.value.current_count == 1
    assert exc.value.max_allowed == 1


def test_shared_children_do_not_count_against_quota(db, make_account):
    a, b = make_account(), make_account()
    pair(db, account_id=a.id, invite_code=b.invite_code)
    create_child(db, owner_id=a.id, name="Aisha", birth_date=BIRTHDAY, invited_member_ids=[b.id])

    own = create_child(db, owner_id=b.id, name="Yusuf", birth_date=BIRTHDAY)

    assert own.owner_id == b.id
    assert {c.name for c in list_visible_children(db, account_id=b.id)} == {"Aisha", "Yusuf"}


def test_premium_accounts_have_no_limit(db, make_account):
    a = make_account(premium=True)
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i, name in enumerate(("Aisha", "Yusuf", "Maryam")):
        child = create_child(db, owner_id=a.id, name=name, birth_date=BIRTHDAY)
        child.created_at = start + timedelta(minutes=i)
    db.commit()

    # newest first
    assert [c.name for c in list_visible_children(db, account_id=a.id)] == ["Maryam", "Yusuf", "Aisha"]


def test_owner_sees_child_without_membership_row(db, make_account):
    a = make_account()
    child = create_child(db, owner_id=a.id, name="Aisha", birth_date=BIRTHDAY)
    db.query(ChildMember).filter(ChildMember.child_id == child.id).delete()
    db.commit()

    assert [c.id for c in list_visible_children(db, account_id=a.id)] == [child.id]


def test_add_member_is_idempotent(db, make_account):
    a, b = make_account(), make_account()
    child = create_child(db, owner_id=a.id, name="Aisha", birth_date=BIRTHDAY)

    assert add_member(db, child_id=child.id, account_id=b.id) is True
    assert add_member(db, child_id=child.id, account_id=b.id) is False
    assert add_member(db, child_id=child.id, account_id=a.id) is False

    db.refresh(child)
    assert child.member_ids == [a.id, b.id]
    assert [c.id for c in list_visible_children(db, account_id=b.id)] == [child.id]


def test_update_and_delete(db, make_account):
    a = make_account()
    child = create_child(db, owner_id=a.id, name="Aisha", birth_date=BIRTHDAY)

    updated = update_child(db, child.id, {"name": "Aisha B.", "card_color": "#AABBCC", "owner_id": "ignored", "birth_date": None})
    assert updated.name == "Aisha B."
    assert updated.card_color == "#AABBCC"
    assert updated.owner_id == a.id
    assert updated.birth_date == BIRTHDAY

    delete_child(db, child.id)
    assert list_visible_children(db, account_id=a.id) == []
    assert db.query(ChildMember).count() == 0
    with pytest.raises(NotFound):
        delete_child(db, child.id)


def test_get_visible_child_hides_other_families(db, make_account):
    a, b = make_account(), make_account()
    child = create_child(db, owner_id=a.id, name="Aisha", birth_date=BIRTHDAY)

    assert get_visible_child(db, child_id=child.id, account_id=a.id).id == child.id
    with pytest.raises(NotFound):
        get_visible_child(db, child_id=child.id, account_id=b.id)


def test_reorder(db, make_account):
    a, b = make_account(premium=True), make_account()
    first = create_child(db, owner_id=a.id, name="Aisha", birth_date=BIRTHDAY)
    second = create_child(db, owner_id=a.id, name="Yusuf", birth_date=BIRTHDAY)
    other = create_child(db, owner_id=b.id, name="Omar", birth_date=BIRTHDAY)

    reorder_children(db, account_id=a.id, ordered_ids=[second.id, first.id])
    db.refresh(first)
    db.refresh(second)
    assert (second.display_order, first.display_order) == (0, 1)

    with pytest.raises(NotFound):
        reorder_children(db, account_id=a.id, ordered_ids=[other.id])

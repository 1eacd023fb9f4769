import pytest

from tarbiya.core.errors import InvalidOperation
from tarbiya.models.account import Account
from tarbiya.services import invite_codes
from tarbiya.services.invite_codes import ALPHABET, generate_code, generate_unique_invite_code


def test_alphabet_has_32_unambiguous_symbols():
    assert len(ALPHABET) == 32
    assert len(set(ALPHABET)) == 32
    for confusable in "0O1I":
        assert confusable not in ALPHABET


def test_generated_code_shape():
    for _ in range(200):
        code = generate_code()
        assert len(code) == 6
        assert set(code) <= set(ALPHABET)


def test_codes_stay_unique_across_many_accounts(db):
    seen = set()
    for i in range(2000):
        code = generate_unique_invite_code(db)
        assert code not in seen
        seen.add(code)
        db.add(Account(email=f"user{i}@example.com", hashed_password="x", invite_code=code))
        db.flush()
    db.commit()
    assert db.query(Account).count() == 2000


def test_skips_codes_already_taken(db, monkeypatch):
    db.add(Account(email="taken@example.com", hashed_password="x", invite_code="AAAAAA"))
    db.commit()
    candidates = iter(["AAAAAA", "AAAAAA", "BBBBBB"])
    monkeypatch.setattr(invite_codes, "generate_code", lambda n=None: next(candidates))

    assert generate_unique_invite_code(db) == "BBBBBB"


def test_falls_back_to_extra_digit_after_exhausting_attempts(db, monkeypatch):
    calls = []

    def taken_until_fallback(session, code):
        calls.append(code)
        return len(code) == 6

    monkeypatch.setattr(invite_codes, "code_exists", taken_until_fallback)
    code = generate_unique_invite_code(db)

    assert len(calls) == 11
    assert len(code) == 7
    assert set(code[:6]) <= set(ALPHABET)
    assert code[6].isdigit()


def test_fallback_codes_are_checked_for_collisions(db, monkeypatch):
    db.add(Account(email="taken@example.com", hashed_password="x", invite_code="AAAAAA2"))
    db.commit()
    candidates = iter(["AAAAAA"] * 10 + ["AAAAAA", "BBBBBB"])
    digits = iter([2, 3])
    monkeypatch.setattr(invite_codes, "generate_code", lambda n=None: next(candidates))
    monkeypatch.setattr(invite_codes.secrets, "randbelow", lambda n: next(digits))
    db.add(Account(email="six@example.com", hashed_password="x", invite_code="AAAAAA"))
    db.commit()

    assert generate_unique_invite_code(db) == "BBBBBB3"


def test_gives_up_when_fallback_codes_collide_too(db, monkeypatch):
    monkeypatch.setattr(invite_codes, "code_exists", lambda session, code: True)

    with pytest.raises(InvalidOperation) as exc:
        generate_unique_invite_code(db)
    assert exc.value.error_code == "INVITE_CODE_EXHAUSTED"

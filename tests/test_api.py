from tarbiya.services.security import create_access_token

from conftest import signup


def _no_secrets(account: dict) -> None:
    assert "hashed_password" not in account
    assert "password" not in account


def test_signup_and_me(client):
    user = signup(client, "new@example.com")
    _no_secrets(user["account"])
    assert len(user["account"]["invite_code"]) == 6
    assert user["account"]["paired_account_ids"] == []

    me = client.get("/users/me", headers=user["headers"])
    assert me.status_code == 200
    _no_secrets(me.json())
    assert me.json()["id"] == user["account"]["id"]


def test_duplicate_signup(client, parent_a):
    resp = client.post("/auth/signup", json={"email": "A@example.com", "password": "secret123"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "EMAIL_TAKEN"


def test_wrong_password(client, parent_a):
    resp = client.post("/auth/token", data={"username": "a@example.com", "password": "nope"})
    assert resp.status_code == 401


def test_refresh_token(client):
    client.post("/auth/signup", json={"email": "r@example.com", "password": "secret123"})
    tokens = client.post("/auth/token", data={"username": "r@example.com", "password": "secret123"}).json()

    resp = client.post("/auth/refresh", params={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 200
    rotated = resp.json()
    assert rotated["access_token"]
    assert rotated["refresh_token"] != tokens["refresh_token"]
    assert client.get("/users/me", headers={"Authorization": f"Bearer {rotated['access_token']}"}).status_code == 200

    assert client.post("/auth/refresh", params={"refresh_token": "bogus"}).status_code == 401


def test_reused_refresh_token_revokes_the_chain(client):
    client.post("/auth/signup", json={"email": "r@example.com", "password": "secret123"})
    first = client.post("/auth/token", data={"username": "r@example.com", "password": "secret123"}).json()["refresh_token"]
    second = client.post("/auth/refresh", params={"refresh_token": first}).json()["refresh_token"]

    assert client.post("/auth/refresh", params={"refresh_token": first}).status_code == 401
    # the replacement issued from the reused token is dead too
    assert client.post("/auth/refresh", params={"refresh_token": second}).status_code == 401


def test_logout_revokes_refresh_token(client):
    client.post("/auth/signup", json={"email": "r@example.com", "password": "secret123"})
    refresh_token = client.post("/auth/token", data={"username": "r@example.com", "password": "secret123"}).json()["refresh_token"]

    assert client.post("/auth/logout", params={"refresh_token": refresh_token}).status_code == 200
    assert client.post("/auth/refresh", params={"refresh_token": refresh_token}).status_code == 401


def test_refresh_token_is_not_a_bearer_token(client):
    client.post("/auth/signup", json={"email": "r@example.com", "password": "secret123"})
    refresh_token = client.post("/auth/token", data={"username": "r@example.com", "password": "secret123"}).json()["refresh_token"]

    resp = client.get("/users/me", headers={"Authorization": f"Bearer {refresh_token}"})
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


def test_requires_token(client):
    assert client.get("/users/me").status_code == 401
    assert client.get("/children").status_code == 401
    assert client.get("/users/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_profile_and_premium(client, parent_a):
    headers = parent_a["headers"]
    resp = client.put(
        "/users/me/profile",
        json={"name": "Fatima", "birth_date": "1990-03-04", "gender": "female"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["is_profile_complete"] is True
    assert resp.json()["name"] == "Fatima"

    resp = client.put("/users/me/premium", json={"is_premium": True}, headers=headers)
    assert resp.json()["is_premium"] is True


def test_pair_responses(client, paired):
    a, b = paired

    coparents = client.get("/coparents", headers=a["headers"]).json()
    assert [c["id"] for c in coparents] == [b["account"]["id"]]
    for c in coparents:
        _no_secrets(c)

    me = client.get("/users/me", headers=b["headers"]).json()
    assert me["paired_account_ids"] == [a["account"]["id"]]
    assert me["primary_paired_id"] == a["account"]["id"]


def test_pair_body_has_no_secrets(client, parent_a, parent_b):
    resp = client.post("/coparents/pair", json={"invite_code": parent_b["account"]["invite_code"]}, headers=parent_a["headers"])
    assert resp.status_code == 200
    _no_secrets(resp.json()["coparent"])
    assert resp.json()["coparent"]["id"] == parent_b["account"]["id"]


def test_pair_errors(client, parent_a):
    headers = parent_a["headers"]
    own = parent_a["account"]["invite_code"]
    unknown = "ZZZZZZ" if own != "ZZZZZZ" else "YYYYYY"

    assert client.post("/coparents/pair", json={"invite_code": "AB"}, headers=headers).status_code == 400
    assert client.post("/coparents/pair", json={"invite_code": unknown}, headers=headers).status_code == 404
    resp = client.post("/coparents/pair", json={"invite_code": own}, headers=headers)
    assert resp.status_code == 409
    assert resp.json()["code"] == "SELF_PAIRING"


def test_unpair_is_idempotent(client, paired):
    a, b = paired
    body = {"target_account_id": b["account"]["id"]}

    assert client.post("/coparents/unpair", json=body, headers=a["headers"]).status_code == 200
    assert client.post("/coparents/unpair", json=body, headers=a["headers"]).status_code == 200
    assert client.get("/coparents", headers=b["headers"]).json() == []


def test_children_flow(client, paired):
    a, b = paired
    resp = client.post(
        "/children",
        json={"name": "Aisha", "birth_date": "2019-04-02", "invited_member_ids": [b["account"]["id"]]},
        headers=a["headers"],
    )
    assert resp.status_code == 201
    child = resp.json()
    assert child["member_ids"] == [a["account"]["id"], b["account"]["id"]]

    assert [c["id"] for c in client.get("/children", headers=b["headers"]).json()] == [child["id"]]

    resp = client.put(f"/children/{child['id']}", json={"card_color": "#00AA00"}, headers=b["headers"])
    assert resp.status_code == 200
    assert resp.json()["card_color"] == "#00AA00"
    assert resp.json()["name"] == "Aisha"

    # free accounts own one child
    resp = client.post("/children", json={"name": "Yusuf", "birth_date": "2021-01-01"}, headers=a["headers"])
    assert resp.status_code == 403
    assert resp.json()["code"] == "QUOTA_EXCEEDED"

    assert client.delete(f"/children/{child['id']}", headers=b["headers"]).status_code == 200
    assert client.get("/children", headers=a["headers"]).json() == []


def test_children_hidden_from_non_members(client, parent_a, parent_b):
    child = client.post("/children", json={"name": "Aisha", "birth_date": "2019-04-02"}, headers=parent_a["headers"]).json()

    assert client.put(f"/children/{child['id']}", json={"name": "X"}, headers=parent_b["headers"]).status_code == 404
    assert client.delete(f"/children/{child['id']}", headers=parent_b["headers"]).status_code == 404
    assert client.get(f"/children/{child['id']}/quran", headers=parent_b["headers"]).status_code == 404


def test_invite_unpaired_member_is_rejected(client, parent_a, parent_b):
    resp = client.post(
        "/children",
        json={"name": "Aisha", "birth_date": "2019-04-02", "invited_member_ids": [parent_b["account"]["id"]]},
        headers=parent_a["headers"],
    )
    assert resp.status_code == 409
    assert resp.json()["code"] == "NOT_PAIRED"


def test_pending_approval_over_http(client, paired):
    a, b = paired
    child = client.post("/children", json={"name": "Aisha", "birth_date": "2019-04-02"}, headers=a["headers"]).json()

    resp = client.post(
        "/pending",
        json={"target_account_id": a["account"]["id"], "child_id": child["id"], "action": "add_child"},
        headers=b["headers"],
    )
    assert resp.status_code == 201
    pending = resp.json()
    assert pending["status"] == "pending"

    assert [p["id"] for p in client.get("/pending/outgoing", headers=b["headers"]).json()] == [pending["id"]]
    assert [p["id"] for p in client.get("/pending", headers=a["headers"]).json()] == [pending["id"]]

    # only the target decides
    resp = client.post(f"/pending/{pending['id']}/approve", headers=b["headers"])
    assert resp.status_code == 403
    assert resp.json()["code"] == "NOT_PERMITTED"

    resp = client.post(f"/pending/{pending['id']}/approve", headers=a["headers"])
    assert resp.status_code == 200
    assert resp.json()["status"] == "approved"

    assert [c["id"] for c in client.get("/children", headers=b["headers"]).json()] == [child["id"]]
    assert client.get("/pending", headers=a["headers"]).json() == []

    resp = client.post(f"/pending/{pending['id']}/reject", headers=a["headers"])
    assert resp.json()["status"] == "approved"


def test_pending_rejects_a_child_outside_the_pair(client, paired):
    a, b = paired
    c = signup(client, "c@example.com")
    child = client.post("/children", json={"name": "Yusuf", "birth_date": "2020-06-01"}, headers=c["headers"]).json()

    resp = client.post(
        "/pending",
        json={"target_account_id": a["account"]["id"], "child_id": child["id"], "action": "add_child"},
        headers=b["headers"],
    )
    assert resp.status_code == 404
    assert client.get("/pending", headers=a["headers"]).json() == []
    assert client.get("/children", headers=b["headers"]).json() == []
    assert client.get("/children", headers=a["headers"]).json() == []


def test_pending_bad_action(client, paired):
    a, b = paired
    resp = client.post(
        "/pending",
        json={"target_account_id": a["account"]["id"], "action": "adopt"},
        headers=b["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "UNKNOWN_ACTION"
    assert client.post("/pending/missing/approve", headers=a["headers"]).status_code == 404


def test_notes_over_http(client, paired):
    a, b = paired
    resp = client.post("/notes", json={"text": "Eid clothes", "tags": ["eid"]}, headers=a["headers"])
    assert resp.status_code == 201
    note = resp.json()

    assert [n["id"] for n in client.get("/notes", headers=b["headers"]).json()] == [note["id"]]

    resp = client.post(f"/notes/{note['id']}/comments", json={"text": "Size 6"}, headers=b["headers"])
    assert resp.status_code == 201
    comment = resp.json()
    assert client.delete(f"/comments/{comment['id']}", headers=a["headers"]).status_code == 403
    assert client.delete(f"/comments/{comment['id']}", headers=b["headers"]).status_code == 200

    assert client.post(f"/notes/{note['id']}/archive", headers=b["headers"]).json()["archived"] is True
    assert client.get("/notes", headers=a["headers"]).json() == []
    assert len(client.get("/notes", params={"archived": True}, headers=a["headers"]).json()) == 1


def test_activity_logs(client, parent_a):
    headers = parent_a["headers"]
    child = client.post("/children", json={"name": "Aisha", "birth_date": "2019-04-02"}, headers=headers).json()
    base = f"/children/{child['id']}"

    empty = client.get(f"{base}/prayers/2024-03-11", headers=headers).json()
    assert not any(empty[p] for p in ("fajr", "dhuhr", "asr", "maghrib", "isha"))

    resp = client.put(f"{base}/prayers/2024-03-11", json={"fajr": True, "isha": True}, headers=headers)
    assert resp.status_code == 200
    saved = client.get(f"{base}/prayers/2024-03-11", headers=headers).json()
    assert saved["fajr"] and saved["isha"] and not saved["asr"]

    assert client.get(f"{base}/fasting/2024-03-11", headers=headers).json()["status"] == "no"
    resp = client.put(f"{base}/fasting/2024-03-11", json={"status": "partial", "note": "until dhuhr"}, headers=headers)
    assert resp.json()["status"] == "partial"
    assert client.put(f"{base}/fasting/2024-03-11", json={"status": "sometimes"}, headers=headers).status_code == 422

    resp = client.put(f"{base}/quran/112", json={"status": "memorized"}, headers=headers)
    assert resp.status_code == 200
    assert client.put(f"{base}/quran/115", json={"status": "learning"}, headers=headers).status_code == 422
    assert client.put(f"{base}/quran/0", json={"status": "learning"}, headers=headers).status_code == 422
    progress = client.get(f"{base}/quran", headers=headers).json()
    assert [(p["surah_number"], p["status"]) for p in progress] == [(112, "memorized")]


def test_expired_access_token(client, parent_a):
    token = create_access_token(parent_a["account"]["id"], minutes=-1)
    resp = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token expired"


def test_tasks_over_http(client, paired):
    a, b = paired
    child = client.post("/children", json={"name": "Aisha", "birth_date": "2019-04-02"}, headers=a["headers"]).json()
    base = f"/children/{child['id']}"

    resp = client.post(
        f"{base}/tasks",
        json={"name": "Swimming", "frequency": "weekly", "days": [0], "start_time": "16:00:00"},
        headers=a["headers"],
    )
    assert resp.status_code == 201, resp.text
    task = resp.json()
    assert client.post(f"{base}/tasks", json={"name": "Swim", "frequency": "weekly"}, headers=a["headers"]).status_code == 400

    assert [t["name"] for t in client.get(f"{base}/tasks", params={"day": "2024-03-11"}, headers=a["headers"]).json()] == ["Swimming"]
    assert client.get(f"{base}/tasks", params={"day": "2024-03-12"}, headers=a["headers"]).json() == []

    resp = client.put(f"{base}/completions/2024-03-11", json={"task_id": task["id"], "note": "50m"}, headers=a["headers"])
    assert resp.status_code == 200
    assert resp.json()["completed"] is True
    assert len(client.get(f"{base}/completions/2024-03-11", headers=a["headers"]).json()) == 1

    # B is paired but not a member of this child
    assert client.get(f"{base}/tasks", headers=b["headers"]).status_code == 404
    assert client.put(f"/tasks/{task['id']}", json={"name": "x"}, headers=b["headers"]).status_code == 404
    assert client.delete(f"/tasks/{task['id']}", headers=b["headers"]).status_code == 404

    assert client.put(f"/tasks/{task['id']}", json={"name": "Swimming club"}, headers=a["headers"]).json()["name"] == "Swimming club"
    assert client.delete(f"/tasks/{task['id']}", headers=a["headers"]).status_code == 200
    assert client.get(f"{base}/tasks", headers=a["headers"]).json() == []


def test_child_settings_and_journal(client, parent_a):
    headers = parent_a["headers"]
    child = client.post("/children", json={"name": "Aisha", "birth_date": "2019-04-02"}, headers=headers).json()
    base = f"/children/{child['id']}"
    assert child["salah_enabled"] is True and child["akhlaq_adab_checked"] == []

    resp = client.patch(
        f"{base}/settings",
        json={"salah_enabled": False, "akhlaq_adab_checked": ["salam"], "arabic_learned_letters": ["alif"]},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["salah_enabled"] is False
    assert resp.json()["fasting_enabled"] is True

    resp = client.post(f"{base}/activity", json={"text": "Went to the park", "day": "2024-03-11"}, headers=headers)
    assert resp.status_code == 201
    assert resp.json()["category"] == "general"
    assert client.post(f"{base}/activity", json={"text": ""}, headers=headers).status_code == 422

    journal = client.get(f"{base}/activity", headers=headers).json()
    assert sorted(e["text"] for e in journal) == ["Went to the park", "alif", "salam"]
    feed = client.get(f"{base}/education-feed", headers=headers).json()
    assert sorted((e["category"], e["text"]) for e in feed) == [("akhlaq", "salam"), ("arabic", "alif")]


def test_quran_daily_aqidah_and_akhlaq_over_http(client, parent_a):
    headers = parent_a["headers"]
    child = client.post("/children", json={"name": "Aisha", "birth_date": "2019-04-02"}, headers=headers).json()
    base = f"/children/{child['id']}"

    assert client.get(f"{base}/quran-daily/2024-03-11", headers=headers).json()["completed"] is False
    client.put(f"{base}/quran-daily/2024-03-11", json={"completed": True, "note": "Al-Fatiha"}, headers=headers)
    assert client.get(f"{base}/quran-daily/2024-03-11", headers=headers).json()["note"] == "Al-Fatiha"

    resp = client.put(f"{base}/aqidah/tawhid", json={"checked": True}, headers=headers)
    assert resp.status_code == 200 and resp.json()["checked"] is True
    assert [r["item_key"] for r in client.get(f"{base}/aqidah", headers=headers).json()] == ["tawhid"]

    resp = client.put(f"{base}/akhlaq-notes/sabr", json={"note": "very patient"}, headers=headers)
    assert resp.json()["note"] == "very patient"
    resp = client.put(f"{base}/akhlaq-notes/sabr", json={"note": " "}, headers=headers)
    assert resp.json() == {"detail": "Note removed"}
    assert client.get(f"{base}/akhlaq-notes", headers=headers).json() == []


def test_tracking_is_hidden_from_non_members(client, paired):
    a, b = paired
    child = client.post("/children", json={"name": "Aisha", "birth_date": "2019-04-02"}, headers=a["headers"]).json()
    base = f"/children/{child['id']}"

    for method, path, body in [
        ("patch", f"{base}/settings", {"salah_enabled": False}),
        ("get", f"{base}/activity", None),
        ("post", f"{base}/activity", {"text": "hello"}),
        ("get", f"{base}/education-feed", None),
        ("get", f"{base}/quran-daily/2024-03-11", None),
        ("put", f"{base}/aqidah/tawhid", {"checked": True}),
        ("put", f"{base}/akhlaq-notes/sabr", {"note": "x"}),
    ]:
        kwargs = {"json": body} if body is not None else {}
        resp = client.request(method.upper(), path, headers=b["headers"], **kwargs)
        assert resp.status_code == 404, (method, path)

    assert client.get(f"{base}/activity", headers=a["headers"]).json() == []
    assert client.get(f"/children/{child['id']}/aqidah", headers=a["headers"]).json() == []

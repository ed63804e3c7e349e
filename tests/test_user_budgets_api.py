from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import InMemoryStore


def test_grant_then_revoke_toggles_ownership(client: TestClient, register, make_budget) -> None:
    alice = register("alice")
    bob = register("bob")
    budget_id = make_budget(alice)

    assert client.get(f"/budgets/{budget_id}", headers=bob.headers).status_code == 401

    granted = client.post("/user_budgets", json={"userid": bob.id, "budgetid": budget_id}, headers=alice.headers)
    assert granted.status_code == 201
    assert granted.json() == {"userid": bob.id, "budgetid": budget_id}
    assert client.get(f"/budgets/{budget_id}", headers=bob.headers).status_code == 200

    revoked = client.delete(f"/user_budgets?userid={bob.id}&budgetid={budget_id}", headers=alice.headers)
    assert revoked.status_code == 200
    assert revoked.json() == {"ok": True, "userid": bob.id, "budgetid": budget_id}
    assert client.get(f"/budgets/{budget_id}", headers=bob.headers).status_code == 401


def test_grant_requires_requester_to_own_budget(
    client: TestClient,
    store: InMemoryStore,
    register,
    make_budget,
) -> None:
    alice = register("alice")
    mallory = register("mallory")
    budget_id = make_budget(alice)

    resp = client.post(
        "/user_budgets",
        json={"userid": mallory.id, "budgetid": budget_id},
        headers=mallory.headers,
    )

    assert resp.status_code == 401
    assert resp.json()["error"] == "unauthorized"
    assert (mallory.id, budget_id) not in store.associations


def test_grant_to_unknown_user_is_not_found(client: TestClient, register, make_budget) -> None:
    alice = register("alice")
    budget_id = make_budget(alice)

    resp = client.post("/user_budgets", json={"userid": 999, "budgetid": budget_id}, headers=alice.headers)

    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_duplicate_grant_conflicts(client: TestClient, register, make_budget) -> None:
    alice = register("alice")
    budget_id = make_budget(alice)

    resp = client.post("/user_budgets", json={"userid": alice.id, "budgetid": budget_id}, headers=alice.headers)

    assert resp.status_code == 409
    assert resp.json()["error"] == "conflict"


def test_revoke_requires_requester_to_own_budget(
    client: TestClient,
    store: InMemoryStore,
    register,
    make_budget,
) -> None:
    alice = register("alice")
    mallory = register("mallory")
    budget_id = make_budget(alice)

    resp = client.delete(f"/user_budgets?userid={alice.id}&budgetid={budget_id}", headers=mallory.headers)

    assert resp.status_code == 401
    assert (alice.id, budget_id) in store.associations


def test_revoke_missing_association_is_not_found(client: TestClient, register, make_budget) -> None:
    alice = register("alice")
    bob = register("bob")
    budget_id = make_budget(alice)

    resp = client.delete(f"/user_budgets?userid={bob.id}&budgetid={budget_id}", headers=alice.headers)

    assert resp.status_code == 404


def test_revoking_last_owner_leaves_budget_orphaned(
    client: TestClient,
    store: InMemoryStore,
    register,
    make_budget,
) -> None:
    alice = register("alice")
    budget_id = make_budget(alice)

    resp = client.delete(f"/user_budgets?userid={alice.id}&budgetid={budget_id}", headers=alice.headers)

    assert resp.status_code == 200
    assert budget_id in store.budgets
    assert client.get(f"/budgets/{budget_id}", headers=alice.headers).status_code == 401


def test_list_members(client: TestClient, register, make_budget) -> None:
    alice = register("alice")
    bob = register("bob")
    budget_id = make_budget(alice)
    client.post("/user_budgets", json={"userid": bob.id, "budgetid": budget_id}, headers=alice.headers)

    resp = client.get(f"/user_budgets?budgetid={budget_id}", headers=bob.headers)

    assert resp.status_code == 200
    assert resp.json() == {
        "budgetid": budget_id,
        "members": [{"userid": alice.id, "name": "alice"}, {"userid": bob.id, "name": "bob"}],
        "count": 2,
    }

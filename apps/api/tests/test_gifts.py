"""Tests for the gift endpoints and the gift presenter."""

import json
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from personal_crm.db.models import Contact, Gift
from personal_crm.services import gift_service


def _add_gift(db, contact, body="A book about lighthouses") -> Gift:
    gift = Gift(account_id=contact.account_id, contact_id=contact.id, body=body)
    db.add(gift)
    db.commit()
    return gift


# =============================================================================
# Presenter
# =============================================================================

def _transient_gift(updated_at=None) -> Gift:
    contact = Contact(
        id=9,
        account_id=3,
        first_name="Ada",
        last_name=None,
        gender=None,
        is_partial=True,
    )
    return Gift(
        id=7,
        account_id=3,
        contact_id=9,
        contact=contact,
        body="Fountain pen",
        created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        updated_at=updated_at,
    )


def test_gift_presenter_shape():
    payload = gift_service.to_gift_read(_transient_gift()).model_dump()

    assert payload == {
        "id": 7,
        "object": "gift",
        "body": "Fountain pen",
        "account": {"id": 3},
        "contact": {
            "id": 9,
            "object": "contact",
            "first_name": "Ada",
            "last_name": None,
            "gender": None,
            "is_partial": True,
            "account": {"id": 3},
        },
        "created_at": "2024-01-02T03:04:05Z",
        "updated_at": None,
    }


def test_gift_presenter_serializes_missing_updated_at_as_null():
    encoded = gift_service.to_gift_read(_transient_gift()).model_dump_json()

    decoded = json.loads(encoded)
    assert "updated_at" in decoded
    assert decoded["updated_at"] is None
    assert '"updated_at":null' in encoded


def test_gift_presenter_formats_updated_at():
    gift = _transient_gift(updated_at=datetime(2024, 2, 3, 4, 5, 6, tzinfo=timezone.utc))

    assert gift_service.to_gift_read(gift).updated_at == "2024-02-03T04:05:06Z"


# =============================================================================
# Endpoints
# =============================================================================

@pytest.mark.asyncio
async def test_create_gift_has_null_updated_at(authed_client: AsyncClient, test_contact, test_account):
    res = await authed_client.post("/gifts", json={"body": "Scarf", "contact_id": test_contact.id})
    assert res.status_code == 201, res.text

    data = res.json()["data"]
    assert data["object"] == "gift"
    assert data["body"] == "Scarf"
    assert data["account"] == {"id": test_account.id}
    assert data["contact"]["id"] == test_contact.id
    assert "updated_at" in data
    assert data["updated_at"] is None


@pytest.mark.asyncio
async def test_create_gift_with_foreign_contact_is_not_found(authed_client: AsyncClient, db, other_contact):
    res = await authed_client.post("/gifts", json={"body": "Scarf", "contact_id": other_contact.id})
    assert res.status_code == 404, res.text
    assert res.json()["error"]["error_code"] == 31
    assert db.query(Gift).count() == 0


@pytest.mark.asyncio
async def test_create_gift_validation(authed_client: AsyncClient):
    res = await authed_client.post("/gifts", json={"contact_id": "nope"})
    assert res.status_code == 400, res.text
    error = res.json()["error"]
    assert error["error_code"] == 32
    assert "The body field is required." in error["message"]
    assert "The contact id must be an integer." in error["message"]


@pytest.mark.asyncio
async def test_update_gift_sets_updated_at(authed_client: AsyncClient, db, test_contact, second_contact):
    gift = _add_gift(db, test_contact)

    res = await authed_client.put(
        f"/gifts/{gift.id}", json={"body": "Two books", "contact_id": second_contact.id}
    )
    assert res.status_code == 200, res.text
    data = res.json()["data"]
    assert data["body"] == "Two books"
    assert data["contact"]["id"] == second_contact.id
    assert data["updated_at"] is not None


@pytest.mark.asyncio
async def test_update_missing_gift_with_bad_body_is_not_found(authed_client: AsyncClient):
    res = await authed_client.put("/gifts/999", json={"body": ""})
    assert res.status_code == 404, res.text
    assert res.json()["error"]["error_code"] == 31


@pytest.mark.asyncio
async def test_update_gift_validates_body_after_lookup(authed_client: AsyncClient, db, test_contact):
    gift = _add_gift(db, test_contact)

    res = await authed_client.put(f"/gifts/{gift.id}", json={"body": "  ", "contact_id": 10**20})
    assert res.status_code == 400, res.text
    assert res.json()["error"]["message"] == [
        "The body field is required.",
        "The contact id may not be greater than 2147483647.",
    ]

    db.refresh(gift)
    assert gift.body == "A book about lighthouses"


@pytest.mark.asyncio
async def test_gift_ids_out_of_range(authed_client: AsyncClient):
    for path in ("/gifts/100000000000000000000", "/contacts/100000000000000000000/gifts"):
        res = await authed_client.get(path)
        assert res.status_code == 400, res.text
        assert res.json()["error"]["error_code"] == 32

    res = await authed_client.post("/gifts", json={"body": "Scarf", "contact_id": 10**20})
    assert res.status_code == 400, res.text
    assert res.json()["error"]["error_code"] == 32


@pytest.mark.asyncio
async def test_get_gift_from_other_account_is_not_found(authed_client: AsyncClient, db, other_contact):
    gift = _add_gift(db, other_contact)

    res = await authed_client.get(f"/gifts/{gift.id}")
    assert res.status_code == 404, res.text


@pytest.mark.asyncio
async def test_list_gifts_scoped_to_account(authed_client: AsyncClient, db, test_contact, other_contact):
    own = _add_gift(db, test_contact)
    _add_gift(db, other_contact)

    res = await authed_client.get("/gifts")
    assert res.status_code == 200, res.text
    assert [g["id"] for g in res.json()["data"]] == [own.id]


@pytest.mark.asyncio
async def test_list_gifts_for_contact(authed_client: AsyncClient, db, test_contact, second_contact, other_contact):
    own = _add_gift(db, test_contact)
    _add_gift(db, second_contact)

    res = await authed_client.get(f"/contacts/{test_contact.id}/gifts")
    assert res.status_code == 200, res.text
    assert [g["id"] for g in res.json()["data"]] == [own.id]

    foreign = await authed_client.get(f"/contacts/{other_contact.id}/gifts")
    assert foreign.status_code == 404, foreign.text


@pytest.mark.asyncio
async def test_delete_gift(authed_client: AsyncClient, db, test_contact):
    gift = _add_gift(db, test_contact)
    gift_id = gift.id

    res = await authed_client.delete(f"/gifts/{gift_id}")
    assert res.status_code == 200, res.text
    assert res.json() == {"deleted": True, "id": gift_id}

    assert (await authed_client.get(f"/gifts/{gift_id}")).status_code == 404

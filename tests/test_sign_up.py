"""
Public sign-up tests.
"""

from sqlalchemy import select

from internal_portal.core.security import verify_password
from internal_portal.models import User

SIGN_UP_URL = "/api/v1/users"


def sign_up_payload(**overrides) -> dict:
    payload = {
        "email": "Ann.Lee@Clinic.org",
        "password": "password123",
        "first_name": "Ann",
        "last_name": "Lee",
        "organization": "Happy Clinic",
        "organization_type": "primary_care_clinic",
        "address_1": "1 Main St",
        "city": "Austin",
        "state": "TX",
        "zip": "78701",
        "agree_to_terms": True,
    }
    payload.update(overrides)
    return payload


async def test_sign_up_stores_zero_providers_when_blank(anon_client, session_factory):
    resp = await anon_client.post(SIGN_UP_URL, json=sign_up_payload())

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["email"] == "ann.lee@clinic.org"
    assert body["num_providers"] == 0

    async with session_factory() as session:
        user = (await session.execute(select(User))).scalar_one()
    assert user.num_providers == 0
    assert user.agree_to_terms is True
    assert verify_password("password123", user.password_hash)


async def test_sign_up_empty_string_providers(anon_client):
    resp = await anon_client.post(SIGN_UP_URL, json=sign_up_payload(num_providers=""))

    assert resp.status_code == 201
    assert resp.json()["num_providers"] == 0


async def test_sign_up_numeric_string_providers(anon_client):
    resp = await anon_client.post(SIGN_UP_URL, json=sign_up_payload(num_providers="15"))

    assert resp.status_code == 201
    assert resp.json()["num_providers"] == 15


async def test_sign_up_reports_every_failure(anon_client, session_factory):
    resp = await anon_client.post(
        SIGN_UP_URL,
        json=sign_up_payload(zip="ABCDE", agree_to_terms=False, num_providers=-3, password="abc"),
    )

    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["code"] == "VALIDATION_FAILED"
    assert detail["errors"] == {
        "password": ["is too short (minimum is 6 characters)"],
        "num_providers": ["must be greater than or equal to 0"],
        "zip": ["is invalid"],
        "agree_to_terms": ["you must agree to the terms of service to create an account"],
    }

    async with session_factory() as session:
        assert (await session.execute(select(User))).first() is None


async def test_sign_up_duplicate_email(anon_client):
    first = await anon_client.post(SIGN_UP_URL, json=sign_up_payload())
    assert first.status_code == 201

    resp = await anon_client.post(SIGN_UP_URL, json=sign_up_payload(email="ann.lee@clinic.org"))

    assert resp.status_code == 422
    assert resp.json()["detail"]["errors"] == {"email": ["has already been taken"]}

"""
Internal organization endpoint tests.
"""

import uuid

ORGS_URL = "/api/v1/internal/organizations"


async def test_create_and_list(client):
    created = await client.post(
        ORGS_URL,
        json={"name": "Happy Clinic", "organization_type": "primary_care_clinic", "npi": "1234567893"},
    )
    assert created.status_code == 201, created.text
    assert created.json()["npi"] == "1234567893"

    await client.post(ORGS_URL, json={"name": "Alpha Health"})

    listed = await client.get(ORGS_URL)
    assert listed.json()["total"] == 2
    assert [o["name"] for o in listed.json()["organizations"]] == ["Alpha Health", "Happy Clinic"]


async def test_duplicate_npi_is_409(client, make_organization):
    await make_organization(npi="1234567893")

    resp = await client.post(ORGS_URL, json={"name": "Copy Clinic", "npi": "1234567893"})

    assert resp.status_code == 409
    assert resp.json()["detail"]["code"] == "NPI_TAKEN"


async def test_rejects_malformed_npi(client):
    resp = await client.post(ORGS_URL, json={"name": "Happy Clinic", "npi": "12345"})
    assert resp.status_code == 422


async def test_show_includes_registrations(client, make_organization):
    org = await make_organization()

    resp = await client.get(f"{ORGS_URL}/{org.id}")

    assert resp.status_code == 200
    assert resp.json()["name"] == "Happy Clinic"
    assert resp.json()["registered_organizations"] == []


async def test_show_unknown_is_404(client):
    resp = await client.get(f"{ORGS_URL}/{uuid.uuid4()}")
    assert resp.status_code == 404

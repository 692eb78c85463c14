"""
User directory tests.

Search scopes and filters, staff edits and the CSV export.
"""

import csv
import io
import re
import uuid
from datetime import UTC, datetime

from sqlalchemy import select

from internal_portal.core.config import settings
from internal_portal.models import User
from internal_portal.services.user_directory_service import CSV_COLUMNS, csv_filename

USERS_URL = "/api/v1/internal/users"


async def load_user(session_factory, user_id) -> User:
    async with session_factory() as session:
        result = await session.execute(select(User).where(User.id == user_id))
        return result.scalar_one()


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

class TestSearch:
    async def test_newest_first_in_table_layout(self, client, make_user):
        older = await make_user(created_at=datetime(2026, 3, 1, tzinfo=UTC))
        newer = await make_user(created_at=datetime(2026, 4, 1, tzinfo=UTC))

        resp = await client.get(USERS_URL)

        assert resp.status_code == 200
        body = resp.json()
        assert body["layout"] == "table_index"
        assert [u["id"] for u in body["users"]] == [str(newer.id), str(older.id)]
        assert body["total"] == 2
        assert body["page"] == 1

    async def test_keyword_is_case_insensitive(self, client, make_user):
        match = await make_user(last_name="Okafor")
        await make_user(last_name="Smith")

        resp = await client.get(USERS_URL, params={"keyword": "okaf"})

        assert [u["id"] for u in resp.json()["users"]] == [str(match.id)]

    async def test_requested_org_filter(self, client, make_user):
        match = await make_user(organization="Sunrise Health")
        await make_user(organization="Happy Clinic")

        resp = await client.get(USERS_URL, params={"requested_org": "sunrise"})

        assert [u["id"] for u in resp.json()["users"]] == [str(match.id)]

    async def test_keyword_wildcards_match_literally(self, client, make_user):
        await make_user(first_name="Zed", last_name="Q", organization="Q Clinic")

        percent = await client.get(USERS_URL, params={"keyword": "%"})
        underscore = await client.get(USERS_URL, params={"keyword": "_"})

        assert percent.json()["total"] == 0
        assert underscore.json()["total"] == 0

    async def test_requested_org_matches_percent_sign(self, client, make_user):
        match = await make_user(organization="50% Care")
        await make_user(organization="500 Care")

        resp = await client.get(USERS_URL, params={"requested_org": "50%"})

        assert [u["id"] for u in resp.json()["users"]] == [str(match.id)]

    async def test_created_date_range(self, client, make_user):
        await make_user(created_at=datetime(2026, 2, 1, 9, tzinfo=UTC))
        inside = await make_user(created_at=datetime(2026, 2, 15, 23, 30, tzinfo=UTC))
        await make_user(created_at=datetime(2026, 3, 1, 9, tzinfo=UTC))

        resp = await client.get(
            USERS_URL, params={"created_after": "2026-02-10", "created_before": "2026-02-15"}
        )

        assert [u["id"] for u in resp.json()["users"]] == [str(inside.id)]

    async def test_vendor_and_provider_scopes(self, client, make_user):
        vendor = await make_user(organization_type="health_it_vendor")
        provider = await make_user(organization_type="primary_care_clinic")
        untyped = await make_user(organization_type=None)

        vendors = await client.get(USERS_URL, params={"org_type": "vendor"})
        providers = await client.get(USERS_URL, params={"org_type": "provider"})

        assert {u["id"] for u in vendors.json()["users"]} == {str(vendor.id)}
        assert {u["id"] for u in providers.json()["users"]} == {str(provider.id), str(untyped.id)}

    async def test_assigned_and_unassigned_scopes(self, client, make_user, make_organization):
        org = await make_organization()
        assigned = await make_user(organizations=[org])
        unassigned = await make_user()

        resp_assigned = await client.get(USERS_URL, params={"org_type": "assigned"})
        resp_unassigned = await client.get(USERS_URL, params={"org_type": "unassigned"})

        assert [u["id"] for u in resp_assigned.json()["users"]] == [str(assigned.id)]
        assert resp_assigned.json()["users"][0]["organizations"] == [
            {"id": str(org.id), "name": "Happy Clinic"}
        ]
        assert [u["id"] for u in resp_unassigned.json()["users"]] == [str(unassigned.id)]

    async def test_unknown_scope_searches_everyone(self, client, make_user):
        await make_user()
        await make_user(organization_type="health_it_vendor")

        resp = await client.get(USERS_URL, params={"org_type": "everyone"})

        assert resp.json()["total"] == 2

    async def test_pagination(self, client, make_user, monkeypatch):
        monkeypatch.setattr(settings, "USERS_PER_PAGE", 2)
        users = [await make_user() for _ in range(5)]
        newest_first = [str(u.id) for u in reversed(users)]

        page_2 = await client.get(USERS_URL, params={"page": 2})
        page_3 = await client.get(USERS_URL, params={"page": 3})

        body = page_2.json()
        assert body["total"] == 5
        assert body["per_page"] == 2
        assert body["total_pages"] == 3
        assert [u["id"] for u in body["users"]] == newest_first[2:4]
        assert [u["id"] for u in page_3.json()["users"]] == newest_first[4:]


# ---------------------------------------------------------------------------
# Show / Edit
# ---------------------------------------------------------------------------

class TestShowEdit:
    async def test_show(self, client, make_user):
        user = await make_user(first_name="Ann", last_name="Lee")

        resp = await client.get(f"{USERS_URL}/{user.id}")

        assert resp.status_code == 200
        assert resp.json()["first_name"] == "Ann"
        assert resp.json()["email"] == user.email

    async def test_show_unknown_is_404(self, client):
        resp = await client.get(f"{USERS_URL}/{uuid.uuid4()}")
        assert resp.status_code == 404
        assert resp.json()["detail"]["code"] == "USER_NOT_FOUND"

    async def test_edit_lists_organizations(self, client, make_user, make_organization):
        user = await make_user()
        await make_organization(name="Zeta Care")
        await make_organization(name="Alpha Health")

        resp = await client.get(f"{USERS_URL}/{user.id}/edit")

        assert resp.status_code == 200
        assert [o["name"] for o in resp.json()["organizations"]] == ["Alpha Health", "Zeta Care"]


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

class TestUpdate:
    async def test_update_names_and_email(self, client, make_user, session_factory):
        user = await make_user()

        resp = await client.patch(
            f"{USERS_URL}/{user.id}",
            json={"first_name": "Annie", "email": "Annie.Lee@Clinic.org", "city": "Dallas"},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["flash"] == {"type": "notice", "message": "User successfully updated."}
        assert body["redirect_to"] == f"/api/v1/internal/users/{user.id}"

        saved = await load_user(session_factory, user.id)
        assert saved.first_name == "Annie"
        assert saved.email == "annie.lee@clinic.org"
        assert saved.city == "Austin"

    async def test_update_organization_links(self, client, make_user, make_organization):
        user = await make_user()
        org = await make_organization()

        resp = await client.patch(
            f"{USERS_URL}/{user.id}", json={"organization_ids": [str(org.id)]}
        )

        assert resp.status_code == 200
        assigned = await client.get(USERS_URL, params={"org_type": "assigned"})
        assert [u["id"] for u in assigned.json()["users"]] == [str(user.id)]

        cleared = await client.patch(f"{USERS_URL}/{user.id}", json={"organization_ids": []})
        assert cleared.json()["user"]["organizations"] == []

    async def test_blank_name_renders_edit(self, client, make_user, session_factory):
        user = await make_user(last_name="Lee")

        resp = await client.patch(f"{USERS_URL}/{user.id}", json={"last_name": ""})

        assert resp.status_code == 422
        body = resp.json()
        assert body["flash"] == {
            "type": "alert",
            "message": "Please correct errors: Last name can't be blank",
        }
        assert body["render"] == "edit"
        assert body["user"]["last_name"] == ""
        assert (await load_user(session_factory, user.id)).last_name == "Lee"

    async def test_duplicate_email(self, client, make_user):
        taken = await make_user()
        user = await make_user()

        resp = await client.patch(f"{USERS_URL}/{user.id}", json={"email": taken.email})

        assert resp.status_code == 422
        assert resp.json()["errors"] == {"email": ["has already been taken"]}

    async def test_invalid_email(self, client, make_user):
        user = await make_user()

        resp = await client.patch(f"{USERS_URL}/{user.id}", json={"email": "not-an-email"})

        assert resp.status_code == 422
        assert resp.json()["flash"]["message"] == "Please correct errors: Email is invalid"

    async def test_unknown_organization_is_404(self, client, make_user):
        user = await make_user()

        resp = await client.patch(
            f"{USERS_URL}/{user.id}", json={"organization_ids": [str(uuid.uuid4())]}
        )

        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# CSV download
# ---------------------------------------------------------------------------

class TestDownload:
    async def test_csv_export(self, client, make_user):
        user = await make_user(
            first_name="Ann",
            last_name="Lee",
            address_2=None,
            num_providers=0,
            created_at=datetime(2026, 5, 4, 10, 30, tzinfo=UTC),
        )

        resp = await client.get(f"{USERS_URL}/download")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert re.fullmatch(
            r"attachment; filename=users-\d{8}T\d{4}\.csv", resp.headers["content-disposition"]
        )

        rows = list(csv.reader(io.StringIO(resp.text)))
        assert rows[0] == list(CSV_COLUMNS)
        assert len(rows) == 2
        row = dict(zip(rows[0], rows[1]))
        assert row["id"] == str(user.id)
        assert row["first_name"] == "Ann"
        assert row["address_2"] == ""
        assert row["agree_to_terms"] == "true"
        assert row["num_providers"] == "0"
        assert row["created_at"].startswith("2026-05-04T10:30:00")

    async def test_csv_includes_every_user(self, client, make_user, monkeypatch):
        monkeypatch.setattr(settings, "USERS_PER_PAGE", 1)
        for _ in range(3):
            await make_user()

        resp = await client.get(f"{USERS_URL}/download")

        assert len(list(csv.reader(io.StringIO(resp.text)))) == 4

    async def test_csv_is_sent_whole_with_assigned_users(self, client, make_user, make_organization):
        org = await make_organization()
        await make_user(organizations=[org])
        await make_user()

        resp = await client.get(f"{USERS_URL}/download")

        assert resp.status_code == 200
        assert int(resp.headers["content-length"]) == len(resp.content)
        assert len(list(csv.reader(io.StringIO(resp.text)))) == 3

    def test_filename_uses_utc_minute(self):
        assert csv_filename(datetime(2026, 10, 19, 8, 5, 59, tzinfo=UTC)) == "users-20261019T0805.csv"

    def test_header_columns(self):
        assert CSV_COLUMNS == (
            "id", "first_name", "last_name", "email", "organization", "organization_type",
            "address_1", "address_2", "city", "state", "zip", "agree_to_terms",
            "num_providers", "created_at", "updated_at",
        )


async def test_directory_requires_staff(anon_client):
    resp = await anon_client.get(USERS_URL)
    assert resp.status_code == 401

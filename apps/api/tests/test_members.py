import pytest

from members_api.core.errors import StorageFaultError
from members_api.models.base import Base
from members_api.models.entities import Member
from members_api.services import members as member_service


def test_member_crud(client):
    create_response = client.post(
        "/api/members",
        json={"name": "Ann", "email": "ann@x.com", "join_date": "2024-01-01"},
    )
    assert create_response.status_code == 201
    created = create_response.json()
    assert created["status"] == "Active"
    assert created["membership_type"] == "Basic"
    assert created["join_date"] == "2024-01-01"
    member_id = created["id"]

    list_response = client.get("/api/members")
    assert list_response.status_code == 200
    assert [item["id"] for item in list_response.json()] == [member_id]

    update_response = client.put(f"/api/members/{member_id}", json={"membership_type": "VIP"})
    assert update_response.status_code == 200
    assert update_response.json() == {**created, "membership_type": "VIP"}

    delete_response = client.delete(f"/api/members/{member_id}")
    assert delete_response.status_code == 200
    assert delete_response.json() == {"message": "Member deleted successfully"}

    assert client.get("/api/members").json() == []


def test_created_ids_are_unique_and_listed_once(client, create_member):
    ids = [create_member(name=name)["id"] for name in ("Cara", "Dev", "Eli")]
    assert len(set(ids)) == 3

    listed = [item["id"] for item in client.get("/api/members").json()]
    for member_id in ids:
        assert listed.count(member_id) == 1


def test_list_is_sorted_by_name(client, create_member):
    create_member(name="Bob")
    create_member(name="Ann")
    create_member(name="carl")

    names = [item["name"] for item in client.get("/api/members").json()]
    assert names == ["Ann", "Bob", "carl"]


def test_create_keeps_explicit_type_and_status(create_member):
    member = create_member(name="Fay", membership_type="Family", status="Inactive")
    assert member["membership_type"] == "Family"
    assert member["status"] == "Inactive"


def test_create_blank_type_and_status_take_defaults(create_member):
    member = create_member(name="Gus", membership_type="", status=None)
    assert member["membership_type"] == "Basic"
    assert member["status"] == "Active"


def test_join_date_round_trips_without_drift(client, create_member):
    create_member(name="Hal", join_date="2024-03-15")
    assert client.get("/api/members").json()[0]["join_date"] == "2024-03-15"


def test_join_date_timestamp_is_reduced_to_its_calendar_date(create_member):
    member = create_member(name="Ida", join_date="2024-03-15T23:30:00-05:00")
    assert member["join_date"] == "2024-03-15"

    member = create_member(name="Jo", join_date="2024-03-16T00:00:00.000Z")
    assert member["join_date"] == "2024-03-16"


def test_create_requires_name_email_and_join_date(client):
    for missing in ("name", "email", "join_date"):
        body = {"name": "Kim", "email": "kim@example.com", "join_date": "2024-01-01"}
        body.pop(missing)
        response = client.post("/api/members", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "Name, email, and join date are required."

    response = client.post("/api/members", json={"name": "  ", "email": "kim@example.com", "join_date": "2024-01-01"})
    assert response.status_code == 400
    assert response.json()["error"] == "Name, email, and join date are required."

    assert client.get("/api/members").json() == []


def test_create_rejects_unknown_membership_type(client):
    response = client.post(
        "/api/members",
        json={"name": "Lee", "email": "lee@example.com", "join_date": "2024-01-01", "membership_type": "Gold"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid member data."
    assert "membership_type" in response.json()["details"]


def test_duplicate_email_is_a_conflict(client, create_member, db_session):
    create_member(name="Ann", email="ann@x.com")

    response = client.post("/api/members", json={"name": "Other Ann", "email": "ann@x.com", "join_date": "2024-02-01"})
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "Email already exists."
    assert body["details"]

    assert db_session.query(Member).count() == 1


def test_partial_update_leaves_other_fields_unchanged(client, create_member):
    create_member(name="Ann")
    target = create_member(name="Max", email="max@example.com", join_date="2023-06-01", membership_type="Premium")

    response = client.put(f"/api/members/{target['id']}", json={"status": "Expired"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["status"] == "Expired"
    for field in ("id", "name", "email", "join_date", "membership_type"):
        assert updated[field] == target[field]

    listed = {item["id"]: item for item in client.get("/api/members").json()}
    assert listed[target["id"]] == updated


def test_update_with_empty_patch_is_rejected(client, create_member):
    member = create_member(name="Ned")

    for body in ({}, {"name": "", "status": None}, {"id": 99}):
        response = client.put(f"/api/members/{member['id']}", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "No update data provided."

    assert client.get("/api/members").json() == [member]


def test_update_blank_field_is_ignored(client, create_member):
    member = create_member(name="Oz")
    response = client.put(f"/api/members/{member['id']}", json={"name": "  ", "status": "Inactive"})
    assert response.status_code == 200
    assert response.json()["name"] == "Oz"
    assert response.json()["status"] == "Inactive"


def test_update_unknown_member_is_not_found(client):
    response = client.put("/api/members/404", json={"status": "Expired"})
    assert response.status_code == 404
    assert response.json()["error"] == "Member not found."


def test_update_to_taken_email_is_a_conflict(client, create_member):
    create_member(name="Pat", email="pat@example.com")
    other = create_member(name="Quinn", email="quinn@example.com")

    response = client.put(f"/api/members/{other['id']}", json={"email": "pat@example.com"})
    assert response.status_code == 409
    assert response.json()["error"] == "Email already exists for another member."

    emails = sorted(item["email"] for item in client.get("/api/members").json())
    assert emails == ["pat@example.com", "quinn@example.com"]


def test_update_own_email_unchanged_is_allowed(client, create_member):
    member = create_member(name="Rae", email="rae@example.com")
    response = client.put(f"/api/members/{member['id']}", json={"email": "rae@example.com", "name": "Rae"})
    assert response.status_code == 200
    assert response.json() == member


def test_update_normalizes_join_date(client, create_member):
    member = create_member(name="Sam")
    response = client.put(f"/api/members/{member['id']}", json={"join_date": "2025-12-31T08:00:00Z"})
    assert response.status_code == 200
    assert response.json()["join_date"] == "2025-12-31"


def test_invalid_member_id_is_rejected(client):
    for method in ("put", "delete"):
        kwargs = {"json": {"status": "Active"}} if method == "put" else {}
        response = getattr(client, method)("/api/members/abc", **kwargs)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid member ID."


def test_delete_twice_is_not_found(client, create_member):
    member = create_member(name="Tia")

    assert client.delete(f"/api/members/{member['id']}").status_code == 200
    second = client.delete(f"/api/members/{member['id']}")
    assert second.status_code == 404
    assert second.json()["error"] == "Member not found."


def test_delete_unknown_member_is_not_found(client):
    assert client.delete("/api/members/12345").status_code == 404


def test_storage_fault_is_reported_not_raised(client, database):
    Base.metadata.drop_all(bind=database.engine)

    response = client.get("/api/members")
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Database query failed"
    assert "members" in body["details"]

    response = client.post("/api/members", json={"name": "Uma", "email": "uma@example.com", "join_date": "2024-01-01"})
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to add member"


def test_health_reports_database(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_responses_carry_process_time(client):
    response = client.get("/api/members")
    assert "x-process-time" in response.headers


def test_not_null_violation_is_a_storage_fault_not_a_conflict(create_member, db_session):
    member = create_member(name="Vic")

    with pytest.raises(StorageFaultError) as excinfo:
        member_service.update_member(db_session, member["id"], {"name": None})

    assert excinfo.value.error == "Failed to update member"
    assert db_session.get(Member, member["id"]).name == "Vic"

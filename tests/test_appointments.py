from datetime import timedelta

import pytest

from medikey.utils.timezone import utcnow
from tests.conftest import API


def make_appointment(client, headers, days_from_now: int, title: str = "Checkup", **extra):
    payload = {
        "title": title,
        "appointmentType": "checkup",
        "providerName": "Dr. Jones",
        "appointmentDate": (utcnow() + timedelta(days=days_from_now)).isoformat(),
    }
    payload.update(extra)
    response = client.post(f"{API}/appointments/", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreate:
    def test_defaults(self, client, alice):
        appointment = make_appointment(client, alice["headers"], 3)
        assert appointment["status"] == "scheduled"
        assert appointment["duration"] == 30
        assert appointment["reminderSet"] is False
        assert appointment["userId"] == alice["id"]

    def test_client_cannot_choose_initial_status(self, client, alice):
        appointment = make_appointment(client, alice["headers"], 3, status="completed")
        assert appointment["status"] == "scheduled"

    def test_fetch_returns_same_fields(self, client, alice):
        created = make_appointment(client, alice["headers"], 3, location="Clinic A", duration=45)
        fetched = client.get(f"{API}/appointments/{created['id']}", headers=alice["headers"]).json()
        assert fetched == created


class TestListing:
    def test_list_is_ascending_by_date(self, client, alice):
        make_appointment(client, alice["headers"], 10, title="Later")
        make_appointment(client, alice["headers"], -5, title="Past")
        make_appointment(client, alice["headers"], 1, title="Soon")
        titles = [a["title"] for a in client.get(f"{API}/appointments/", headers=alice["headers"]).json()]
        assert titles == ["Past", "Soon", "Later"]

    def test_upcoming_excludes_past_and_caps_at_three(self, client, alice):
        make_appointment(client, alice["headers"], -1, title="Yesterday")
        for day in (5, 2, 4, 3):
            make_appointment(client, alice["headers"], day, title=f"Day {day}")
        upcoming = client.get(f"{API}/appointments/upcoming", headers=alice["headers"]).json()
        assert [a["title"] for a in upcoming] == ["Day 2", "Day 3", "Day 4"]


class TestUpdate:
    def test_partial_update(self, client, alice):
        created = make_appointment(client, alice["headers"], 2)
        response = client.patch(
            f"{API}/appointments/{created['id']}", headers=alice["headers"], json={"location": "Room 4"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["location"] == "Room 4"
        assert body["title"] == created["title"]

    @pytest.mark.parametrize(
        "field", ["title", "appointmentType", "providerName", "appointmentDate", "duration", "reminderSet", "status"]
    )
    def test_required_field_cannot_be_cleared(self, client, alice, field):
        created = make_appointment(client, alice["headers"], 2)
        url = f"{API}/appointments/{created['id']}"
        response = client.patch(url, headers=alice["headers"], json={field: None})
        assert response.status_code == 422
        assert client.get(url, headers=alice["headers"]).json() == created

    def test_optional_field_can_be_cleared(self, client, alice):
        created = make_appointment(client, alice["headers"], 2, location="Room 4")
        response = client.patch(
            f"{API}/appointments/{created['id']}", headers=alice["headers"], json={"location": None}
        )
        assert response.status_code == 200
        assert response.json()["location"] is None

    @pytest.mark.parametrize("new_status", ["confirmed", "completed", "cancelled", "missed"])
    def test_status_transitions(self, client, alice, new_status):
        created = make_appointment(client, alice["headers"], 2)
        response = client.patch(
            f"{API}/appointments/{created['id']}/status", headers=alice["headers"], json={"status": new_status}
        )
        assert response.status_code == 200
        assert response.json()["status"] == new_status

    def test_unknown_status_is_rejected(self, client, alice):
        created = make_appointment(client, alice["headers"], 2)
        response = client.patch(
            f"{API}/appointments/{created['id']}/status", headers=alice["headers"], json={"status": "postponed"}
        )
        assert response.status_code == 422


class TestOwnership:
    def test_other_user_gets_403(self, client, alice, bob):
        created = make_appointment(client, alice["headers"], 2)
        url = f"{API}/appointments/{created['id']}"
        assert client.get(url, headers=bob["headers"]).status_code == 403
        assert client.patch(url, headers=bob["headers"], json={"title": "x"}).status_code == 403
        assert client.patch(f"{url}/status", headers=bob["headers"], json={"status": "missed"}).status_code == 403
        assert client.delete(url, headers=bob["headers"]).status_code == 403

    def test_missing_is_404(self, client, alice):
        assert client.get(f"{API}/appointments/999", headers=alice["headers"]).status_code == 404
        response = client.patch(f"{API}/appointments/999/status", headers=alice["headers"], json={"status": "missed"})
        assert response.status_code == 404

    def test_requires_auth(self, client):
        assert client.get(f"{API}/appointments/").status_code == 401

    def test_delete(self, client, alice):
        created = make_appointment(client, alice["headers"], 2)
        assert client.delete(f"{API}/appointments/{created['id']}", headers=alice["headers"]).status_code == 200
        assert client.get(f"{API}/appointments/{created['id']}", headers=alice["headers"]).status_code == 404

import pytest

from tests.conftest import API


class TestProfile:
    def test_get_profile(self, client, alice):
        response = client.get(f"{API}/users/profile", headers=alice["headers"])
        assert response.status_code == 200
        assert response.json()["fullName"] == "Alice"

    def test_update_profile(self, client, alice):
        response = client.patch(
            f"{API}/users/profile",
            headers=alice["headers"],
            json={"fullName": "Alice Smith", "phone": "555-0100", "dateOfBirth": "1990-04-12"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["fullName"] == "Alice Smith"
        assert body["phone"] == "555-0100"
        assert body["dateOfBirth"] == "1990-04-12"
        assert body["username"] == "alice"

    def test_username_is_not_updatable(self, client, alice):
        client.patch(f"{API}/users/profile", headers=alice["headers"], json={"username": "mallory"})
        assert client.get(f"{API}/users/profile", headers=alice["headers"]).json()["username"] == "alice"

    def test_email_taken_by_another_user(self, client, alice, bob):
        response = client.patch(f"{API}/users/profile", headers=alice["headers"], json={"email": "bob@example.com"})
        assert response.status_code == 400

    @pytest.mark.parametrize("field", ["fullName", "email"])
    def test_required_field_cannot_be_cleared(self, client, alice, field):
        response = client.patch(f"{API}/users/profile", headers=alice["headers"], json={field: None})
        assert response.status_code == 422
        assert client.get(f"{API}/users/profile", headers=alice["headers"]).json()[field]

    def test_optional_field_can_be_cleared(self, client, alice):
        client.patch(f"{API}/users/profile", headers=alice["headers"], json={"phone": "555-0100"})
        response = client.patch(f"{API}/users/profile", headers=alice["headers"], json={"phone": None})
        assert response.status_code == 200
        assert response.json()["phone"] is None


class TestEmergencyInfo:
    def test_update_emergency_info(self, client, alice):
        response = client.patch(
            f"{API}/users/emergency-info",
            headers=alice["headers"],
            json={
                "bloodType": "O+",
                "allergies": "Penicillin",
                "chronicConditions": "Asthma",
                "emergencyContactName": "Bob",
                "emergencyContactPhone": "555-0101",
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["bloodType"] == "O+"
        assert body["allergies"] == "Penicillin"
        assert body["emergencyContactPhone"] == "555-0101"

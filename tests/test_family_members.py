import pytest

from tests.conftest import API

MEMBER = {
    "name": "Sam",
    "relationship": "child",
    "dateOfBirth": "2015-06-01",
    "bloodType": "A+",
    "allergies": "Peanuts",
}


class TestFamilyMembers:
    def test_create_and_fetch(self, client, alice):
        response = client.post(f"{API}/family-members/", headers=alice["headers"], json=MEMBER)
        assert response.status_code == 201, response.text
        created = response.json()
        assert created["relationship"] == "child"
        assert created["userId"] == alice["id"]

        fetched = client.get(f"{API}/family-members/{created['id']}", headers=alice["headers"]).json()
        assert fetched == created

    def test_list_only_own_members(self, client, alice, bob):
        client.post(f"{API}/family-members/", headers=alice["headers"], json=MEMBER)
        assert len(client.get(f"{API}/family-members/", headers=alice["headers"]).json()) == 1
        assert client.get(f"{API}/family-members/", headers=bob["headers"]).json() == []

    def test_update_keeps_owner(self, client, alice):
        created = client.post(f"{API}/family-members/", headers=alice["headers"], json=MEMBER).json()
        response = client.patch(
            f"{API}/family-members/{created['id']}",
            headers=alice["headers"],
            json={"relationship": "stepchild", "userId": 999, "id": 555},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["relationship"] == "stepchild"
        assert body["userId"] == alice["id"]
        assert body["id"] == created["id"]

    def test_delete(self, client, alice):
        created = client.post(f"{API}/family-members/", headers=alice["headers"], json=MEMBER).json()
        response = client.delete(f"{API}/family-members/{created['id']}", headers=alice["headers"])
        assert response.json() == {"message": "Family member deleted successfully"}
        assert client.get(f"{API}/family-members/{created['id']}", headers=alice["headers"]).status_code == 404

    def test_other_user_gets_403(self, client, alice, bob):
        created = client.post(f"{API}/family-members/", headers=alice["headers"], json=MEMBER).json()
        url = f"{API}/family-members/{created['id']}"
        assert client.get(url, headers=bob["headers"]).status_code == 403
        assert client.patch(url, headers=bob["headers"], json={"name": "x"}).status_code == 403
        assert client.delete(url, headers=bob["headers"]).status_code == 403

    def test_missing_relationship_is_422(self, client, alice):
        response = client.post(f"{API}/family-members/", headers=alice["headers"], json={"name": "Sam"})
        assert response.status_code == 422

    @pytest.mark.parametrize("field", ["name", "relationship"])
    def test_required_field_cannot_be_cleared(self, client, alice, field):
        created = client.post(f"{API}/family-members/", headers=alice["headers"], json=MEMBER).json()
        url = f"{API}/family-members/{created['id']}"
        response = client.patch(url, headers=alice["headers"], json={field: None})
        assert response.status_code == 422
        assert client.get(url, headers=alice["headers"]).json() == created

    def test_missing_is_404(self, client, alice):
        assert client.get(f"{API}/family-members/999", headers=alice["headers"]).status_code == 404

    def test_requires_auth(self, client, alice):
        created = client.post(f"{API}/family-members/", headers=alice["headers"], json=MEMBER).json()
        url = f"{API}/family-members/{created['id']}"
        assert client.get(f"{API}/family-members/").status_code == 401
        assert client.post(f"{API}/family-members/", json=MEMBER).status_code == 401
        assert client.get(url).status_code == 401
        assert client.patch(url, json={"name": "x"}).status_code == 401
        assert client.delete(url).status_code == 401

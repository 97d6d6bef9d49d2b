class TestProfiles:

    def test_patient_saves_own_profile(self, client, login_as):
        alice_id, alice = login_as("alice@x.com", "PATIENT")

        response = client.put(
            f"/api/v1/profiles/patient/{alice_id}",
            json={"first_name": "Alice", "age": 30, "allergies": "Peanuts"},
            headers=alice,
        )
        assert response.status_code == 200
        assert response.json()["patient_id"] == alice_id

        response = client.put(
            f"/api/v1/profiles/patient/{alice_id}",
            json={"age": 31, "triage_priority": "LOW"},
            headers=alice,
        )
        assert response.status_code == 200

        data = client.get(f"/api/v1/profiles/patient/{alice_id}", headers=alice).json()
        assert data["age"] == 31
        assert data["triage_priority"] == "LOW"
        # fields left out of the second PUT keep their stored values
        assert data["first_name"] == "Alice"
        assert data["allergies"] == "Peanuts"

    def test_partial_update_of_new_profile_uses_defaults(self, client, login_as):
        alice_id, alice = login_as("alice@x.com", "PATIENT")

        response = client.put(
            f"/api/v1/profiles/patient/{alice_id}",
            json={"symptom": "Fever"},
            headers=alice,
        )
        assert response.status_code == 200
        assert response.json()["age"] == 0
        assert response.json()["first_name"] is None

    def test_missing_profile_is_not_found(self, client, login_as):
        bob_id, bob = login_as("bob@x.com", "DOCTOR")

        response = client.get(f"/api/v1/profiles/doctor/{bob_id}", headers=bob)
        assert response.status_code == 404

    def test_profile_kind_must_match_role(self, client, login_as):
        alice_id, alice = login_as("alice@x.com", "PATIENT")
        _, admin = login_as("root@x.com", "ADMIN")

        response = client.put(
            f"/api/v1/profiles/doctor/{alice_id}",
            json={"specialty": "Surgery"},
            headers=alice,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidReference"

        response = client.put(
            f"/api/v1/profiles/doctor/{alice_id}",
            json={"specialty": "Surgery"},
            headers=admin,
        )
        assert response.status_code == 400

    def test_cannot_touch_someone_elses_profile(self, client, login_as):
        alice_id, _ = login_as("alice@x.com", "PATIENT")
        _, bob = login_as("bob@x.com", "DOCTOR")

        response = client.put(
            f"/api/v1/profiles/patient/{alice_id}",
            json={"medical_history": "None"},
            headers=bob,
        )
        assert response.status_code == 403

    def test_admin_manages_any_profile(self, client, login_as):
        bob_id, _ = login_as("bob@x.com", "DOCTOR")
        root_id, admin = login_as("root@x.com", "ADMIN")

        response = client.put(
            f"/api/v1/profiles/doctor/{bob_id}",
            json={"first_name": "Bob", "license_number": "LIC-1"},
            headers=admin,
        )
        assert response.status_code == 200
        assert response.json()["license_number"] == "LIC-1"

        response = client.put(
            f"/api/v1/profiles/admin/{root_id}",
            json={"first_name": "Root", "permissions": "all"},
            headers=admin,
        )
        assert response.status_code == 200
        assert response.json()["admin_id"] == root_id

    def test_invalid_profile_data(self, client, login_as):
        alice_id, alice = login_as("alice@x.com", "PATIENT")

        response = client.put(
            f"/api/v1/profiles/patient/{alice_id}",
            json={"age": -1},
            headers=alice,
        )
        assert response.status_code == 422

import pytest

CONTACT = {
    "contactInformationDisplayed": "yes",
    "username": "alice",
    "contactNumber": "6175550100",
    "contactEmail": "alice@mit.edu",
    "contactWebsite": "alice.dev",
    "contactAddress": "77 Mass Ave",
}


@pytest.fixture
def contact(client):
    response = client.post("/api/contactInformationDisplay", json=CONTACT)
    assert response.status_code == 201
    return response.json()["contactInformationDisplay"]


def test_create_contact_information(contact):
    assert contact["contactInformationDisplayed"] is True
    assert contact["contactNumber"] == "6175550100"
    assert isinstance(contact["_id"], str)


def test_create_accepts_boolean_display(client):
    response = client.post(
        "/api/contactInformationDisplay", json={"contactInformationDisplayed": True, "username": "bob"}
    )

    assert response.status_code == 201
    assert response.json()["message"] == "Your contact information display was created successfully."
    assert response.json()["contactInformationDisplay"]["contactNumber"] == ""


def test_create_requires_display(client):
    response = client.post("/api/contactInformationDisplay", json={"username": "alice"})

    assert response.status_code == 400
    assert response.json() == {
        "error": {"contactInformationDisplayed": "Must determine if information will be displayed."}
    }


def test_create_rejects_bad_display_value(client):
    response = client.post(
        "/api/contactInformationDisplay", json={**CONTACT, "contactInformationDisplayed": "Yes"}
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": {"contactInformationDisplayed": "value must be either yes or no (case sensitive)"}
    }


def test_create_rejects_bad_number(client):
    response = client.post("/api/contactInformationDisplay", json={**CONTACT, "contactNumber": "555-0100"})

    assert response.status_code == 400
    assert response.json() == {
        "error": {"Number": "Number must be a 10 digit long string of numeric characters."}
    }


def test_create_twice_conflicts(client, contact):
    response = client.post("/api/contactInformationDisplay", json={**CONTACT, "username": "Alice"})

    assert response.status_code == 409


def test_update_clears_and_sets(client, contact):
    response = client.put(
        "/api/contactInformationDisplay",
        json={"username": "alice", "contactNumber": "delete", "contactWebsite": "new.dev"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Your contact information was updated successfully."
    updated = body["contactInformationDisplay"]
    assert updated["contactNumber"] == ""
    assert updated["contactWebsite"] == "new.dev"
    assert updated["contactEmail"] == "alice@mit.edu"
    assert updated["contactInformationDisplayed"] is True


def test_update_display_to_no(client, contact):
    response = client.put(
        "/api/contactInformationDisplay", json={"username": "alice", "contactInformationDisplayed": "no"}
    )

    assert response.status_code == 200
    assert response.json()["contactInformationDisplay"]["contactInformationDisplayed"] is False


def test_update_missing_record(client):
    response = client.put("/api/contactInformationDisplay", json={"username": "ghost", "contactEmail": "x@y.z"})

    assert response.status_code == 404
    assert response.json() == {
        "error": {"userContactInformationNotFound": "User does not have created contact information."}
    }


def test_update_requires_login(anonymous_client):
    response = anonymous_client.put("/api/contactInformationDisplay", json={"username": "alice"})

    assert response.status_code == 403


def test_get_contact_information(client, contact):
    response = client.get("/api/contactInformationDisplay", params={"username": "ALICE"})

    assert response.status_code == 200
    assert response.json() == contact


def test_get_requires_username(client):
    response = client.get("/api/contactInformationDisplay")

    assert response.status_code == 400
    assert response.json() == {"error": "Provided author username must be nonempty."}


def test_get_unknown_user(client):
    response = client.get("/api/contactInformationDisplay", params={"username": "ghost"})

    assert response.status_code == 404
    assert response.json() == {"error": "Contact Information for a user with username ghost does not exist."}


def test_update_rejects_non_string_fields(client, contact):
    response = client.put(
        "/api/contactInformationDisplay",
        json={"username": "alice", "contactEmail": {"x": 1}, "contactWebsite": ["w"], "contactAddress": 0},
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": {"contactInformation": "Contact email, website and address must be strings."}
    }
    unchanged = client.get("/api/contactInformationDisplay", params={"username": "alice"})
    assert unchanged.json() == contact


def test_update_rejects_a_single_non_string_field(client, contact):
    response = client.put("/api/contactInformationDisplay", json={"username": "alice", "contactAddress": 0})

    assert response.status_code == 400


def test_update_malformed_json_is_a_400(client, contact):
    response = client.put(
        "/api/contactInformationDisplay", content=b"[1,", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert "error" in response.json()

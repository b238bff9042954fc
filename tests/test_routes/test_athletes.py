import pytest

ATHLETE = {
    "email": "runner@example.com",
    "password": "fast",
    "name": "Runner",
    "gender": "male",
    "age": 19,
    "country": "KE",
    "sport": "marathon",
    "phone": "+254 700 000",
}


@pytest.fixture
def url(api):
    return f"{api}/athletes"


@pytest.fixture
def athlete(client, url, auth_headers):
    res = client.post(url, json=ATHLETE, headers=auth_headers)
    assert res.status_code == 201
    return res.json()


def test_create_forces_athlete_role(client, url, auth_headers, mock_db):
    res = client.post(url, json={**ATHLETE, "role": "professional"}, headers=auth_headers)
    assert res.status_code == 201
    assert res.json()["role"] == "athlete"
    assert "password" not in res.json()
    assert mock_db.users.find_one({"email": ATHLETE["email"]})["role"] == "athlete"


def test_created_athlete_can_login(client, api, athlete):
    res = client.post(f"{api}/auth/login", json={"email": ATHLETE["email"], "password": ATHLETE["password"]})
    assert res.status_code == 200
    assert res.json()["user"]["id"] == athlete["id"]


def test_create_requires_professional(client, url, signup):
    _, headers = signup("self@example.com", role="athlete")
    res = client.post(url, json=ATHLETE, headers=headers)
    assert res.status_code == 403
    assert res.json() == {"message": "Only professionals can create athletes"}


def test_create_duplicate_email(client, url, auth_headers, athlete):
    res = client.post(url, json=ATHLETE, headers=auth_headers)
    assert res.status_code == 400
    assert res.json() == {"message": "User already exists"}


def test_professional_lists_all_athletes(client, url, auth_headers, athlete, signup):
    signup("solo@example.com", role="athlete")
    res = client.get(url, headers=auth_headers)
    assert res.status_code == 200
    assert {a["email"] for a in res.json()} == {ATHLETE["email"], "solo@example.com"}
    assert all(a["role"] == "athlete" for a in res.json())


def test_athlete_lists_only_self(client, url, api, athlete, signup):
    signup("solo@example.com", role="athlete")
    token = client.post(
        f"{api}/auth/login", json={"email": ATHLETE["email"], "password": ATHLETE["password"]}
    ).json()["token"]

    res = client.get(url, headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    assert [a["id"] for a in res.json()] == [athlete["id"]]


def test_get_one(client, url, auth_headers, athlete, signup):
    assert client.get(f"{url}/{athlete['id']}", headers=auth_headers).json()["email"] == ATHLETE["email"]

    _, other_athlete = signup("solo@example.com", role="athlete")
    assert client.get(f"{url}/{athlete['id']}", headers=other_athlete).status_code == 403


def test_partial_update_keeps_other_fields(client, url, auth_headers, athlete):
    res = client.put(
        f"{url}/{athlete['id']}",
        json={"sport": "10k", "name": "", "country": None},
        headers=auth_headers,
    )
    assert res.status_code == 200
    updated = res.json()
    assert updated["sport"] == "10k"
    assert updated["name"] == ATHLETE["name"]
    assert updated["country"] == ATHLETE["country"]
    assert updated["age"] == ATHLETE["age"]
    assert updated["phone"] == ATHLETE["phone"]


def test_update_age_zero_is_applied(client, url, auth_headers, athlete):
    res = client.put(f"{url}/{athlete['id']}", json={"age": 0}, headers=auth_headers)
    assert res.json()["age"] == 0


def test_update_requires_professional(client, url, api, athlete):
    token = client.post(
        f"{api}/auth/login", json={"email": ATHLETE["email"], "password": ATHLETE["password"]}
    ).json()["token"]
    res = client.put(f"{url}/{athlete['id']}", json={"sport": "x"}, headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 403


def test_update_unknown_athlete(client, url, auth_headers):
    res = client.put(f"{url}/0123456789abcdef01234567", json={"sport": "x"}, headers=auth_headers)
    assert res.status_code == 404
    assert res.json() == {"message": "Athlete not found"}


def test_update_non_athlete_is_bad_request(client, url, professional):
    pro, headers = professional
    res = client.put(f"{url}/{pro['id']}", json={"sport": "x"}, headers=headers)
    assert res.status_code == 400
    assert res.json() == {"message": "User is not an athlete"}


def test_delete(client, url, auth_headers, athlete, mock_db):
    res = client.delete(f"{url}/{athlete['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "Athlete deleted successfully"}
    assert mock_db.users.count_documents({"role": "athlete"}) == 0


def test_delete_checks(client, url, professional, signup, athlete):
    pro, headers = professional
    _, athlete_headers = signup("solo@example.com", role="athlete")

    assert client.delete(f"{url}/{athlete['id']}", headers=athlete_headers).status_code == 403
    assert client.delete(f"{url}/{pro['id']}", headers=headers).status_code == 400
    assert client.delete(f"{url}/0123456789abcdef01234567", headers=headers).status_code == 404


def test_update_does_not_write_nulls_for_unset_fields(client, url, auth_headers, mock_db):
    body = {"email": "bare@example.com", "password": "pw", "name": "Bare"}
    created = client.post(url, json=body, headers=auth_headers).json()

    res = client.put(f"{url}/{created['id']}", json={"sport": "judo"}, headers=auth_headers)
    assert res.status_code == 200

    stored = mock_db.users.find_one({"email": "bare@example.com"})
    assert stored["sport"] == "judo"
    assert "phone" not in stored
    assert "country" not in stored

def test_create_and_list_locations(client):
    for name, kind in (("Harbor Hotel", "hotel"), ("Airport Terminal 3", "airport")):
        response = client.post("/api/locations", json={"name": name, "address": "1 Test Way", "type": kind})
        assert response.status_code == 201
        assert response.json()["type"] == kind

    response = client.get("/api/locations")

    assert response.status_code == 200
    assert [location["name"] for location in response.json()] == ["Airport Terminal 3", "Harbor Hotel"]


def test_location_type_defaults_to_other(client):
    response = client.post("/api/locations", json={"name": "Depot", "address": "2 Test Way"})

    assert response.status_code == 201
    assert response.json()["type"] == "other"


def test_location_validation(client):
    assert client.post("/api/locations", json={"name": "", "address": "x"}).status_code == 400
    assert client.post("/api/locations", json={"name": "X", "address": "x", "type": "spaceport"}).status_code == 400

"""
HTTP surface: estimates, flooring toggles, basic calculator, defaults.
"""


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_calculators(client):
    response = client.get("/api/estimates/")
    assert response.status_code == 200
    assert response.json()["calculators"] == ["slab", "ceiling", "flooring", "concrete"]


def test_unknown_calculator_404(client):
    response = client.post("/api/estimates/roofing", json={"fields": {}})
    assert response.status_code == 404


def test_slab_estimate(client):
    response = client.post("/api/estimates/slab", json={"fields": {
        "slab_type": "foam",
        "rooms": [{"width": "3", "length": "4", "direction": "short_side"}],
    }})
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["result"]["total_elements"] == 60
    assert data["error"] is None


def test_validation_failure_is_a_200_with_diagnostic(client):
    response = client.post("/api/estimates/ceiling", json={"fields": {
        "rooms": [{"width": "3", "length": "4"}, {"width": "", "length": "4"}],
    }})
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is False
    assert data["error"] == "Invalid width in room 2"
    assert data["result"] is None


def test_flooring_uses_saved_mortar_default(client):
    response = client.put("/api/defaults/mortar/single_sided", json={"value": "6"})
    assert response.status_code == 200
    assert response.json()["mortar_factor_single"] == "6"

    response = client.post("/api/estimates/flooring", json={"fields": {
        "selection": "mortar",
        "rooms": [{"width": "2", "length": "5"}],
    }})
    mortar = response.json()["result"]["mortar"]
    assert mortar["mass_kg"] == "60"
    assert mortar["bags_20kg"] == 3


def test_flooring_selection_toggle(client):
    response = client.post("/api/estimates/flooring/selection",
                           json={"selection": "flooring+mortar", "option": "grout"})
    assert response.status_code == 200
    assert response.json() == {"selection": "flooring+grout", "options": ["flooring", "grout"]}


def test_flooring_selection_invalid(client):
    response = client.post("/api/estimates/flooring/selection",
                           json={"selection": "mortar+grout", "option": "grout"})
    assert response.status_code == 422


def test_basic_calculator_flow(client):
    assert client.get("/api/calculator/").json()["display"] == "0"
    response = client.post("/api/calculator/input", json={"keys": "2+3="})
    state = response.json()
    assert state["display"] == "5"
    assert state["history"] == ["2 + 3 = 5"]

    state = client.post("/api/calculator/input", json={"keys": "c5/0="}).json()
    assert state["display"] == "0"
    assert state["history"][0] == "5 / 0 = 0"

    state = client.post("/api/calculator/clear").json()
    assert state["display"] == "0"
    assert len(state["history"]) == 2


def test_defaults_roundtrip(client):
    assert client.get("/api/defaults/").json() == {
        "mortar_factor_single": "5",
        "mortar_factor_double": "7",
        "grout_coefficient": "1.58",
    }
    response = client.put("/api/defaults/grout", json={"value": "1,7"})
    assert response.json()["grout_coefficient"] == "1.7"

    response = client.post("/api/defaults/reset")
    assert response.json()["grout_coefficient"] == "1.58"


def test_malformed_default_rejected(client):
    response = client.put("/api/defaults/grout", json={"value": "lots"})
    assert response.status_code == 422
    response = client.put("/api/defaults/mortar/triple_sided", json={"value": "5"})
    assert response.status_code == 422

import pytest
from fastapi.testclient import TestClient

from gearspeed.web.app import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "GearSpeed Dashboard"}


def test_combinations_default_page(client):
    response = client.get("/api/combinations")
    assert response.status_code == 200
    data = response.json()
    assert data["page_info"] == "Page 1 of 15"
    assert data["total"] == 147
    assert data["rows"][0]["output_rpm"] == 4000.0
    assert data["rows"][0]["category"] == "High Speed"


def test_combinations_filter_sort_page(client):
    response = client.get("/api/combinations", params={"rpm": "100", "sort": "input", "page": 5})
    data = response.json()
    assert data["pages"] == 5
    assert data["page"] == 5
    assert len(data["rows"]) == 9
    assert data["rpm_filter"] == 100
    assert data["sort"] == "input"


def test_combinations_page_is_clamped(client):
    data = client.get("/api/combinations", params={"page": 40}).json()
    assert data["page"] == 15
    assert len(data["rows"]) == 7


def test_combinations_bad_filter(client):
    response = client.get("/api/combinations", params={"rpm": "fast"})
    assert response.status_code == 400
    assert response.json()["error"] == "Bad request"


def test_combinations_bad_sort(client):
    response = client.get("/api/combinations", params={"sort": "colour"})
    assert response.status_code == 422


def test_optimization(client):
    data = client.get("/api/optimization").json()
    assert data["fastest"]["output"] == "4000.0 RPM"
    assert data["slowest"]["output"] == "15.0 RPM"
    assert data["balanced"]["gears"] == "36T → 12T"


def test_statistics(client):
    data = client.get("/api/statistics").json()
    assert data["total"] == 147
    assert sum(item["count"] for item in data["categories"]) == 147


def test_perfect_ratios(client):
    data = client.get("/api/perfect-ratios").json()
    assert data["count"] == 45
    assert data["percent_display"] == "30.6%"
    assert len(data["items"]) == 10


def test_calculate_get(client):
    data = client.get("/api/calculate", params={
        "input_rpm": "200", "driving_gear": "24", "driven_gear": "48",
    }).json()
    assert data["ratio_display"] == "2.00:1"
    assert data["output_rpm"] == 100.0


def test_calculate_get_falls_back_to_defaults(client):
    explicit = client.get("/api/calculate", params={"input_rpm": "200"}).json()
    fallback = client.get("/api/calculate", params={"input_rpm": "abc"}).json()
    assert fallback == explicit


def test_calculate_post(client):
    response = client.post("/api/calculate", json={
        "input_rpm": 600, "driving_gear": 80, "driven_gear": 12,
    })
    assert response.status_code == 200
    assert response.json()["output_display"] == "4000.0 RPM"


def test_calculate_invalid_gear(client):
    response = client.get("/api/calculate", params={"driving_gear": "-12"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid gear"


def test_dashboard_renders(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "Page 1 of 15" in response.text
    assert "4000.0 RPM" in response.text
    assert "... and 35 more perfect ratios" in response.text
    assert "0.50x" in response.text


def test_dashboard_navigation(client):
    response = client.get("/", params={"page": 1, "action": "next"})
    assert "Page 2 of 15" in response.text

    response = client.get("/", params={"page": 15, "action": "next"})
    assert "Page 15 of 15" in response.text

    response = client.get("/", params={"page": 1, "action": "prev"})
    assert "Page 1 of 15" in response.text


def test_dashboard_calculator_error(client):
    response = client.get("/", params={"calc_driven": "-48"})
    assert response.status_code == 200
    assert "Invalid driven gear size" in response.text


def test_not_found(client):
    response = client.get("/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found", "path": "/missing"}


def test_calculate_infinite_rpm_uses_default(client):
    explicit = client.get("/api/calculate", params={"input_rpm": "200"})
    infinite = client.get("/api/calculate", params={"input_rpm": "inf"})
    assert infinite.status_code == 200
    assert infinite.json() == explicit.json()


def test_calculate_oversized_gear(client):
    response = client.get("/api/calculate", params={"driven_gear": "1" * 400})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid gear"


def test_dashboard_oversized_gear(client):
    response = client.get("/", params={"calc_driving": "1" * 400})
    assert response.status_code == 200
    assert "ratio out of range" in response.text


def test_calculate_fractional_gear_same_for_get_and_post(client):
    fetched = client.get("/api/calculate", params={"driving_gear": "36.5"}).json()
    posted = client.post("/api/calculate", json={"driving_gear": 36.5}).json()
    assert posted == fetched
    assert posted["driving_gear"] == 24


def test_calculate_post_truncating_gear_uses_default(client):
    response = client.post("/api/calculate", json={"driving_gear": 0.5})
    assert response.status_code == 200
    assert response.json()["driving_gear"] == 24

"""
Tests for the FastAPI backend.

Exercises the API endpoints in-process through FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app

GPX_TEXT = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <wpt lat="43.0" lon="-87.0"><name>Start</name></wpt>
  <wpt lat="43.5" lon="-86.5"><name>Mark</name></wpt>
  <wpt lat="44.0" lon="-87.0"><name>Finish</name></wpt>
</gpx>
"""

LAKE_WAYPOINTS = [
    {"name": "Start", "latitude": "43 00.000 N", "longitude": "87 00.000 W"},
    {"name": "Mark", "latitude": "43.5", "longitude": "-86.5"},
    {"name": "Finish", "latitude": "44° 0′ 0″ N", "longitude": "87° 0′ 0″ W"},
]


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


def route_body(**overrides):
    body = {
        "name": "Lake Crossing",
        "waypoints": LAKE_WAYPOINTS,
        "mode": "arrival",
        "speed_knots": 6.0,
        "departure_time": "2025-06-01T08:00:00Z",
    }
    body.update(overrides)
    return body


class TestInfoEndpoints:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "marine-nav-api"}

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "POST /api/route" in response.json()["endpoints"]

    def test_config(self, client):
        data = client.get("/api/config").json()
        assert set(data["planning_modes"]) == {"arrival", "departure", "speed"}
        assert "speed_knots" in data["ranges"]


class TestConvert:
    """Tests for POST /api/convert."""

    def test_convert_dms(self, client):
        response = client.post("/api/convert", json={"text": "43 7 24.24", "is_latitude": True})
        assert response.status_code == 200
        data = response.json()
        assert data["value"] == pytest.approx(43.1234)
        assert data["dd"] == "43.1234° N"
        assert data["ddm"] == "043° 07.404′ N"
        assert data["dms"] == "043° 07′ 24.2″ N"

    def test_custom_precision(self, client):
        response = client.post("/api/convert", json={
            "text": "-87.9876", "is_latitude": False,
            "precision": {"decimal_degrees": 2, "decimal_minutes": 1, "seconds": 0},
        })
        assert response.json()["dd"] == "87.99° W"

    def test_invalid_text(self, client):
        response = client.post("/api/convert", json={"text": "somewhere", "is_latitude": True})
        assert response.status_code == 400

    def test_out_of_range(self, client):
        response = client.post("/api/convert", json={"text": "95", "is_latitude": True})
        assert response.status_code == 400


class TestNavigation:
    """Tests for the point-to-point endpoints."""

    def test_inverse(self, client):
        response = client.post("/api/inverse", json={
            "origin": {"latitude": "43 N", "longitude": "87 W"},
            "destination": {"latitude": "44 N", "longitude": "87 W"},
        })
        assert response.status_code == 200
        data = response.json()
        assert data["cardinal"] == "N"
        assert data["method"] == "Vincenty"
        assert data["distance_nm"] == pytest.approx(60.0, abs=0.2)
        assert data["converged"]

    def test_inverse_rhumb_line(self, client):
        response = client.post("/api/inverse", json={
            "origin": {"latitude": "43", "longitude": "-87"},
            "destination": {"latitude": "43", "longitude": "-86"},
            "use_rhumb_line": True,
        })
        data = response.json()
        assert data["method"] == "Rhumb Line"
        assert data["initial_bearing"] == pytest.approx(90.0)

    def test_destination(self, client):
        response = client.post("/api/destination", json={
            "start": {"latitude": "0", "longitude": "0"},
            "bearing": 0,
            "distance_nm": 60,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["latitude"] > 0.99
        assert data["longitude"] == pytest.approx(0.0, abs=1e-9)
        assert len(data["formatted"]) == 2

    def test_destination_rhumb_line(self, client):
        response = client.post("/api/destination", json={
            "start": {"latitude": "0", "longitude": "0"},
            "bearing": 90,
            "distance_nm": 60,
            "use_rhumb_line": True,
        })
        data = response.json()
        assert data["latitude"] == pytest.approx(0.0, abs=1e-9)
        assert data["longitude"] == pytest.approx(111_120 / 111_319.49, abs=1e-4)

    def test_destination_negative_distance(self, client):
        response = client.post("/api/destination", json={
            "start": {"latitude": "0", "longitude": "0"},
            "bearing": 0,
            "distance_nm": -1,
        })
        assert response.status_code == 422


class TestMagVar:
    """Tests for POST /api/magvar."""

    def test_mid_latitude(self, client):
        response = client.post("/api/magvar", json={
            "latitude": "40.7", "longitude": "-74.0", "calculation_date": "2025-06-01",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["high_confidence"]
        assert data["available"]
        assert data["reason"] is None
        assert data["calculation_date"] == "2025-06-01"
        assert data["model"] == "WMM2025"

    def test_high_latitude_unavailable(self, client):
        data = client.post("/api/magvar", json={
            "latitude": "85 N", "longitude": "0", "calculation_date": "2025-06-01",
        }).json()
        assert not data["high_confidence"]
        assert not data["available"]
        assert data["reason"]

    def test_defaults_to_today(self, client):
        response = client.post("/api/magvar", json={"latitude": "40.7", "longitude": "-74.0"})
        assert response.status_code == 200


class TestRoutePlanning:
    """Tests for POST /api/route and the exports."""

    def test_arrival_mode(self, client):
        response = client.post("/api/route", json=route_body())
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Lake Crossing"
        assert data["mode"] == "arrival"
        assert len(data["legs"]) == 2
        assert data["legs"][0]["from_name"] == "Start"
        assert data["legs"][0]["number"] == 1
        assert data["legs"][1]["eta"] is not None
        assert data["final_eta"] == data["legs"][1]["eta"]
        assert data["total_hours"] == pytest.approx(data["total_distance_nm"] / 6.0)

    def test_speed_mode(self, client):
        response = client.post("/api/route", json=route_body(
            mode="speed", speed_knots=None, arrival_time="2025-06-01T18:00:00Z"))
        assert response.status_code == 200
        data = response.json()
        assert data["speed_knots"] == pytest.approx(data["total_distance_nm"] / 10.0)

    def test_speed_mode_requires_arrival(self, client):
        response = client.post("/api/route", json=route_body(mode="speed"))
        assert response.status_code == 400
        assert "Arrival time is required" in response.json()["detail"]

    def test_bad_waypoint_names_position(self, client):
        waypoints = LAKE_WAYPOINTS[:1] + [{"name": "Typo", "latitude": "4x.5", "longitude": "-86.5"}]
        response = client.post("/api/route", json=route_body(waypoints=waypoints))
        assert response.status_code == 400
        assert "Waypoint 2 (Typo)" in response.json()["detail"]

    def test_single_waypoint(self, client):
        response = client.post("/api/route", json=route_body(waypoints=LAKE_WAYPOINTS[:1]))
        assert response.status_code == 400

    def test_export_csv(self, client):
        response = client.post("/api/route/export/csv", json=route_body())
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.startswith("Route Name,Lake Crossing")

    def test_export_gpx(self, client):
        response = client.post("/api/route/export/gpx", json=route_body())
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/gpx+xml")
        assert "<rte>" in response.text


class TestImport:
    """Tests for the file import endpoints."""

    def test_import_gpx(self, client):
        files = {"file": ("route.gpx", GPX_TEXT.encode("utf-8"), "application/gpx+xml")}
        response = client.post("/api/import/gpx", files=files)
        assert response.status_code == 200
        assert [w["name"] for w in response.json()] == ["Start", "Mark", "Finish"]

    def test_import_gpx_wrong_suffix(self, client):
        files = {"file": ("route.txt", GPX_TEXT.encode("utf-8"), "text/plain")}
        response = client.post("/api/import/gpx", files=files)
        assert response.status_code == 400

    def test_import_empty_file(self, client):
        files = {"file": ("route.gpx", b"", "application/gpx+xml")}
        response = client.post("/api/import/gpx", files=files)
        assert response.status_code == 400

    def test_import_csv(self, client):
        content = "Name,Latitude,Longitude\nStart,43.0,-87.0\nMark,43 30 N,86 30 W\n"
        files = {"file": ("waypoints.csv", content.encode("utf-8"), "text/csv")}
        response = client.post("/api/import/csv", files=files)
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 2
        assert data[1]["latitude"] == pytest.approx(43.5)
        assert data[1]["longitude"] == pytest.approx(-86.5)

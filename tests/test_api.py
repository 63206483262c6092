"""
End-to-end tests through the HTTP API
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from main import app
from placement_attendance.api import routes_admin, routes_student
from placement_attendance.core.config import settings
from placement_attendance.core.db import Base, get_db
from placement_attendance.utils import security

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_api.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

AUTH = {"Authorization": f"Bearer {settings.ADMIN_TOKEN}"}

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def client(monkeypatch, mailer, ws_manager):
    """API client backed by a throwaway SQLite database and fake mail/websockets"""
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    for service in (routes_admin.event_service, routes_admin.attendance_service, routes_student.student_service):
        monkeypatch.setattr(service, "mailer", mailer)
    for service in (routes_admin.event_service, routes_admin.attendance_service):
        monkeypatch.setattr(service, "websocket_manager", ws_manager)
    security.rate_limiter.clear()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=engine)

def create_event(client, name="Campus Drive", event_date="2025-03-01"):
    response = client.post("/admin/events", json={"eventName": name, "eventDate": event_date}, headers=AUTH)
    assert response.status_code == 201
    return response.json()["data"]

def register(client, name="Asha", email="asha@example.com", event_name="Campus Drive"):
    return client.post("/students/register", json={
        "name": name,
        "email": email,
        "rollNumber": f"R-{name}",
        "universityRollNo": f"U-{name}",
        "branch": "CSE",
        "year": "4",
        "phoneNumber": "9876543210",
        "eventName": event_name,
    })

def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}

def test_admin_routes_require_valid_token(client):
    response = client.get("/admin/events", headers={"Authorization": "Bearer wrong"})

    assert response.status_code == 401

def test_create_and_list_events(client):
    create_event(client, "Aptitude Test", "2025-02-01")
    created = create_event(client)

    response = client.get("/admin/events", headers=AUTH)

    assert response.status_code == 200
    events = response.json()["data"]
    assert events[0]["_id"] == created["_id"]
    assert events[0]["eventName"] == "Campus Drive"
    assert events[0]["createdAt"].endswith("Z")

def test_create_event_validates_body(client):
    response = client.post("/admin/events", json={"eventName": "", "eventDate": "2025-03-01"}, headers=AUTH)

    assert response.status_code == 422

def test_delete_event(client, ws_manager):
    created = create_event(client)
    ws_manager.revalidated.clear()

    assert client.delete(f"/admin/events/{created['_id']}", headers=AUTH).status_code == 200
    missing = client.delete(f"/admin/events/{created['_id']}", headers=AUTH)

    assert missing.status_code == 404
    assert missing.json()["message"] == "Event not found"
    assert ws_manager.revalidated == ["admin-scanner"]

def test_register_requires_existing_event(client):
    response = register(client, event_name="Unknown Event")

    assert response.status_code == 404

def test_registration_scan_and_export_flow(client, mailer):
    event = create_event(client)

    registered = register(client)
    assert registered.status_code == 201
    student = registered.json()["data"]["student"]
    assert student["qrCode"] == f"{settings.BASE_URL}/scan/{student['_id']}"
    assert mailer.sent[-1]["subject"] == "Registration Confirmed: Campus Drive"

    scan = client.post("/admin/scan", json={"payload": student["qrCode"]}, headers=AUTH)
    assert scan.status_code == 200
    assert scan.json()["message"] == "Attendance marked successfully"
    assert scan.json()["data"]["user"] == {"id": student["_id"], "name": "Asha", "rollNumber": "R-Asha"}

    again = client.post("/admin/scan", json={"payload": student["_id"]}, headers=AUTH)
    assert again.json()["message"] == "Attendance already marked for today"

    dashboard = client.get(f"/students/{student['_id']}").json()["data"]
    assert len(dashboard["attendance"]) == 1

    rows = client.get(f"/admin/events/{event['_id']}/attendance", headers=AUTH).json()["data"]["rows"]
    assert rows[0]["attendanceCount"] == 1

    csv_response = client.get(f"/admin/events/{event['_id']}/attendance.csv", headers=AUTH)
    assert csv_response.status_code == 200
    assert "Campus_Drive_attendance.csv" in csv_response.headers["content-disposition"]
    lines = csv_response.text.split("\n")
    assert lines[0].startswith("name,email,rollNumber")
    assert lines[1].startswith('"Asha","asha@example.com","R-Asha"')

def test_scan_unknown_student(client):
    response = client.post("/admin/scan", json={"payload": "999"}, headers=AUTH)

    assert response.status_code == 404
    assert response.json()["message"] == "User not found"

def test_remind_reports_counts(client, mailer):
    event = create_event(client)
    register(client, "Asha", "asha@example.com")
    register(client, "Ravi", "ravi@example.com")
    mailer.sent.clear()

    response = client.post(f"/admin/events/{event['_id']}/remind", headers=AUTH)

    assert response.status_code == 200
    assert response.json()["data"]["sent"] == 2
    assert len(mailer.sent) == 2

def test_student_qr_image(client):
    create_event(client)
    student = register(client).json()["data"]["student"]

    response = client.get(f"/students/{student['_id']}/qr.png")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"

def test_scan_landing_does_not_mark(client):
    create_event(client)
    student = register(client).json()["data"]["student"]

    response = client.get(f"/scan/{student['_id']}")

    assert response.status_code == 200
    assert response.json()["data"]["attendanceCount"] == 0

def test_admin_dashboard_page(client):
    response = client.get("/admin")

    assert response.status_code == 200
    assert "New Event" in response.text

def test_remind_without_students_is_not_found(client, mailer):
    event = create_event(client)

    response = client.post(f"/admin/events/{event['_id']}/remind", headers=AUTH)

    assert response.status_code == 404
    assert response.json()["message"] == "No students found for this event"
    assert response.json()["error_code"] == "NO_STUDENTS"
    assert mailer.sent == []

def test_remind_missing_event_is_not_found(client):
    response = client.post("/admin/events/12345/remind", headers=AUTH)

    assert response.status_code == 404
    assert response.json()["error_code"] == "EVENT_NOT_FOUND"

def test_landing_page_links_every_dashboard(client):
    response = client.get("/")

    assert response.status_code == 200
    assert 'href="#register"' in response.text
    assert 'href="#dashboard"' in response.text
    assert 'href="/admin"' in response.text
    assert "/students/register" in response.text

def test_websocket_stats_endpoint_is_gone(client):
    assert client.get("/ws/stats").status_code == 404

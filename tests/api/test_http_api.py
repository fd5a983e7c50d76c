import io
from datetime import date

import pytest

from dir_payroll.container import build_services
from dir_payroll.core.enums import Role
from dir_payroll.main import create_app
from tests.fakes import make_repos


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    employees, tickets, periods = make_repos()
    admin = employees.add("Admin", email="admin@example.com", role=Role.ADMIN, password="admin123")
    alice = employees.add("Alice", salary=104000, password="secret1")
    tickets.add(alice.employee_id, date(2024, 3, 5), 8, project_title="R&D")

    container = build_services(employees_repo=employees, tickets_repo=tickets, employee_periods_repo=periods)
    app = create_app(container=container)
    return app.test_client(), admin, alice, periods


def _login_as(client, employee, role):
    with client.session_transaction() as sess:
        sess["employee_id"] = employee.employee_id
        sess["role"] = role.value


def test_admin_routes_need_login_and_admin(env):
    client, _, alice, _ = env

    assert client.get("/api/periods").status_code == 401

    _login_as(client, alice, Role.EMPLOYEE)
    resp = client.get("/api/periods")
    assert resp.status_code == 403
    assert resp.get_json()["success"] is False
    assert client.post("/api/generate-period-xml", json={}).status_code == 403


def test_login_and_me(env):
    client, _, alice, _ = env

    resp = client.post("/api/login", json={"email": "alice@example.com", "password": "bad"})
    assert resp.status_code == 401

    resp = client.post("/api/login", json={"email": "alice@example.com", "password": "secret1"})
    assert resp.status_code == 200
    me = client.get("/api/me").get_json()["employee"]
    assert me["employee_id"] == alice.employee_id
    assert me["yearly_salary"] == "104000.00"


def test_employee_creates_ticket(env):
    client, _, alice, _ = env
    _login_as(client, alice, Role.EMPLOYEE)

    resp = client.post(
        "/api/tickets",
        json={"dir_number": "DIR7", "project_title": "Road", "date_worked": "2024-03-20", "hours_worked": "4"},
    )
    assert resp.status_code == 201

    listed = client.get("/api/tickets").get_json()["tickets"]
    assert listed[0]["pay_period"] == "Mar 16-31, 2024"

    bad = client.post("/api/tickets", json={"dir_number": "DIR7", "project_title": "Road", "date_worked": "2024-03-20"})
    assert bad.status_code == 400


def test_period_overview_and_xml_download(env):
    client, admin, alice, periods = env
    _login_as(client, admin, Role.ADMIN)

    [period] = client.get("/api/periods").get_json()["periods"]
    assert period["key"] == "2024-03-1"
    assert period["total_adjusted_pay"] == "154.92"
    assert period["employees"][0]["status"] == "pending"

    blocked = client.post("/api/generate-period-xml", json={"period_key": "2024-03-1", "employee_id": alice.employee_id})
    assert blocked.status_code == 400

    resp = client.post(
        "/api/update-employee-period",
        json={"period_key": "2024-03-1", "employee_id": alice.employee_id, "status": "awaiting_pay"},
    )
    assert resp.get_json()["data"]["status"] == "awaiting_pay"

    resp = client.post(
        "/api/generate-period-xml",
        json={"period_key": "2024-03-1", "employee_id": alice.employee_id, "check": {"checkNumber": "55"}},
    )
    assert resp.status_code == 200
    assert resp.mimetype == "application/xml"
    assert 'filename="dir-alice-2024-03-1.xml"' in resp.headers["Content-Disposition"]
    body = resp.get_data(as_text=True)
    assert "<Project>R&amp;D</Project>" in body
    assert "<CheckNumber>55</CheckNumber>" in body

    detail = client.get(f"/api/periods/2024-03-1/{alice.employee_id}").get_json()["employee"]
    assert detail["status"] == "ready_for_dir"
    assert detail["hourly_wage"] == "50.00"


def test_invalid_transition_and_bad_key(env):
    client, admin, alice, _ = env
    _login_as(client, admin, Role.ADMIN)

    resp = client.post(
        "/api/update-employee-period",
        json={"period_key": "2024-03-1", "employee_id": alice.employee_id, "status": "ready_for_dir"},
    )
    assert resp.status_code == 400
    assert client.get("/api/periods/2024-13-1").status_code == 400
    assert client.get("/api/periods/2020-01-1").status_code == 404


def test_salary_update_and_csv_import(env):
    client, admin, alice, _ = env
    _login_as(client, admin, Role.ADMIN)

    resp = client.patch(f"/api/profiles/{alice.employee_id}/salary", json={"salary": ""})
    assert resp.get_json()["employee"]["salary_pending"] is True

    csv_text = (
        "Ticket #,Ticket Name,DIR #,Deliverable Due Date,Total Man Hours,People\n"
        'T1,Proj A,DIR100,3/5/24,16,"Alice, Bob"\n'
    )
    resp = client.post(
        "/api/import-csv",
        data={"file": (io.BytesIO(csv_text.encode("utf-8")), "tickets.csv")},
        content_type="multipart/form-data",
    )
    report = resp.get_json()
    assert report["tickets_created"] == 2
    assert report["employees_created"] == 1

    missing = client.post("/api/import-csv", data="Ticket #,People\n", content_type="text/csv")
    assert missing.status_code == 400

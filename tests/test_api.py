from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from barbershop import booking, catalog, config

from conftest import auth_header


def next_weekday(weekday: int) -> date:
    day = date.today() + timedelta(days=7)
    while day.weekday() != weekday:
        day += timedelta(days=1)
    return day


@pytest.fixture
def future_monday():
    return next_weekday(0)


def book(client, user, service, day, hhmm):
    return client.post(
        "/appointments",
        json={"service_id": service.id, "appointment_date": f"{day.isoformat()}T{hhmm}:00"},
        headers=auth_header(user),
    )


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_register_login_and_me(client, monkeypatch):
    monkeypatch.setattr(config, "ADMIN_PHONES", {"0500000001"})

    response = client.post("/users", json={"phone": "0551234567", "password": "secret-pass", "name": "Ali"})
    assert response.status_code == 201
    assert response.json()["role"] == "user"

    admin = client.post("/users", json={"phone": "0500000001", "password": "secret-pass"})
    assert admin.json()["role"] == "admin"

    duplicate = client.post("/users", json={"phone": "0551234567", "password": "secret-pass"})
    assert duplicate.status_code == 409

    login = client.post("/auth/login", data={"username": "0551234567", "password": "secret-pass"})
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["phone"] == "0551234567"
    assert me.json()["name"] == "Ali"

    renamed = client.patch("/me", json={"name": "Ali B."}, headers={"Authorization": f"Bearer {token}"})
    assert renamed.json()["name"] == "Ali B."


def test_register_rejects_bad_phone(client):
    response = client.post("/users", json={"phone": "12345", "password": "secret-pass"})
    assert response.status_code == 422


def test_login_wrong_password(client, customer):
    response = client.post("/auth/login", data={"username": customer.phone, "password": "wrong-pass"})
    assert response.status_code == 401


def test_me_requires_token(client):
    assert client.get("/me").status_code == 401
    assert client.get("/me", headers={"Authorization": "Bearer nonsense"}).status_code == 401


def test_service_admin_endpoints(client, admin, customer):
    created = client.post(
        "/services",
        json={"name": "Haircut", "duration_minutes": 30, "price": 50},
        headers=auth_header(admin),
    )
    assert created.status_code == 201
    service_id = created.json()["id"]

    forbidden = client.post("/services", json={"name": "Nope"}, headers=auth_header(customer))
    assert forbidden.status_code == 403

    patched = client.patch(f"/services/{service_id}", json={"price": 65}, headers=auth_header(admin))
    assert patched.json()["price"] == 65

    assert client.delete(f"/services/{service_id}", headers=auth_header(admin)).json() == {"success": True}
    assert client.get("/services").json() == []
    assert client.get(f"/services/{service_id}").json()["is_active"] is False
    assert [s["id"] for s in client.get("/services/all", headers=auth_header(admin)).json()] == [service_id]

    assert client.get("/services/999").status_code == 404
    assert client.delete("/services/999", headers=auth_header(admin)).status_code == 404


def test_seed_services(client, admin):
    assert client.post("/services/seed", headers=auth_header(admin)).status_code == 200
    assert len(client.get("/services").json()) > 0


def test_work_hours_endpoints(client, admin, customer):
    assert client.get("/work-hours").json() == []
    assert client.get("/work-hours/2").status_code == 404

    body = {"start_time": "10:00", "end_time": "14:00", "is_working_day": True, "slot_duration_minutes": 15}
    assert client.put("/work-hours/2", json=body, headers=auth_header(customer)).status_code == 403

    response = client.put("/work-hours/2", json=body, headers=auth_header(admin))
    assert response.status_code == 200
    assert client.get("/work-hours/2").json()["slot_duration_minutes"] == 15

    bad = dict(body, start_time="15:00")
    assert client.put("/work-hours/2", json=bad, headers=auth_header(admin)).status_code == 422
    assert client.put("/work-hours/9", json=body, headers=auth_header(admin)).status_code == 422

    assert client.post("/work-hours/initialize", headers=auth_header(admin)).status_code == 200
    # already had a row, so defaults were not applied
    assert len(client.get("/work-hours").json()) == 1


def test_available_slots_endpoint(client, morning_hours, haircut, future_monday):
    response = client.get(
        "/appointments/available-slots",
        params={"date": future_monday.isoformat(), "service_id": haircut.id},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["is_working_day"] is True
    assert [s["time"] for s in body["slots"]] == ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]


def test_available_slots_unknown_service(client, morning_hours, future_monday):
    response = client.get(
        "/appointments/available-slots",
        params={"date": future_monday.isoformat(), "service_id": 999},
    )
    assert response.status_code == 404


def test_booking_flow(client, morning_hours, haircut, customer, other_customer, admin, future_monday):
    first = book(client, customer, haircut, future_monday, "10:00")
    assert first.status_code == 201
    appt_id = first.json()["id"]

    clash = book(client, other_customer, haircut, future_monday, "10:15")
    assert clash.status_code == 409
    assert clash.json()["detail"] == "This time slot is no longer available"

    assert book(client, other_customer, haircut, future_monday, "10:30").status_code == 201

    slots = client.get(
        "/appointments/available-slots",
        params={"date": future_monday.isoformat(), "service_id": haircut.id},
    ).json()["slots"]
    taken = [s["time"] for s in slots if not s["available"]]
    assert taken == ["10:00", "10:30"]

    mine = client.get("/appointments/me", headers=auth_header(customer)).json()
    assert [a["id"] for a in mine] == [appt_id]
    assert mine[0]["status"] == "pending"
    assert mine[0]["service"]["name"] == "Haircut"
    assert mine[0]["customer_name"] == "Test User"

    upcoming = client.get("/appointments/me/upcoming", headers=auth_header(customer)).json()
    assert [a["id"] for a in upcoming] == [appt_id]

    pending = client.get("/appointments/pending", headers=auth_header(admin)).json()
    assert len(pending) == 2
    assert pending[0]["user"]["phone"] == customer.phone

    assert client.get("/appointments/pending", headers=auth_header(customer)).status_code == 403


def test_booking_requires_login(client, haircut, future_monday):
    response = client.post(
        "/appointments",
        json={"service_id": haircut.id, "appointment_date": f"{future_monday.isoformat()}T10:00:00"},
    )
    assert response.status_code == 401


def test_booking_bad_date(client, haircut, customer):
    response = client.post(
        "/appointments",
        json={"service_id": haircut.id, "appointment_date": "soon"},
        headers=auth_header(customer),
    )
    assert response.status_code == 422


def test_cancel_authorization(client, morning_hours, haircut, customer, other_customer, admin, future_monday):
    appt_id = book(client, customer, haircut, future_monday, "09:00").json()["id"]

    assert client.patch(f"/appointments/{appt_id}/cancel", headers=auth_header(other_customer)).status_code == 403
    assert client.get(f"/appointments/{appt_id}", headers=auth_header(other_customer)).status_code == 403

    assert client.patch(f"/appointments/{appt_id}/cancel", headers=auth_header(customer)).status_code == 200
    assert client.get(f"/appointments/{appt_id}", headers=auth_header(customer)).json()["status"] == "cancelled"

    assert client.patch("/appointments/999/cancel", headers=auth_header(admin)).status_code == 404

    # the freed slot can be booked again
    assert book(client, other_customer, haircut, future_monday, "09:00").status_code == 201


def test_admin_status_changes(client, morning_hours, haircut, customer, admin, future_monday, monkeypatch):
    monkeypatch.setattr(config, "STRICT_STATUS_TRANSITIONS", True)
    appt_id = book(client, customer, haircut, future_monday, "11:00").json()["id"]

    def set_status(status, user=admin):
        return client.patch(f"/appointments/{appt_id}/status", json={"status": status}, headers=auth_header(user))

    assert set_status("confirmed", user=customer).status_code == 403
    assert set_status("confirmed").status_code == 200
    assert set_status("completed").status_code == 200
    assert set_status("pending").status_code == 409
    assert set_status("unknown").status_code == 422
    assert client.patch("/appointments/999/status", json={"status": "confirmed"},
                        headers=auth_header(admin)).status_code == 404

    everything = client.get("/appointments", headers=auth_header(admin)).json()
    assert everything[0]["status"] == "completed"
    assert client.get("/appointments/upcoming", headers=auth_header(admin)).json()[0]["id"] == appt_id


def test_blank_name_is_rejected(client, customer):
    response = client.patch("/me", json={"name": "   "}, headers=auth_header(customer))
    assert response.status_code == 422

    trimmed = client.patch("/me", json={"name": "  Ali  "}, headers=auth_header(customer))
    assert trimmed.json()["name"] == "Ali"


def raise_storage_error(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_booking_storage_failure_returns_503(client, haircut, customer, future_monday, monkeypatch):
    monkeypatch.setattr(booking, "find_overlapping", raise_storage_error)

    response = book(client, customer, haircut, future_monday, "10:00")

    assert response.status_code == 503
    assert response.json() == {"detail": "Storage is unavailable"}


def test_unhandled_storage_error_returns_503(client, monkeypatch):
    monkeypatch.setattr(catalog, "list_services", raise_storage_error)

    response = client.get("/services")

    assert response.status_code == 503
    assert response.json() == {"detail": "Storage is unavailable"}

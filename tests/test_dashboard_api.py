BOOKING_DATE = "2030-01-07"


def book(client, service, time="10:00", phone="081234567890"):
    response = client.post("/api/v1/booking/barber-king", json={
        "serviceId": str(service.id),
        "date": BOOKING_DATE,
        "time": time,
        "customerName": "Siti Aminah",
        "customerPhone": phone,
    })
    assert response.status_code == 200
    return response.json()["appointment"]


# ============================================================================
# Authentication
# ============================================================================

def test_dashboard_requires_token(client, business):
    response = client.get(f"/api/v1/dashboard/businesses/{business.id}/services")

    assert response.status_code in (401, 403)


def test_invalid_token_is_401(client, business):
    response = client.get(
        f"/api/v1/dashboard/businesses/{business.id}/services",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401


def test_owner_cannot_read_other_business(client, business, stranger_headers):
    response = client.get(
        f"/api/v1/dashboard/businesses/{business.id}/appointments",
        params={"date": BOOKING_DATE},
        headers=stranger_headers,
    )

    assert response.status_code == 403


# ============================================================================
# Appointments
# ============================================================================

def test_appointments_by_date(client, business, service, staff, owner_headers):
    kept = book(client, service, time="13:00")
    dropped = book(client, service, time="10:00", phone="089999999999")
    client.patch(
        f"/api/v1/dashboard/appointments/{dropped['id']}/status",
        json={"status": "cancelled"},
        headers=owner_headers,
    )

    response = client.get(
        f"/api/v1/dashboard/businesses/{business.id}/appointments",
        params={"date": BOOKING_DATE},
        headers=owner_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["date"] == BOOKING_DATE
    assert data["total_appointments"] == 2
    assert [a["id"] for a in data["appointments"]] == [dropped["id"], kept["id"]]
    assert data["appointments"][1]["service_name"] == "Gentlemen Cut"


def test_status_changes_and_terminal_guard(client, business, service, staff, owner_headers, publisher):
    appointment = book(client, service)
    url = f"/api/v1/dashboard/appointments/{appointment['id']}/status"

    confirmed = client.patch(url, json={"status": "confirmed"}, headers=owner_headers)
    completed = client.patch(url, json={"status": "completed"}, headers=owner_headers)
    reopened = client.patch(url, json={"status": "pending"}, headers=owner_headers)

    assert confirmed.json()["status"] == "confirmed"
    assert completed.json()["status"] == "completed"
    assert reopened.status_code == 409
    assert "completed" in reopened.json()["detail"]
    assert "status_changed" in publisher.event_types()


def test_unknown_status_is_422(client, business, service, staff, owner_headers):
    appointment = book(client, service)

    response = client.patch(
        f"/api/v1/dashboard/appointments/{appointment['id']}/status",
        json={"status": "no_show"},
        headers=owner_headers,
    )

    assert response.status_code == 422


# ============================================================================
# Services and staff
# ============================================================================

def test_service_crud_and_capacity(client, business, owner_headers):
    base = f"/api/v1/dashboard/businesses/{business.id}/services"
    created = [
        client.post(base, json={"name": f"Service {i}", "duration": 30, "price": 25000}, headers=owner_headers)
        for i in range(5)
    ]
    assert all(r.status_code == 200 for r in created)

    refused = client.post(base, json={"name": "Sixth", "duration": 30, "price": 25000}, headers=owner_headers)
    assert refused.status_code == 403
    assert "free" in refused.json()["detail"]

    service_id = created[0].json()["id"]
    updated = client.patch(
        f"/api/v1/dashboard/services/{service_id}",
        json={"price": 30000},
        headers=owner_headers,
    )
    assert updated.json()["price"] == 30000
    assert updated.json()["duration"] == 30

    deleted = client.delete(f"/api/v1/dashboard/services/{service_id}", headers=owner_headers)
    assert deleted.json() == {"success": True, "message": "Service deactivated"}

    active = client.get(base, headers=owner_headers).json()
    everything = client.get(base, params={"include_inactive": True}, headers=owner_headers).json()
    assert active["total"] == 4
    assert everything["total"] == 5


def test_service_duration_is_validated(client, business, owner_headers):
    response = client.post(
        f"/api/v1/dashboard/businesses/{business.id}/services",
        json={"name": "Kilat", "duration": 5, "price": 0},
        headers=owner_headers,
    )

    assert response.status_code == 422


def test_staff_roster(client, business, owner_headers):
    base = f"/api/v1/dashboard/businesses/{business.id}/staff"

    andi = client.post(base, json={"name": "Andi", "email": "andi@example.com"}, headers=owner_headers).json()
    client.post(base, json={"name": "Budi"}, headers=owner_headers)
    third = client.post(base, json={"name": "Citra"}, headers=owner_headers)
    assert third.status_code == 403

    renamed = client.patch(f"/api/v1/dashboard/staff/{andi['id']}", json={"name": "Andika"}, headers=owner_headers)
    assert renamed.json()["name"] == "Andika"

    toggled = client.patch(f"/api/v1/dashboard/staff/{andi['id']}/status", headers=owner_headers)
    assert toggled.json()["is_active"] is False

    roster = client.get(base, headers=owner_headers).json()
    assert roster["total"] == 2

    deleted = client.delete(f"/api/v1/dashboard/staff/{andi['id']}", headers=owner_headers)
    assert deleted.json()["success"] is True


def test_tier_usage(client, business, service, staff, owner_headers):
    response = client.get(f"/api/v1/dashboard/businesses/{business.id}/tier", headers=owner_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["tier"] == "free"
    assert data["limits"]["max_staff"] == 2
    assert data["usage"] == {"staff": 1, "services": 1}


# ============================================================================
# Operating hours and onboarding
# ============================================================================

def test_operating_hours_apply_to_all(client, business, owner_headers):
    url = f"/api/v1/dashboard/businesses/{business.id}/operating-hours"

    response = client.put(url, json={
        "hours": [{"dayOfWeek": "monday", "openTime": "10:00", "closeTime": "21:00"}],
        "applyToAll": True,
    }, headers=owner_headers)

    assert response.status_code == 200
    rows = client.get(url, headers=owner_headers).json()["operating_hours"]
    assert len(rows) == 7
    assert all(row["open_time"] == "10:00" and row["close_time"] == "21:00" for row in rows)
    assert all(row["is_closed"] is False for row in rows)


def test_operating_hours_close_before_open_is_422(client, business, owner_headers):
    response = client.put(
        f"/api/v1/dashboard/businesses/{business.id}/operating-hours",
        json={"hours": [{"dayOfWeek": "monday", "openTime": "18:00", "closeTime": "09:00"}]},
        headers=owner_headers,
    )

    assert response.status_code == 422


def test_onboarding(client, stranger_headers):
    body = {
        "business": {
            "name": "Salon Cantik",
            "slug": "salon-cantik",
            "category": "salon",
            "ownerName": "Dewi Lestari",
            "ownerEmail": "dewi@example.com",
        },
        "operatingHours": {"openTime": "10:00", "closeTime": "19:00", "workDays": ["tuesday", "saturday"]},
    }

    created = client.post("/api/v1/dashboard/businesses", json=body, headers=stranger_headers)
    duplicate = client.post("/api/v1/dashboard/businesses", json=body, headers=stranger_headers)

    assert created.status_code == 200
    assert created.json()["business"]["slug"] == "salon-cantik"
    assert duplicate.status_code == 409

    page = client.get("/api/v1/booking/salon-cantik").json()
    assert len(page["services"]) == 3
    assert [s["name"] for s in page["staff"]] == ["Dewi Lestari"]
    open_days = [row["day_of_week"] for row in page["operating_hours"] if not row["is_closed"]]
    assert open_days == ["tuesday", "saturday"]


# ============================================================================
# Admin
# ============================================================================

def test_admin_routes_require_admin_role(client, business, owner_headers):
    response = client.get("/api/v1/admin/businesses", headers=owner_headers)

    assert response.status_code == 403


def test_admin_deactivation_hides_booking_page(client, business, admin_headers):
    listed = client.get("/api/v1/admin/businesses", headers=admin_headers).json()
    assert listed["total"] == 1

    response = client.delete(f"/api/v1/admin/businesses/{business.id}", headers=admin_headers)

    assert response.json() == {"success": True}
    assert client.get("/api/v1/booking/barber-king").status_code == 404


def test_admin_may_manage_any_business(client, business, admin_headers):
    response = client.get(f"/api/v1/dashboard/businesses/{business.id}/tier", headers=admin_headers)

    assert response.status_code == 200


def test_health(client):
    assert client.get("/health/").json()["status"] == "healthy"
    assert client.get("/").json()["status"] == "running"


def test_detailed_health_with_notifications_off(client, business):
    response = client.get("/health/detailed", headers={"X-Correlation-ID": "req-42"})

    assert response.headers["X-Correlation-ID"] == "req-42"
    data = response.json()
    assert data["database"] == "healthy"
    assert data["notifications"] == "disabled"
    assert data["bookable_businesses"] == 1
    assert data["overall"] == "healthy"


def test_health_reports_slot_settings(client):
    data = client.get("/health/").json()

    assert data["timezone"] == "Asia/Jakarta"
    assert data["slot_interval_minutes"] == 30


# ============================================================================
# Business profile
# ============================================================================

def test_check_slug(client, business, stranger_headers):
    taken = client.get("/api/v1/dashboard/businesses/check-slug/barber-king", headers=stranger_headers)
    free = client.get("/api/v1/dashboard/businesses/check-slug/salon-cantik", headers=stranger_headers)

    assert taken.json() == {"slug": "barber-king", "available": False}
    assert free.json() == {"slug": "salon-cantik", "available": True}


def test_update_business_profile(client, business, owner_headers):
    url = f"/api/v1/dashboard/businesses/{business.id}"

    response = client.patch(url, json={
        "name": "Barber King Kemang",
        "category": "salon",
        "address": "Jl. Kemang Raya 10",
    }, headers=owner_headers)

    assert response.status_code == 200
    data = response.json()["business"]
    assert data["name"] == "Barber King Kemang"
    assert data["category"] == "salon"
    assert data["address"] == "Jl. Kemang Raya 10"
    assert data["slug"] == "barber-king"
    assert data["owner_name"] == "Budi Santoso"


def test_business_slug_cannot_be_changed(client, business, owner_headers):
    response = client.patch(
        f"/api/v1/dashboard/businesses/{business.id}",
        json={"slug": "barber-queen"},
        headers=owner_headers,
    )

    assert response.status_code == 422
    assert client.get("/api/v1/booking/barber-king").status_code == 200


def test_update_other_business_is_403(client, business, stranger_headers):
    response = client.patch(
        f"/api/v1/dashboard/businesses/{business.id}",
        json={"name": "Hijacked"},
        headers=stranger_headers,
    )

    assert response.status_code == 403


def test_overview(client, business, service, make_service, staff, owner_headers):
    make_service(business, name="Old Cut", is_active=False)
    booked = book(client, service, time="13:00")

    response = client.get(f"/api/v1/dashboard/businesses/{business.id}/overview", headers=owner_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["business"]["slug"] == "barber-king"
    assert sorted(s["name"] for s in data["services"]) == ["Gentlemen Cut", "Old Cut"]
    assert [s["name"] for s in data["staff"]] == ["Andi"]
    assert [a["id"] for a in data["upcoming_appointments"]] == [booked["id"]]
    assert data["upcoming_appointments"][0]["staff_name"] == "Andi"
    assert len(data["operating_hours"]) == 7
    assert data["tier_limits"]["max_services"] == 5

"""
Tests for the appointment ledger endpoints.
"""

from datetime import datetime, timedelta


class TestCreateAppointment:
    def test_total_is_sum_of_service_prices(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service("Corte", 50.0)
        color = create_service("Coloração", 120.0)
        maria = create_client()

        appt = create_appointment(maria["id"], [cut["id"], color["id"]], "2024-05-15T00:00:00")

        assert appt["totalAmount"] == 170.0
        assert appt["status"] == "scheduled"
        assert appt["client"]["name"] == "Maria Silva"
        assert sorted(appt["serviceIds"]) == sorted([cut["id"], color["id"]])
        assert len(appt["services"]) == 2
        assert appt["date"].startswith("2024-05-15T10:00")

    def test_price_change_does_not_touch_existing_booking(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service("Corte", 50.0)
        maria = create_client()
        appt = create_appointment(maria["id"], [cut["id"]], "2024-05-15T00:00:00")

        client.put(f"/services/{cut['id']}", json={"price": 80.0}, headers=auth_headers)

        resp = client.get(f"/appointments/{appt['id']}", headers=auth_headers)
        assert resp.json()["totalAmount"] == 50.0

    def test_unknown_service_is_not_found(self, client, auth_headers, create_client):
        maria = create_client()
        resp = client.post(
            "/appointments",
            json={
                "clientId": maria["id"],
                "serviceIds": [999],
                "date": "2024-05-15T00:00:00",
                "startTime": "10:00",
                "endTime": "11:00",
            },
            headers=auth_headers,
        )
        assert resp.status_code == 404

    def test_other_owners_service_is_not_found(self, client, auth_headers, other_headers, create_service, create_client):
        foreign = create_service("Corte", 50.0, headers=other_headers)
        maria = create_client()
        resp = client.post(
            "/appointments",
            json={
                "clientId": maria["id"],
                "serviceIds": [foreign["id"]],
                "date": "2024-05-15T00:00:00",
                "startTime": "10:00",
                "endTime": "11:00",
            },
            headers=auth_headers,
        )
        assert resp.status_code == 404

    def test_invalid_time_format_rejected(self, client, auth_headers, create_service, create_client):
        cut = create_service()
        maria = create_client()
        resp = client.post(
            "/appointments",
            json={
                "clientId": maria["id"],
                "serviceIds": [cut["id"]],
                "date": "2024-05-15T00:00:00",
                "startTime": "25:00",
                "endTime": "11:00",
            },
            headers=auth_headers,
        )
        assert resp.status_code == 422

    def test_requires_authentication(self, client):
        assert client.get("/appointments").status_code == 401


class TestListAppointments:
    def test_day_view_returns_only_that_day_sorted(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service()
        maria = create_client()
        create_appointment(maria["id"], [cut["id"]], "2024-05-15T00:00:00", start="15:00", end="16:00")
        create_appointment(maria["id"], [cut["id"]], "2024-05-15T00:00:00", start="00:00", end="01:00")
        create_appointment(maria["id"], [cut["id"]], "2024-05-15T00:00:00", start="23:59", end="23:59")
        create_appointment(maria["id"], [cut["id"]], "2024-05-16T00:00:00", start="00:00", end="01:00")
        create_appointment(maria["id"], [cut["id"]], "2024-05-14T00:00:00", start="23:30", end="23:59")

        resp = client.get(
            "/appointments", params={"view": "day", "date": "2024-05-15T12:00:00"}, headers=auth_headers
        )

        assert resp.status_code == 200
        assert [a["startTime"] for a in resp.json()] == ["00:00", "15:00", "23:59"]

    def test_week_view(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service()
        maria = create_client()
        create_appointment(maria["id"], [cut["id"]], "2024-05-12T00:00:00")  # Sunday
        create_appointment(maria["id"], [cut["id"]], "2024-05-18T00:00:00")  # Saturday
        create_appointment(maria["id"], [cut["id"]], "2024-05-19T00:00:00")  # next Sunday

        resp = client.get(
            "/appointments", params={"view": "week", "date": "2024-05-15T12:00:00"}, headers=auth_headers
        )

        assert [a["date"][:10] for a in resp.json()] == ["2024-05-12", "2024-05-18"]

    def test_without_view_returns_everything(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service()
        maria = create_client()
        create_appointment(maria["id"], [cut["id"]], "2024-01-01T00:00:00")
        create_appointment(maria["id"], [cut["id"]], "2025-01-01T00:00:00")

        resp = client.get("/appointments", headers=auth_headers)
        assert len(resp.json()) == 2

    def test_owner_isolation(self, client, auth_headers, other_headers, create_service, create_client, create_appointment):
        cut = create_service()
        maria = create_client()
        appt = create_appointment(maria["id"], [cut["id"]], "2024-05-15T00:00:00")

        assert client.get("/appointments", headers=other_headers).json() == []
        assert client.get(f"/appointments/{appt['id']}", headers=other_headers).status_code == 404


class TestUpcomingAndEarnings:
    def test_upcoming_only_active_within_window(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service()
        maria = create_client()
        soon = datetime.now() + timedelta(hours=1)
        later = datetime.now() + timedelta(hours=10)

        create_appointment(maria["id"], [cut["id"]], soon.strftime("%Y-%m-%dT00:00:00"), start=soon.strftime("%H:%M"))
        create_appointment(
            maria["id"], [cut["id"]], soon.strftime("%Y-%m-%dT00:00:00"), start=soon.strftime("%H:%M"), status="cancelled"
        )
        create_appointment(maria["id"], [cut["id"]], later.strftime("%Y-%m-%dT00:00:00"), start=later.strftime("%H:%M"))

        resp = client.get("/appointments/upcoming", headers=auth_headers)

        assert resp.status_code == 200
        body = resp.json()
        assert len(body) == 1
        assert body[0]["status"] == "scheduled"

    def test_today_earnings_counts_active_bookings(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service("Corte", 50.0)
        color = create_service("Coloração", 120.0)
        maria = create_client()
        today = datetime.now().strftime("%Y-%m-%dT00:00:00")
        tomorrow = (datetime.now() + timedelta(days=1)).strftime("%Y-%m-%dT00:00:00")

        create_appointment(maria["id"], [cut["id"]], today, start="00:00")
        create_appointment(maria["id"], [color["id"]], today, start="12:00", status="confirmed")
        create_appointment(maria["id"], [color["id"]], today, start="13:00", status="completed")
        create_appointment(maria["id"], [cut["id"]], tomorrow, start="00:00")

        resp = client.get("/appointments/today-earnings", headers=auth_headers)

        assert resp.status_code == 200
        assert resp.json()["total"] == 170.0


class TestUpdateAppointment:
    def test_changing_services_reprices(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service("Corte", 50.0)
        nails = create_service("Manicure", 30.0)
        maria = create_client()
        appt = create_appointment(maria["id"], [cut["id"]], "2024-05-15T00:00:00")

        resp = client.put(
            f"/appointments/{appt['id']}",
            json={"serviceIds": [cut["id"], nails["id"]]},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        assert resp.json()["totalAmount"] == 80.0

    def test_partial_update_keeps_other_fields(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service("Corte", 50.0)
        maria = create_client()
        appt = create_appointment(maria["id"], [cut["id"]], "2024-05-15T00:00:00")

        resp = client.put(
            f"/appointments/{appt['id']}", json={"status": "confirmed", "startTime": "14:30"}, headers=auth_headers
        )

        body = resp.json()
        assert body["status"] == "confirmed"
        assert body["startTime"] == "14:30"
        assert body["date"].startswith("2024-05-15T14:30")
        assert body["totalAmount"] == 50.0
        assert body["endTime"] == "11:00"


class TestRemoveAppointment:
    def test_reason_cancels_and_keeps_record(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service()
        maria = create_client()
        appt = create_appointment(maria["id"], [cut["id"]], "2024-05-15T00:00:00")

        resp = client.delete(f"/appointments/{appt['id']}", params={"reason": "Client sick"}, headers=auth_headers)
        assert resp.status_code == 200

        kept = client.get(f"/appointments/{appt['id']}", headers=auth_headers).json()
        assert kept["status"] == "cancelled"
        assert kept["cancellationReason"] == "Client sick"

    def test_without_reason_deletes(self, client, auth_headers, create_service, create_client, create_appointment):
        cut = create_service()
        maria = create_client()
        appt = create_appointment(maria["id"], [cut["id"]], "2024-05-15T00:00:00")

        assert client.delete(f"/appointments/{appt['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"/appointments/{appt['id']}", headers=auth_headers).status_code == 404

    def test_missing_appointment(self, client, auth_headers):
        assert client.delete("/appointments/12345", headers=auth_headers).status_code == 404

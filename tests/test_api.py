"""
Integration tests for FastAPI endpoints.

The frozen "now" from conftest is Monday 2025-03-10 12:00.
"""

import datetime

import pytest
from icalendar import Calendar

from app.core.validators import MSG_END_BEFORE_START, MSG_NAME_TAKEN, MSG_WAGE_TOO_HIGH


@pytest.fixture
def saved_office(store, office):
    return store.create_workplace(office)


@pytest.fixture
def saved_cafe(store, cafe):
    return store.create_workplace(cafe)


def shift_body(workplace_id: str, day: str, start: str, end: str, **extra) -> dict:
    return {
        "workplace_id": workplace_id,
        "date": day,
        "start_time": f"{day}T{start}:00",
        "end_time": f"{day}T{end}:00",
        **extra,
    }


class TestHealth:
    """Monitoring endpoint."""

    def test_health_endpoint_returns_ok(self, test_client):
        """GET /health should return 200 OK for monitoring."""
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_request_id_header(self, test_client):
        response = test_client.get("/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"


class TestWorkplaceRoutes:
    """Create, edit, reorder and delete workplaces."""

    def test_create_and_list(self, test_client):
        response = test_client.post("/api/workplaces", json={"name": "Library", "hourly_wage": 1100})

        assert response.status_code == 201
        created = response.json()
        assert created["name"] == "Library"
        assert created["night_shift_rate"] == 1.25
        assert created["holiday_rate"] == 1.35
        assert created["text_color"] in ("#000", "#fff")

        listed = test_client.get("/api/workplaces").json()
        assert [w["name"] for w in listed] == ["Library"]

    def test_duplicate_name_rejected(self, test_client, saved_office):
        response = test_client.post("/api/workplaces", json={"name": "office", "hourly_wage": 1100})

        assert response.status_code == 422
        assert response.json()["detail"] == MSG_NAME_TAKEN

    def test_wage_limit_rejected(self, test_client):
        response = test_client.post("/api/workplaces", json={"name": "Library", "hourly_wage": 20000})

        assert response.status_code == 422
        assert response.json()["detail"] == MSG_WAGE_TOO_HIGH

    def test_next_color_skips_used(self, test_client, saved_office):
        response = test_client.get("/api/workplaces/next-color")

        assert response.status_code == 200
        assert response.json()["color"] != saved_office.color

    def test_update_keeps_own_name(self, test_client, saved_office):
        response = test_client.put(
            f"/api/workplaces/{saved_office.id}",
            json={"name": "Office", "hourly_wage": 1500},
        )

        assert response.status_code == 200
        assert response.json()["hourly_wage"] == 1500

    @pytest.mark.parametrize("field", ["name", "hourly_wage", "color"])
    def test_update_null_leaves_field_unchanged(self, test_client, saved_office, field):
        response = test_client.put(f"/api/workplaces/{saved_office.id}", json={field: None})

        assert response.status_code == 200
        assert response.json()[field] == getattr(saved_office, field)

    def test_update_null_address_clears_it(self, test_client, saved_office):
        test_client.put(f"/api/workplaces/{saved_office.id}", json={"address": "Main Street 1"})

        response = test_client.put(f"/api/workplaces/{saved_office.id}", json={"address": None})

        assert response.status_code == 200
        assert response.json()["address"] is None

    def test_reorder(self, test_client, saved_office, saved_cafe):
        response = test_client.post("/api/workplaces/reorder", json={"ids": [saved_cafe.id, saved_office.id]})

        assert response.status_code == 200
        assert [w["id"] for w in response.json()] == [saved_cafe.id, saved_office.id]

    def test_delete_cascades_to_shifts(self, test_client, saved_office):
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-12", "09:00", "17:00"))

        response = test_client.delete(f"/api/workplaces/{saved_office.id}")

        assert response.status_code == 200
        assert response.json()["deleted_shifts"] == 1
        assert test_client.get("/api/shifts").json() == []

    def test_missing_workplace_is_404(self, test_client):
        assert test_client.get("/api/workplaces/nope").status_code == 404
        assert test_client.delete("/api/workplaces/nope").status_code == 404


class TestShiftRoutes:
    """Shift CRUD, figures and overlap warnings."""

    def test_create_and_figures(self, test_client, saved_office):
        response = test_client.post(
            "/api/shifts",
            json=shift_body(saved_office.id, "2025-03-12", "09:00", "17:00", break_minutes=60),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["overlaps"] == []
        shift_id = body["shifts"][0]["id"]

        figures = test_client.get(f"/api/shifts/{shift_id}/figures").json()
        assert figures["working_minutes"] == 420
        assert figures["earnings"] == 7000

    def test_create_from_clock_times(self, test_client, saved_office):
        response = test_client.post(
            "/api/shifts",
            json={
                "workplace_id": saved_office.id,
                "date": "2025-03-12",
                "start_clock": "22:00",
                "end_clock": "06:00",
            },
        )

        assert response.status_code == 201
        shift = response.json()["shifts"][0]
        assert shift["end_time"].startswith("2025-03-13T06:00")

    def test_end_before_start_is_422(self, test_client, saved_office):
        response = test_client.post(
            "/api/shifts",
            json=shift_body(saved_office.id, "2025-03-12", "17:00", "09:00"),
        )

        assert response.status_code == 422
        assert response.json()["detail"] == MSG_END_BEFORE_START

    def test_overlap_warning_on_create(self, test_client, saved_office, saved_cafe):
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-12", "09:00", "17:00"))

        response = test_client.post(
            "/api/shifts",
            json=shift_body(saved_cafe.id, "2025-03-12", "17:15", "20:00"),
        )

        assert response.status_code == 201
        overlaps = response.json()["overlaps"]
        assert len(overlaps) == 1
        assert overlaps[0]["overlap_minutes"] == 15

    def test_check_overlaps_without_saving(self, test_client, saved_office, saved_cafe):
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-12", "09:00", "17:00"))

        response = test_client.post(
            "/api/shifts/overlaps/check",
            json=shift_body(saved_cafe.id, "2025-03-12", "17:35", "20:00"),
        )

        assert response.status_code == 200
        assert response.json() == []
        assert len(test_client.get("/api/shifts").json()) == 1

    def test_update_does_not_conflict_with_itself(self, test_client, saved_office):
        created = test_client.post(
            "/api/shifts",
            json=shift_body(saved_office.id, "2025-03-12", "09:00", "17:00"),
        ).json()
        shift_id = created["shifts"][0]["id"]

        response = test_client.put(
            f"/api/shifts/{shift_id}",
            json={"end_time": "2025-03-12T18:00:00", "memo": "Stayed late"},
        )

        assert response.status_code == 200
        assert response.json()["overlaps"] == []
        assert response.json()["shift"]["memo"] == "Stayed late"

    def test_times_with_offset_keep_wall_clock(self, test_client, saved_office):
        first = test_client.post(
            "/api/shifts",
            json={
                "workplace_id": saved_office.id,
                "date": "2025-03-12",
                "start_time": "2025-03-12T09:00:00+09:00",
                "end_time": "2025-03-12T17:00:00+09:00",
            },
        )
        second = test_client.post(
            "/api/shifts",
            json={
                "workplace_id": saved_office.id,
                "date": "2025-03-12",
                "start_time": "2025-03-12T16:00:00+09:00",
                "end_time": "2025-03-12T20:00:00+09:00",
            },
        )

        assert first.status_code == 201
        assert second.status_code == 201
        assert second.json()["shifts"][0]["start_time"] == "2025-03-12T16:00:00"
        assert second.json()["overlaps"][0]["overlap_minutes"] == 60

    def test_update_with_offset_against_stored_shift(self, test_client, saved_office):
        created = test_client.post(
            "/api/shifts",
            json=shift_body(saved_office.id, "2025-03-12", "09:00", "17:00"),
        ).json()
        shift_id = created["shifts"][0]["id"]

        response = test_client.put(f"/api/shifts/{shift_id}", json={"end_time": "2025-03-12T18:00:00+09:00"})

        assert response.status_code == 200
        assert response.json()["shift"]["end_time"] == "2025-03-12T18:00:00"

    def test_recurrence_creates_all_occurrences(self, test_client, saved_office):
        response = test_client.post(
            "/api/shifts",
            json=shift_body(
                saved_office.id,
                "2025-03-10",
                "09:00",
                "17:00",
                recurrence={"type": "weekly", "end_date": "2025-03-31"},
            ),
        )

        assert response.status_code == 201
        assert [s["date"] for s in response.json()["shifts"]] == [
            "2025-03-10",
            "2025-03-17",
            "2025-03-24",
            "2025-03-31",
        ]

    def test_day_view_flags_conflicts(self, test_client, saved_office):
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-12", "09:00", "12:00"))
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-12", "11:00", "14:00"))
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-12", "15:00", "16:00"))

        day = test_client.get("/api/shifts/day/2025-03-12").json()

        assert [entry["has_conflict"] for entry in day["shifts"]] == [True, True, False]
        assert day["shifts"][0]["workplace"]["name"] == "Office"
        assert len(day["overlaps"]) == 1

    def test_delete_shift(self, test_client, saved_office):
        created = test_client.post(
            "/api/shifts",
            json=shift_body(saved_office.id, "2025-03-12", "09:00", "17:00"),
        ).json()
        shift_id = created["shifts"][0]["id"]

        assert test_client.delete(f"/api/shifts/{shift_id}").status_code == 200
        assert test_client.get(f"/api/shifts/{shift_id}").status_code == 404


class TestStatisticsRoutes:
    """Period, month, week, year and preset statistics."""

    @pytest.fixture(autouse=True)
    def march(self, test_client, saved_office, saved_cafe):
        test_client.post(
            "/api/shifts",
            json=shift_body(saved_office.id, "2025-03-10", "09:00", "17:00", break_minutes=60),
        )
        test_client.post("/api/shifts", json=shift_body(saved_cafe.id, "2025-03-12", "10:00", "12:00"))

    def test_month(self, test_client):
        data = test_client.get("/api/statistics/month/2025/3").json()

        assert data["total_shifts"] == 2
        assert data["total_working_minutes"] == 540
        assert data["total_earnings"] == 7000 + 2900
        assert data["total_working_hours"] == 9.0
        assert data["per_workplace"][0]["workplace"]["name"] == "Office"

    def test_invalid_month(self, test_client):
        assert test_client.get("/api/statistics/month/2025/13").status_code == 400

    def test_range_requires_end_after_start(self, test_client):
        response = test_client.get("/api/statistics/range", params={"start": "2025-03-10", "end": "2025-03-01"})
        assert response.status_code == 422

    def test_week(self, test_client):
        data = test_client.get("/api/statistics/week/2025-03-12").json()

        assert data["week_start"] == "2025-03-10"
        assert len(data["shifts"]) == 2

    def test_year(self, test_client):
        data = test_client.get("/api/statistics/year/2025").json()

        assert len(data["summary"]["monthly_stats"]) == 12
        assert data["earnings_by_month"]["3"] == 9900

    def test_patterns(self, test_client):
        data = test_client.get("/api/statistics/patterns", params={"start": "2025-03-10", "end": "2025-03-17"}).json()

        assert data["busiest_weekday"] == 0
        assert data["busiest_weekday_name"] == "Monday"

    def test_preset_uses_current_date(self, test_client):
        data = test_client.get("/api/statistics/preset/this_week").json()

        assert data["stats"]["start"] == "2025-03-10"
        assert data["stats"]["total_shifts"] == 2

    def test_unknown_preset(self, test_client):
        assert test_client.get("/api/statistics/preset/forever").status_code == 404


class TestExportRoutes:
    """CSV and iCal downloads."""

    def test_csv(self, test_client, saved_office):
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-12", "09:00", "17:00"))

        response = test_client.get("/api/export/csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        lines = response.text.strip().split("\n")
        assert len(lines) == 2
        assert lines[0].startswith("date,workplace")

    def test_ical_defaults_to_current_year(self, test_client, saved_office):
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-12", "09:00", "17:00"))
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2024-12-30", "09:00", "17:00"))

        response = test_client.get("/api/export/ical")

        assert response.status_code == 200
        cal = Calendar.from_ical(response.text)
        assert len([c for c in cal.walk() if c.name == "VEVENT"]) == 1


class TestHolidayAndNotificationRoutes:
    """Holiday list and notification preview."""

    def test_holidays(self, test_client):
        data = test_client.get("/api/holidays/2025").json()

        assert len(data) == 14
        assert data[0] == {"date": "2025-01-01", "name": "New Year's Day"}

    def test_notification_preview(self, test_client, saved_office):
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-12", "09:00", "12:00"))
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-12", "11:00", "14:00"))
        # Redan passerat
        test_client.post("/api/shifts", json=shift_body(saved_office.id, "2025-03-05", "09:00", "12:00"))

        data = test_client.get("/api/notifications/preview").json()

        assert len(data["reminders"]) == 4
        assert data["reminders"][0]["title"] == "Shift tomorrow"
        assert len(data["conflict_warnings"]) == 1
        assert datetime.datetime.fromisoformat(data["conflict_warnings"][0]["fire_at"]) == datetime.datetime(
            2025, 3, 11, 20, 0
        )

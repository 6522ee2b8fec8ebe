import unittest
from datetime import date
from types import SimpleNamespace as Obj
from unittest.mock import patch
from fastapi.testclient import TestClient

from main import app
from core.database import get_db
from core.errors import Forbidden, UnprocessableInput
from auth.services.auth_service import get_current_active_user
from event.recurrence import Occurrence


def event_obj(**kw):
    data = dict(
        id=1,
        owner_email="ana@example.com",
        name="Standup",
        description=None,
        date=date(2030, 6, 3),
        start_time="09:00",
        end_time="09:15",
        location_name=None,
        latitude=None,
        longitude=None,
        visibility="personal",
        invite_department_id=None,
        invited_user_ids=[],
        recurring=False,
        frequency=None,
        original_date=None,
        created_at=None,
    )
    data.update(kw)
    return Obj(**data)


class EventRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): ...
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        self.user = Obj(id=5, email="ana@example.com", is_admin=False, is_active=True, department_id=None)
        app.dependency_overrides[get_current_active_user] = lambda: self.user
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_current_active_user, None)

    # ---------- create ----------
    @patch("event.router.service.create_event")
    def test_create_event_normalizes_times(self, mock_create):
        mock_create.return_value = event_obj()
        resp = self.client.post(
            "/api/events",
            json={"name": " Standup ", "date": "2030-06-03", "start_time": "9:00", "end_time": "09:15"},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        internal = mock_create.call_args[0][1]
        self.assertEqual(internal.owner_email, "ana@example.com")
        self.assertEqual(internal.name, "Standup")
        self.assertEqual(internal.start_time, "09:00")

    @patch("event.router.service.create_event")
    def test_recurring_defaults_anchor_to_date(self, mock_create):
        mock_create.return_value = event_obj(recurring=True, frequency="weekly", original_date=date(2030, 6, 3))
        resp = self.client.post(
            "/api/events",
            json={
                "name": "Standup", "date": "2030-06-03", "start_time": "09:00", "end_time": "09:15",
                "recurring": True, "frequency": "weekly",
            },
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(mock_create.call_args[0][1].original_date, date(2030, 6, 3))

    @patch("event.router.service.create_event")
    def test_invalid_payloads_are_422(self, mock_create):
        base = {"name": "Standup", "date": "2030-06-03", "start_time": "09:00", "end_time": "10:00"}
        bad = [
            {**base, "start_time": "24:00"},
            {**base, "end_time": "9:60"},
            {**base, "start_time": "10:00", "end_time": "10:00"},
            {**base, "start_time": "23:00", "end_time": "01:00"},
            {**base, "recurring": True},
            {**base, "visibility": "private"},
            {**base, "name": "   "},
        ]
        for body in bad:
            resp = self.client.post("/api/events", json=body)
            self.assertEqual(resp.status_code, 422, body)
        mock_create.assert_not_called()

    # ---------- list ----------
    @patch("event.router.service.list_user_events")
    def test_list_own_events(self, mock_list):
        mock_list.return_value = [event_obj()]
        resp = self.client.get("/api/events/user/ana@example.com")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(mock_list.call_args.kwargs["public_only"], False)

    @patch("event.router.service.list_user_events")
    def test_list_other_user_shows_public_only(self, mock_list):
        mock_list.return_value = []
        self.client.get("/api/events/user/ben@example.com")
        self.assertEqual(mock_list.call_args.kwargs["public_only"], True)

    # ---------- calendar ----------
    @patch("event.router.service.calendar_for")
    def test_calendar_flattens_occurrences(self, mock_calendar):
        series = event_obj(recurring=True, frequency="weekly", original_date=date(2030, 6, 3))
        mock_calendar.return_value = [
            Occurrence(series, date(2030, 6, 3)),
            Occurrence(series, date(2030, 6, 10)),
        ]
        resp = self.client.get("/api/events/calendar", params={"start": "2030-06-01", "end": "2030-06-14"})
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()
        self.assertEqual([o["date"] for o in data], ["2030-06-03", "2030-06-10"])
        self.assertTrue(all(o["is_recurring_occurrence"] for o in data))
        self.assertEqual(mock_calendar.call_args[0][2:], (date(2030, 6, 1), date(2030, 6, 14)))

    def test_calendar_requires_start(self):
        resp = self.client.get("/api/events/calendar")
        self.assertEqual(resp.status_code, 422)

    @patch("event.router.service.calendar_for")
    def test_calendar_window_error_carries_kind(self, mock_calendar):
        mock_calendar.side_effect = UnprocessableInput("Calendar window is too large")
        resp = self.client.get("/api/events/calendar", params={"start": "2030-01-01", "end": "2032-01-01"})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json(), {"detail": "Calendar window is too large", "kind": "UnprocessableInput"})

    # ---------- delete ----------
    @patch("event.router.service.delete_event")
    def test_delete_event(self, mock_delete):
        resp = self.client.delete("/api/events/3")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["event_id"], 3)

    @patch("event.router.service.delete_event")
    def test_delete_someone_elses_event(self, mock_delete):
        mock_delete.side_effect = Forbidden("Not authorized to delete this event")
        resp = self.client.delete("/api/events/3")
        self.assertEqual(resp.status_code, 403)

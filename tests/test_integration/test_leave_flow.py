import unittest
from datetime import date, timedelta

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from core.database import Base, get_db


def next_monday() -> date:
    today = date.today()
    return today + timedelta(days=7 - today.weekday())


class LeaveFlowTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine(
            "sqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )
        Base.metadata.create_all(self.engine)
        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.SessionLocal = TestingSession

        def _get_db_override():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _get_db_override
        self.client = TestClient(app)

        # --- two registered users, one promoted to admin ---
        for email, first in [("ana@example.com", "Ana"), ("boss@example.com", "Bo")]:
            r = self.client.post(
                "/api/auth/register",
                json={"email": email, "first_name": first, "last_name": "Test", "password": "secret1"},
            )
            self.assertEqual(r.status_code, 201, r.text)
        with self.SessionLocal() as db:
            db.execute(text("UPDATE users SET is_admin = 1 WHERE email = 'boss@example.com'"))
            db.execute(text("UPDATE users SET paid_leave_days_remaining = 5 WHERE email = 'ana@example.com'"))
            db.commit()

        self.ana = self._login("ana@example.com")
        self.boss = self._login("boss@example.com")

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        self.engine.dispose()

    def _login(self, email):
        r = self.client.post("/api/auth/token", data={"username": email, "password": "secret1"})
        self.assertEqual(r.status_code, 200, r.text)
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    def _balance(self):
        r = self.client.get("/api/users/me", headers=self.ana)
        self.assertEqual(r.status_code, 200, r.text)
        return r.json()["paid_leave_days_remaining"]

    def test_requires_authentication(self):
        r = self.client.get("/api/requests/user/ana@example.com")
        self.assertEqual(r.status_code, 401)

    def test_full_leave_flow(self):
        monday = next_monday()
        friday = monday + timedelta(days=4)

        # 1) Ana asks for a paid week off
        r = self.client.post(
            "/api/requests",
            json={"leave_type": "paid", "start_date": monday.isoformat(), "end_date": friday.isoformat()},
            headers=self.ana,
        )
        self.assertEqual(r.status_code, 201, r.text)
        week_id = r.json()["id"]
        self.assertEqual(r.json()["status"], "pending")

        # 2) Overlapping request is refused
        r = self.client.post(
            "/api/requests",
            json={"leave_type": "sick", "start_date": friday.isoformat(), "end_date": friday.isoformat()},
            headers=self.ana,
        )
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["kind"], "OverlappingRequest")

        # 3) Employees cannot approve
        r = self.client.patch(f"/api/requests/{week_id}/status", json={"status": "approved"}, headers=self.ana)
        self.assertEqual(r.status_code, 403)

        # 4) Approve, revert, approve again
        r = self.client.patch(f"/api/requests/{week_id}/status", json={"status": "approved"}, headers=self.boss)
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(r.json()["balance"]["paid_leave_days_remaining"], 0)

        r = self.client.patch(f"/api/requests/{week_id}/status", json={"status": "pending"}, headers=self.boss)
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(self._balance(), 5)

        r = self.client.patch(f"/api/requests/{week_id}/status", json={"status": "approved"}, headers=self.boss)
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(self._balance(), 0)

        # 5) With nothing left, another paid day cannot be approved
        next_week = monday + timedelta(days=7)
        r = self.client.post(
            "/api/requests",
            json={"leave_type": "paid", "start_date": next_week.isoformat(), "end_date": next_week.isoformat()},
            headers=self.ana,
        )
        self.assertEqual(r.status_code, 201, r.text)
        day_id = r.json()["id"]

        r = self.client.patch(f"/api/requests/{day_id}/status", json={"status": "approved"}, headers=self.boss)
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["kind"], "InsufficientBalance")
        self.assertEqual(self._balance(), 0)

        r = self.client.patch(f"/api/requests/{day_id}/status", json={"status": "maybe"}, headers=self.boss)
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["kind"], "InvalidStatus")

        # 6) Admin overview shows both requests with their owner
        r = self.client.get("/api/requests/all", headers=self.boss)
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(len(r.json()), 2)
        self.assertEqual(r.json()[0]["owner"]["email"], "ana@example.com")

        # 7) Deleting: approved is locked, pending goes away
        r = self.client.delete(f"/api/requests/{week_id}", headers=self.ana)
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["kind"], "InvalidState")

        r = self.client.delete(f"/api/requests/{day_id}", headers=self.boss)
        self.assertEqual(r.status_code, 403)

        r = self.client.delete(f"/api/requests/{day_id}", headers=self.ana)
        self.assertEqual(r.status_code, 200, r.text)

        r = self.client.get("/api/requests/user/ana@example.com", headers=self.ana)
        self.assertEqual([x["id"] for x in r.json()], [week_id])

    def test_calendar_flow(self):
        monday = next_monday()

        r = self.client.post(
            "/api/events",
            json={
                "name": "Standup",
                "date": monday.isoformat(),
                "start_time": "09:00",
                "end_time": "09:15",
                "visibility": "public",
                "recurring": True,
                "frequency": "weekly",
            },
            headers=self.ana,
        )
        self.assertEqual(r.status_code, 201, r.text)
        event_id = r.json()["id"]
        self.assertEqual(r.json()["original_date"], monday.isoformat())

        r = self.client.post(
            "/api/events",
            json={"name": "Dentist", "date": monday.isoformat(), "start_time": "14:00", "end_time": "15:00"},
            headers=self.ana,
        )
        self.assertEqual(r.status_code, 201, r.text)

        # Bo sees the public series only
        window = {"start": monday.isoformat(), "end": (monday + timedelta(days=20)).isoformat()}
        r = self.client.get("/api/events/calendar", params=window, headers=self.boss)
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(
            [o["date"] for o in r.json()],
            [(monday + timedelta(weeks=i)).isoformat() for i in range(3)],
        )

        # Ana sees both on the first day
        r = self.client.get("/api/events/calendar", params={"start": monday.isoformat()}, headers=self.ana)
        self.assertEqual([o["name"] for o in r.json()], ["Standup", "Dentist"])

        # Only the owner may delete
        r = self.client.delete(f"/api/events/{event_id}", headers=self.boss)
        self.assertEqual(r.status_code, 403)
        r = self.client.delete(f"/api/events/{event_id}", headers=self.ana)
        self.assertEqual(r.status_code, 200)
        r = self.client.delete(f"/api/events/{event_id}", headers=self.ana)
        self.assertEqual(r.status_code, 404)

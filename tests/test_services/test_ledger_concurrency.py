# tests/test_services/test_ledger_concurrency.py
import os
import tempfile
import threading
import unittest
from datetime import date, timedelta
from types import SimpleNamespace as Obj

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from core.database import Base
from core.errors import InsufficientBalance, OverlappingRequest
from user.models import User
from leaverequest.models import LeaveRequest, LeaveStatus, LeaveType
from leaverequest.schema import LeaveRequestCreate
from leaverequest import service
import models_bootstrap


def next_monday() -> date:
    today = date.today()
    return today + timedelta(days=7 - today.weekday())


class LedgerConcurrencyTests(unittest.TestCase):
    """Parallel writers for one employee, each on its own session and connection."""

    WORKERS = 4

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        url = "sqlite:///" + os.path.join(self.tmp.name, "ledger.db")
        self.engine = create_engine(url, connect_args={"check_same_thread": False, "timeout": 30}, future=True)
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(bind=self.engine, future=True)
        self.admin = Obj(is_admin=True, email="boss@example.com")
        self.monday = next_monday()

        with self.SessionLocal() as db:
            db.add(User(email="ana@example.com", first_name="Ana", last_name="Berg",
                        password_hash="x", paid_leave_days_remaining=5))
            db.commit()

    def tearDown(self):
        self.engine.dispose()
        self.tmp.cleanup()

    def _run_parallel(self, job):
        barrier = threading.Barrier(self.WORKERS)
        results = [None] * self.WORKERS

        def worker(i):
            db = self.SessionLocal()
            try:
                barrier.wait()
                results[i] = job(db, i)
            except Exception as exc:
                results[i] = exc
            finally:
                db.close()

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(self.WORKERS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)
        return results

    def _balance(self):
        with self.SessionLocal() as db:
            return db.scalar(select(User.paid_leave_days_remaining).where(User.email == "ana@example.com"))

    def test_parallel_approvals_cannot_overspend(self):
        # four separate Mon..Wed requests, 3 business days each, against a balance of 5
        ids = []
        with self.SessionLocal() as db:
            for week in range(self.WORKERS):
                start = self.monday + timedelta(weeks=week)
                row = LeaveRequest(owner_email="ana@example.com", leave_type=LeaveType.paid,
                                   start_date=start, end_date=start + timedelta(days=2))
                db.add(row)
                db.flush()
                ids.append(row.id)
            db.commit()

        def approve(db, i):
            try:
                service.transition_status(db, ids[i], "approved", self.admin)
                return "ok"
            except InsufficientBalance:
                return "insufficient"

        results = self._run_parallel(approve)

        self.assertEqual(sorted(results), ["insufficient", "insufficient", "insufficient", "ok"], results)
        self.assertEqual(self._balance(), 2)
        with self.SessionLocal() as db:
            approved = db.scalar(
                select(func.count(LeaveRequest.id)).where(LeaveRequest.status == LeaveStatus.approved)
            )
        self.assertEqual(approved, 1)

    def test_parallel_overlapping_submits_create_one_request(self):
        start = self.monday

        def submit(db, i):
            try:
                service.submit_request(db, LeaveRequestCreate(
                    owner_email="ana@example.com",
                    leave_type=LeaveType.sick,
                    start_date=start + timedelta(days=i % 2),
                    end_date=start + timedelta(days=3),
                ))
                return "created"
            except OverlappingRequest:
                return "overlap"

        results = self._run_parallel(submit)

        self.assertEqual(sorted(results), ["created", "overlap", "overlap", "overlap"], results)
        with self.SessionLocal() as db:
            self.assertEqual(db.scalar(select(func.count(LeaveRequest.id))), 1)
        self.assertEqual(self._balance(), 5)

import unittest
from datetime import datetime, timezone
from types import SimpleNamespace as Obj
from unittest.mock import patch
from fastapi.testclient import TestClient

from main import app
from auth.services.auth_service import get_current_active_user
from document.schema import DocumentRef


class DocumentRouterTests(unittest.TestCase):
    def setUp(self):
        app.dependency_overrides[get_current_active_user] = lambda: Obj(id=5, email="ana@example.com", is_admin=False)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_current_active_user, None)

    @patch("document.router.service.store_documents")
    def test_upload(self, mock_store):
        mock_store.return_value = [
            DocumentRef(filename="note.pdf", path="uploads/documents/abc.pdf",
                        uploaded_at=datetime(2030, 1, 1, tzinfo=timezone.utc)),
        ]
        resp = self.client.post(
            "/api/documents",
            files=[("documents", ("note.pdf", b"%PDF-1.4", "application/pdf"))],
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["documents"][0]["path"], "uploads/documents/abc.pdf")
        self.assertEqual(len(mock_store.call_args[0][0]), 1)

    def test_upload_without_files(self):
        resp = self.client.post("/api/documents")
        self.assertEqual(resp.status_code, 422)

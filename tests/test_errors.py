"""
Tests for the exception hierarchy and the 500 response.
"""
import json
import unittest
from unittest.mock import patch

from inventory_admin.api.responses import server_error_response
from inventory_admin.config import settings
from inventory_admin.errors import ConstraintViolationError, InventoryAdminError, PersistenceError


class TestExceptions(unittest.TestCase):
    def test_defaults(self):
        error = PersistenceError()
        self.assertEqual(error.message, "Database error")
        self.assertEqual(str(error), "Database error")
        self.assertIsInstance(error, InventoryAdminError)

    def test_code_in_str(self):
        error = ConstraintViolationError("insert rejected", code="constraint_violation")
        self.assertEqual(str(error), "[constraint_violation] insert rejected")

    def test_to_dict(self):
        error = PersistenceError("select failed", code="persistence_error", details="no such table")
        self.assertEqual(
            error.to_dict(),
            {
                "error": "PersistenceError",
                "message": "select failed",
                "code": "persistence_error",
                "details": "no such table",
            },
        )
        self.assertEqual(PersistenceError().to_dict(), {"error": "PersistenceError", "message": "Database error"})


class TestServerErrorResponse(unittest.TestCase):
    def body(self, response):
        return json.loads(response.body)

    def test_details_in_development(self):
        with patch.object(settings, "ENVIRONMENT", "development"):
            response = server_error_response(PersistenceError("select failed", details="no such table"))

        body = self.body(response)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(body["error"], "Internal server error")
        self.assertEqual(body["details"]["details"], "no such table")

    def test_no_details_in_production(self):
        with patch.object(settings, "ENVIRONMENT", "production"):
            response = server_error_response(PersistenceError("select failed", details="no such table"))

        body = self.body(response)
        self.assertEqual(body["error"], "Internal server error")
        self.assertNotIn("details", body)
        self.assertFalse(body["success"])

# tests/test_exceptions.py

"""
Tests for converting record store failures into HTTP errors.
"""

import logging

from sqlalchemy.exc import OperationalError

from app.utils.exceptions import StoreException, handle_store_error


def test_handle_store_error_returns_503_and_logs(caplog):
    error = OperationalError("UPDATE visitor_passes", {}, Exception("database is locked"))

    with caplog.at_level(logging.ERROR, logger="visitor_pass.errors"):
        result = handle_store_error(error, "Validate visitor pass")

    assert isinstance(result, StoreException)
    assert result.status_code == 503
    assert result.detail == "Validate visitor pass failed"
    assert "database is locked" in caplog.text

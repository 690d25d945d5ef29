# tests/test_store_errors.py

"""
Tests that record store failures surface as 503 StoreException from every service.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.models.property import Property, Unit
from app.models.user import User
from app.models.visitor_pass import VisitorEvent, VisitorPass
from app.models.work_order import WorkOrder
from app.schemas.property import PropertyCreate
from app.schemas.visitor_pass import VisitorPassCreate
from app.services.property_service import PropertyService
from app.services.user_service import UserService
from app.services.visitor_pass_service import VisitorPassService
from app.services.work_order_service import WorkOrderService
from app.utils.exceptions import StoreException

from conftest import NOW

_original_query = Session.query


@pytest.fixture
def fail_queries_for(monkeypatch):
    """Make Session.query raise OperationalError for the given model only."""

    def _fail_for(model):
        def _query(self, *entities, **kwargs):
            if entities and entities[0] is model:
                raise OperationalError("SELECT", {}, Exception("disk I/O error"))
            return _original_query(self, *entities, **kwargs)

        monkeypatch.setattr(Session, "query", _query)

    return _fail_for


@pytest.mark.parametrize("model, call", [
    (VisitorPass, lambda db, vp: VisitorPassService.get_pass_by_id(db, vp.id)),
    (VisitorPass, lambda db, vp: VisitorPassService.get_pass_by_code(db, vp.code)),
    (VisitorPass, lambda db, vp: VisitorPassService.get_passes(db, now=NOW)),
    (VisitorEvent, lambda db, vp: VisitorPassService.get_events(db, vp.id)),
    (Property, lambda db, vp: PropertyService.get_property_by_id(db, vp.property_id)),
    (Property, lambda db, vp: PropertyService.get_all_properties(db)),
    (Unit, lambda db, vp: PropertyService.list_units(db, vp.property_id)),
    (WorkOrder, lambda db, vp: WorkOrderService.get_work_orders(db)),
    (WorkOrder, lambda db, vp: WorkOrderService.get_work_order_by_id(db, 1)),
    (User, lambda db, vp: UserService.get_user_by_id(db, vp.created_by)),
])
def test_read_failures_become_store_errors(db, make_pass, fail_queries_for, model, call):
    visitor_pass = make_pass()
    fail_queries_for(model)

    with pytest.raises(StoreException) as exc_info:
        call(db, visitor_pass)

    assert exc_info.value.status_code == 503


def test_code_collision_check_failure_during_issue(db, prop, manager, fail_queries_for):
    fail_queries_for(VisitorPass)
    data = VisitorPassCreate(property_id=prop.id, starts_at=NOW, ends_at=NOW.replace(hour=18))

    with pytest.raises(StoreException):
        VisitorPassService.issue_pass(db, data, manager.id)


def test_commit_failure_rolls_back(db, monkeypatch):
    def _commit():
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", _commit)

    with pytest.raises(StoreException):
        PropertyService.create_property(db, PropertyCreate(name="Lakeside", address="2 Shore Lane"))

    monkeypatch.undo()
    assert db.query(Property).count() == 0


def test_api_returns_503_on_store_failure(client: TestClient, viewer, make_pass, auth_headers, fail_queries_for):
    visitor_pass = make_pass()
    fail_queries_for(VisitorPass)

    response = client.get(f"/api/visitor-passes/{visitor_pass.id}", headers=auth_headers(viewer))

    assert response.status_code == 503
    assert response.json()["detail"] == f"Load visitor pass {visitor_pass.id} failed"

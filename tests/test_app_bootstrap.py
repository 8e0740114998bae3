"""Tests for startup seeding, health and error formatting."""

from fastapi.testclient import TestClient

from enrollment.main import app, bootstrap
from enrollment.schemas.definitions import DocumentRequirementCreate
from enrollment.services.auth import authenticate


def test_startup_seeds_defaults_and_admin(engine, store, tokens, monkeypatch):
    from enrollment import main

    monkeypatch.setattr(main.settings, "seed_defaults_on_startup", True)

    with TestClient(app) as client:
        steps = {s["step"]: s for s in client.get("/form-steps").json()}

    assert len(steps["personal"]["fields"]) == 9
    assert len(steps["contact"]["fields"]) == 5
    assert len(steps["course"]["fields"]) == 4
    assert len(steps["documents"]["requirements"]) == 5
    assert len(store.courses) == 5
    assert authenticate(store, main.settings.admin_username, main.settings.admin_password) is not None


def test_bootstrap_twice_does_not_duplicate(engine, store, tokens, monkeypatch):
    from enrollment import main

    monkeypatch.setattr(main.settings, "seed_defaults_on_startup", True)

    bootstrap()
    bootstrap()

    assert len(engine.list_fields()) == 18
    assert len(engine.list_requirements()) == 5
    assert len(store.users) == 1
    assert len(store.courses) == 5


def test_bootstrap_fills_only_the_empty_collection(engine, store, tokens, monkeypatch):
    from enrollment import main

    monkeypatch.setattr(main.settings, "seed_defaults_on_startup", True)
    engine.create_requirement(DocumentRequirementCreate(name="Custom"))

    bootstrap()

    assert len(engine.list_fields()) == 18
    assert [r.name for r in engine.list_requirements()] == ["Custom"]


def test_bootstrap_without_seeding(engine, store, tokens, monkeypatch):
    from enrollment import main

    monkeypatch.setattr(main.settings, "seed_defaults_on_startup", False)

    bootstrap()

    assert engine.is_empty()
    assert len(store.users) == 1


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_validation_errors_use_detail_message(client, admin_headers):
    response = client.post("/admin/document-requirements", json={"name": ""}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"].startswith("name: ")

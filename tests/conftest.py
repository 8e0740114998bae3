"""Shared fixtures for enrollment service tests."""

from unittest.mock import MagicMock

import pytest
from cryptography.fernet import Fernet
from fastapi.testclient import TestClient

from enrollment.services.auth import TokenService, hash_password
from enrollment.services.broadcaster import Broadcaster
from enrollment.services.document_storage import DocumentStorage
from enrollment.services.enrollment_store import EnrollmentStore
from enrollment.services.form_engine import FormConfigurationEngine


# ---------------------------------------------------------------------------
# Payload factory helpers
# ---------------------------------------------------------------------------

def make_field_payload(**overrides):
    """A valid create payload for a form field."""
    defaults = {
        "name": "fullName",
        "label": "Nome Completo",
        "type": "text",
        "required": True,
        "section": "personal",
        "order": 1,
        "active": True,
    }
    defaults.update(overrides)
    return defaults


def make_requirement_payload(**overrides):
    defaults = {
        "name": "CPF",
        "description": "Cadastro de Pessoa Física",
        "required": True,
        "active": True,
        "order": 1,
    }
    defaults.update(overrides)
    return defaults


def complete_submission():
    """Values for every required default field."""
    return {
        "fullName": "Maria Souza",
        "cpf": "123.456.789-00",
        "rg": "12.345.678-9",
        "birthDate": "2001-04-12",
        "gender": "feminino",
        "address": "Rua das Flores, 10",
        "city": "Recife",
        "state": "PE",
        "zipCode": "50000-000",
        "email": "maria@example.com",
        "phone": "+55 81 99999-0000",
        "course": "direito",
        "shift": "noite",
        "modality": "presencial",
    }


# ---------------------------------------------------------------------------
# Singletons
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_broadcaster():
    broadcaster = MagicMock(spec=Broadcaster)
    return broadcaster


@pytest.fixture
def mock_storage():
    """A DocumentStorage stand-in that never talks to MinIO."""
    storage = MagicMock(spec=DocumentStorage)
    storage.upload_document.side_effect = (
        lambda content, student_id, slot, file_name, mime_type:
        DocumentStorage.key_for(student_id, slot, file_name)
    )
    storage.download_url.return_value = "http://minio.test/signed"
    storage.delete_document.return_value = True
    return storage


@pytest.fixture
def engine(mock_broadcaster):
    """An empty in-memory engine installed as the process singleton."""
    engine = FormConfigurationEngine.in_memory(broadcaster=mock_broadcaster)
    FormConfigurationEngine._instance = engine
    yield engine
    FormConfigurationEngine._instance = None


@pytest.fixture
def seeded_engine(engine):
    engine.seed_defaults()
    return engine


@pytest.fixture
def store():
    store = EnrollmentStore()
    EnrollmentStore._instance = store
    yield store
    EnrollmentStore._instance = None


@pytest.fixture
def tokens():
    tokens = TokenService(key=Fernet.generate_key().decode(), ttl_seconds=3600)
    TokenService._instance = tokens
    yield tokens
    TokenService._instance = None


@pytest.fixture(autouse=True)
def reset_singletons(mock_storage):
    """Keep singletons from leaking between tests."""
    Broadcaster._instance = MagicMock(spec=Broadcaster)
    DocumentStorage._instance = mock_storage
    yield
    Broadcaster._instance = None
    DocumentStorage._instance = None
    FormConfigurationEngine._instance = None
    EnrollmentStore._instance = None
    TokenService._instance = None


# ---------------------------------------------------------------------------
# HTTP client and identities
# ---------------------------------------------------------------------------

@pytest.fixture
def client(engine, store, tokens):
    """TestClient without lifespan, so nothing is seeded behind the test's back."""
    from enrollment.main import app
    return TestClient(app)


@pytest.fixture
def admin_headers(store, tokens):
    admin = store.create_user("admin", hash_password("secret"), is_admin=True)
    return {"Authorization": f"Bearer {tokens.issue(admin)}"}


@pytest.fixture
def student_headers(store, tokens):
    user = store.create_user("aluno", hash_password("secret"), is_admin=False)
    return {"Authorization": f"Bearer {tokens.issue(user)}"}

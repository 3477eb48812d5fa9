import os
import tempfile
import uuid

# Banco de testes isolado (sqlite em /tmp). Precisa estar no env ANTES de importar gestor.*
_DB_PATH = os.path.join(tempfile.gettempdir(), f"gestor-tests-{uuid.uuid4().hex}.db")
os.environ["GESTOR_DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["GESTOR_ENV"] = "lab"
os.environ.setdefault("GESTOR_AUTH_JWT_SECRET", "test-secret-" + "x" * 40)

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402


def _import_all_models():
    # Import explícito dos models para registrar no SQLAlchemy metadata
    import gestor.models.account  # noqa: F401
    import gestor.models.obligation  # noqa: F401
    import gestor.models.fixed_cost  # noqa: F401


@pytest.fixture(scope="session", autouse=True)
def _ensure_tables_exist():
    from gestor.db import Base, engine

    _import_all_models()
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()
    if os.path.exists(_DB_PATH):
        os.remove(_DB_PATH)


@pytest.fixture(scope="session")
def client():
    from fastapi.testclient import TestClient
    from gestor.main import app

    return TestClient(app)


@pytest.fixture
def db_session():
    from gestor.db import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def register_and_login(client, email: str | None = None, password: str = "segredo123") -> dict:
    email = email or f"user-{uuid.uuid4().hex[:10]}@teste.com"
    r = client.post("/auth/register", json={"email": email, "password": password})
    assert r.status_code == 201, r.text
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def auth_header(client):
    return register_and_login(client)


@pytest.fixture
def other_auth_header(client):
    return register_and_login(client)


@pytest.fixture
def make_account(db_session):
    """Cria uma conta direto no banco e devolve (account_id, token)."""
    from gestor.core.security import create_access_token, hash_password
    from gestor.models.account import Account

    def _make():
        acc = Account(email=f"acc-{uuid.uuid4().hex[:10]}@teste.com", password_hash=hash_password("segredo123"))
        db_session.add(acc)
        db_session.commit()
        return acc.id, create_access_token(acc.id)

    return _make


@pytest.fixture
def make_obligation(db_session):
    from gestor.models.enums import ObligationKind, ObligationStatus
    from gestor.models.obligation import Obligation

    def _make(owner_id: str, amount: str = "100.00", status=ObligationStatus.PENDING, **kw):
        ob = Obligation(
            owner_id=owner_id,
            title=kw.pop("title", "Aluguel loja"),
            amount=Decimal(amount),
            kind=kw.pop("kind", ObligationKind.EXPENSE),
            status=status,
            category=kw.pop("category", "Aluguel"),
            due_date=kw.pop("due_date", date.today()),
            **kw,
        )
        db_session.add(ob)
        db_session.commit()
        return ob.id

    return _make

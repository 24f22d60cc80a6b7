import hashlib
import io

import pytest
from fastapi.testclient import TestClient
from reportlab.pdfgen import canvas
from sqlalchemy.orm import sessionmaker

from database import Base, get_db
from main import app
from modules.auth.services.auth_service import AuthService
from modules.events.models.domain_event import DomainEvent
from helpers import ADMIN, FINGERPRINT, ADMIN_PASSWORD, FakeClock, make_engine, make_registry, reset_schema

engine = make_engine()
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(clock):
    reset_schema(engine)
    app.state.registry = make_registry(TestingSessionLocal, clock)
    with TestingSessionLocal() as session:
        AuthService.seed_account(session, ADMIN, "Administrator", ADMIN_PASSWORD)
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


def create_dummy_pdf_bytes():
    buf = io.BytesIO()
    c = canvas.Canvas(buf)
    c.drawString(50, 750, "Lease agreement between Carol and Alice")
    c.save()
    buf.seek(0)
    return buf.read()


def register(client, admin_headers, identity, password="secret123"):
    resp = client.post(
        "/auth/register",
        json={"identity": identity, "name": identity.title(), "password": password},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text


def auth_headers(client, identity, password="secret123"):
    resp = client.post("/auth/login", json={"identity": identity, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def users(client):
    headers = {ADMIN: auth_headers(client, ADMIN, ADMIN_PASSWORD)}
    for identity in ("carol", "alice", "bob", "mallory"):
        register(client, headers[ADMIN], identity)
        headers[identity] = auth_headers(client, identity)
    return headers


def create_document(client, headers, signatories=("alice", "bob"), validity=3600, fingerprint=FINGERPRINT):
    resp = client.post(
        "/documents",
        json={"title": "Lease", "fingerprint": fingerprint, "signatories": list(signatories),
              "validity_seconds": validity},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["document_id"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_requires_authentication(client):
    resp = client.post("/documents", json={"title": "Lease", "fingerprint": FINGERPRINT,
                                           "signatories": ["alice"], "validity_seconds": 10})
    assert resp.status_code in {401, 403}


def test_create_and_read_details(client, users):
    doc_id = create_document(client, users["carol"])
    assert doc_id == 1
    details = client.get(f"/documents/{doc_id}").json()
    assert details["title"] == "Lease"
    assert details["creator"] == "carol"
    assert details["status"] == "PENDING_SIGNATURES"
    assert details["is_active"] is True


def test_create_with_invalid_input_returns_400(client, users):
    resp = client.post(
        "/documents",
        json={"title": "Lease", "fingerprint": FINGERPRINT, "signatories": [], "validity_seconds": 10},
        headers=users["carol"],
    )
    assert resp.status_code == 400
    assert resp.json()["detail"]["error"] == "ValidationError"


def test_unknown_document_returns_404(client):
    assert client.get("/documents/77").status_code == 404
    assert client.get("/documents/77/signatories").status_code == 404
    assert client.post("/documents/77/verify", json={"fingerprint": FINGERPRINT}).status_code == 404


def test_signing_scenario_over_http(client, users):
    doc_id = create_document(client, users["carol"], signatories=("alice", "bob"))

    resp = client.post(f"/documents/{doc_id}/sign", headers=users["alice"])
    assert resp.status_code == 200
    assert resp.json()["status"] == "PENDING_SIGNATURES"
    verify = client.post(f"/documents/{doc_id}/verify", json={"fingerprint": FINGERPRINT}).json()
    assert verify["signature_count"] == 1

    resp = client.post(f"/documents/{doc_id}/sign", headers=users["bob"])
    assert resp.json()["status"] == "FULLY_SIGNED"
    verify = client.post(f"/documents/{doc_id}/verify", json={"fingerprint": FINGERPRINT}).json()
    assert verify == {"is_valid": True, "status": "FULLY_SIGNED", "signature_count": 2, "total_signatories": 2}

    again = client.post(f"/documents/{doc_id}/sign", headers=users["alice"])
    assert again.status_code == 409
    assert again.json()["detail"]["error"] == "AlreadySignedError"


def test_non_signatory_sign_returns_403(client, users):
    doc_id = create_document(client, users["carol"])
    resp = client.post(f"/documents/{doc_id}/sign", headers=users["mallory"])
    assert resp.status_code == 403
    assert client.get(f"/documents/{doc_id}/signatures/mallory").json()["has_signed"] is False


def test_expired_document_over_http(client, users, clock):
    doc_id = create_document(client, users["carol"], signatories=("alice",), validity=1)
    clock.advance(2)
    resp = client.post(f"/documents/{doc_id}/sign", headers=users["alice"])
    assert resp.status_code == 409
    assert resp.json()["detail"]["error"] == "InactiveError"
    verify = client.post(f"/documents/{doc_id}/verify", json={"fingerprint": FINGERPRINT}).json()
    assert verify["is_valid"] is False


def test_revoke_over_http(client, users):
    doc_id = create_document(client, users["carol"])
    assert client.post(f"/documents/{doc_id}/revoke", headers=users["alice"]).status_code == 403
    assert client.post(f"/documents/{doc_id}/revoke", headers=users["carol"]).status_code == 200
    details = client.get(f"/documents/{doc_id}").json()
    assert details["status"] == "REVOKED"
    assert details["is_active"] is False

    with TestingSessionLocal() as session:
        events_before = session.query(DomainEvent).count()
    second = client.post(f"/documents/{doc_id}/revoke", headers=users[ADMIN])
    assert second.status_code == 409
    assert second.json()["detail"]["error"] == "AlreadyInactiveError"
    with TestingSessionLocal() as session:
        assert session.query(DomainEvent).count() == events_before

    sign = client.post(f"/documents/{doc_id}/sign", headers=users["alice"])
    assert sign.json()["detail"]["error"] == "InactiveError"


def test_user_documents_and_signatories(client, users):
    first = create_document(client, users["carol"], signatories=("alice", "bob"))
    second = create_document(client, users["alice"], signatories=("bob",))
    assert client.get("/documents/users/bob").json() == {"identity": "bob", "document_ids": [first, second]}
    assert client.get("/documents/users/nobody").json()["document_ids"] == []
    assert client.get(f"/documents/{first}/signatories").json() == {
        "document_id": first, "signatories": ["alice", "bob"]
    }


def test_fingerprint_and_verify_file(client, users):
    pdf = create_dummy_pdf_bytes()
    expected = hashlib.sha256(pdf).hexdigest()

    resp = client.post("/documents/fingerprint", files={"file": ("lease.pdf", pdf, "application/pdf")})
    assert resp.status_code == 200
    assert resp.json() == {"filename": "lease.pdf", "size": len(pdf), "fingerprint": expected}

    doc_id = create_document(client, users["carol"], fingerprint=expected)
    ok = client.post(f"/documents/{doc_id}/verify-file", files={"file": ("lease.pdf", pdf, "application/pdf")})
    assert ok.json()["is_valid"] is True

    tampered = pdf + b"MODIFIED"
    bad = client.post(f"/documents/{doc_id}/verify-file", files={"file": ("lease.pdf", tampered, "application/pdf")})
    assert bad.json()["is_valid"] is False


def test_fingerprint_rejects_empty_upload(client):
    resp = client.post("/documents/fingerprint", files={"file": ("empty.pdf", b"", "application/pdf")})
    assert resp.status_code == 400


def test_document_event_trail_endpoint(client, users):
    doc_id = create_document(client, users["carol"], signatories=("alice",))
    client.post(f"/documents/{doc_id}/sign", headers=users["alice"])
    events = client.get(f"/events/documents/{doc_id}").json()
    assert [e["event_type"] for e in events] == [
        "DocumentCreated", "DocumentStatusChanged", "DocumentSigned", "DocumentStatusChanged"
    ]
    assert events[-1]["payload"]["new_status"] == "FULLY_SIGNED"


def test_stranger_cannot_claim_the_administrator_identity(client, users):
    doc_id = create_document(client, users["carol"])
    resp = client.post("/auth/register", json={"identity": ADMIN, "name": "Impostor", "password": "attacker"})
    assert resp.status_code in {401, 403}
    assert client.post("/auth/login", json={"identity": ADMIN, "password": "attacker"}).status_code == 401
    assert client.get(f"/documents/{doc_id}").json()["is_active"] is True


def test_signatory_without_account_cannot_be_impersonated(client, users):
    doc_id = create_document(client, users["carol"], signatories=("dave",))
    resp = client.post(
        "/auth/register",
        json={"identity": "dave", "name": "Dave", "password": "stolen"},
        headers=users["mallory"],
    )
    assert resp.status_code == 403
    assert client.post("/auth/login", json={"identity": "dave", "password": "stolen"}).status_code == 401
    assert client.get(f"/documents/{doc_id}/signatures/dave").json()["has_signed"] is False


def test_verify_file_for_unknown_document_returns_404(client):
    resp = client.post("/documents/5/verify-file", files={"file": ("lease.pdf", b"%PDF-1.4", "application/pdf")})
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"] == "NotFoundError"

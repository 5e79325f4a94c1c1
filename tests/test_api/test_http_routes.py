"""HTTP surface tests: real FastAPI app, in-memory Unit of Work, no lifespan."""
import uuid

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_uow_factory
from core.config import settings
from shared.codes import BusinessCode
from domain.user.entity import User, UserRole
from main import app


def _seed_dummy_users(store) -> None:
    for raw_id, role in ((settings.DUMMY_MODERATOR_ID, UserRole.MODERATOR), (settings.DUMMY_CLIENT_ID, UserRole.CLIENT)):
        user_id = uuid.UUID(raw_id)
        store.users[user_id] = User(id=user_id, email=f"{role.role_name}@mail.ru", hashed_password="x", role=role)


@pytest.fixture
def client(store):
    _seed_dummy_users(store)
    app.dependency_overrides[get_uow_factory] = lambda: store.uow_factory
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _auth(client: TestClient, role: str) -> dict:
    resp = client.post("/dummyLogin", json={"role": role})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def moderator(client):
    return _auth(client, "moderator")


@pytest.fixture
def employee(client):
    return _auth(client, "employee")


def _create_pvz(client, headers, pvz_id=None, city="Москва"):
    return client.post(
        "/pvz",
        json={"id": str(pvz_id or uuid.uuid4()), "city": city, "registrationDate": "2025-04-01T10:00:00Z"},
        headers=headers,
    )


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"status": "healthy"}


def test_dummy_login_unknown_role(client):
    resp = client.post("/dummyLogin", json={"role": "admin"})
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "UnknownRoleName"


def test_register_and_login(client):
    resp = client.post("/register", json={"email": "new@mail.ru", "password": "pw", "role": "employee"})
    assert resp.status_code == 201
    body = resp.json()["data"]
    assert body["email"] == "new@mail.ru"
    assert body["role"] == "employee"

    ok = client.post("/login", json={"email": "new@mail.ru", "password": "pw"})
    assert ok.status_code == 200
    assert ok.json()["token_type"] == "bearer"

    bad = client.post("/login", json={"email": "new@mail.ru", "password": "nope"})
    assert bad.status_code == 401


def test_register_invalid_email(client):
    resp = client.post("/register", json={"email": "broken", "password": "pw"})
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "InvalidEmail"


def test_create_pvz(client, moderator, store):
    pvz_id = uuid.uuid4()
    resp = _create_pvz(client, moderator, pvz_id)
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data == {"id": str(pvz_id), "registrationDate": "2025-04-01T10:00:00Z", "city": "Москва"}
    assert pvz_id in store.pvzs


def test_create_pvz_access_control(client, employee):
    assert _create_pvz(client, employee).status_code == 403
    assert _create_pvz(client, {}).status_code == 403


def test_create_pvz_unknown_city(client, moderator):
    resp = _create_pvz(client, moderator, city="Париж")
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "UnknownCity"


def test_reception_flow(client, moderator, employee):
    pvz_id = uuid.uuid4()
    _create_pvz(client, moderator, pvz_id)

    opened = client.post("/receptions", json={"pvzId": str(pvz_id)}, headers=employee)
    assert opened.status_code == 201
    reception = opened.json()["data"]
    assert reception["status"] == "in_progress"
    assert reception["pvzId"] == str(pvz_id)

    again = client.post("/receptions", json={"pvzId": str(pvz_id)}, headers=employee)
    assert again.status_code == 400
    assert again.json()["error"]["type"] == "AnotherOpenedReception"

    product = client.post("/products", json={"type": "электроника", "pvzId": str(pvz_id)}, headers=employee)
    assert product.status_code == 201
    assert product.json()["data"]["type"] == "электроника"
    assert product.json()["data"]["receptionId"] == reception["id"]

    removed = client.post(f"/pvz/{pvz_id}/delete_last_product", headers=employee)
    assert removed.status_code == 200

    empty = client.post(f"/pvz/{pvz_id}/delete_last_product", headers=employee)
    assert empty.status_code == 400
    assert empty.json()["error"]["type"] == "ReceptionIsEmpty"

    closed = client.post(f"/pvz/{pvz_id}/close_last_reception", headers=employee)
    assert closed.status_code == 200
    assert closed.json()["data"]["status"] == "close"

    late = client.post("/products", json={"type": "обувь", "pvzId": str(pvz_id)}, headers=employee)
    assert late.status_code == 400
    assert late.json()["error"]["type"] == "AllReceptionsAreClosed"


def test_moderator_cannot_open_reception(client, moderator):
    pvz_id = uuid.uuid4()
    _create_pvz(client, moderator, pvz_id)
    resp = client.post("/receptions", json={"pvzId": str(pvz_id)}, headers=moderator)
    assert resp.status_code == 403


def test_list_pvz_report(client, moderator, employee):
    pvz_id = uuid.uuid4()
    _create_pvz(client, moderator, pvz_id)
    client.post("/receptions", json={"pvzId": str(pvz_id)}, headers=employee)
    client.post("/products", json={"type": "одежда", "pvzId": str(pvz_id)}, headers=employee)

    resp = client.get("/pvz", params={"page": 1, "limit": 10}, headers=employee)
    assert resp.status_code == 200
    [report] = resp.json()["data"]
    assert report["pvz"]["id"] == str(pvz_id)
    [item] = report["receptions"]
    assert item["reception"]["status"] == "in_progress"
    assert [p["type"] for p in item["products"]] == ["одежда"]

    assert client.get("/pvz").status_code == 403


def test_invalid_path_id_is_validation_error(client, employee):
    resp = client.post("/pvz/not-a-uuid/close_last_reception", headers=employee)
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "ValidationError"


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "req-42"})
    assert resp.headers["X-Request-ID"] == "req-42"


def test_malformed_request_id_is_replaced(client):
    resp = client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
    echoed = resp.headers["X-Request-ID"]
    assert echoed != "bad id with spaces"
    uuid.UUID(echoed)


def test_business_error_carries_code(client, employee):
    resp = client.post("/products", json={"type": "мебель", "pvzId": str(uuid.uuid4())}, headers=employee)
    body = resp.json()
    assert resp.status_code == 400
    assert body["code"] == int(BusinessCode.PVZ_NOT_FOUND)
    assert body["error"]["type"] == "PVZDoesNotExist"


@pytest.mark.parametrize(
    "params",
    [
        {"startDate": "2000-01-01T00:00:00Z", "endDate": "2100-01-01T00:00:00"},
        {"startDate": "2000-01-01T00:00:00"},
        {"startDate": "2000-01-01T03:00:00+03:00", "endDate": "2100-01-01T00:00:00Z"},
    ],
)
def test_list_pvz_report_accepts_naive_and_mixed_dates(client, moderator, employee, params):
    pvz_id = uuid.uuid4()
    _create_pvz(client, moderator, pvz_id)
    client.post("/receptions", json={"pvzId": str(pvz_id)}, headers=employee)

    resp = client.get("/pvz", params=params, headers=employee)
    assert resp.status_code == 200
    [report] = resp.json()["data"]
    assert len(report["receptions"]) == 1

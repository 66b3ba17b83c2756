import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from docmapper.api import JSONAPI_MEDIA_TYPE, install_exception_handlers, validation_error_response


@pytest.fixture()
def client(mapper, bob):
    app = FastAPI()
    install_exception_handlers(app)

    @app.post("/people")
    async def write_people(request: Request):
        body = await request.json()
        result = mapper.map(body, {"people": ["name", "pet", {"country": "uruguay"}], "pet_dogs": [{"country": "uruguay"}]})
        if not mapper.save_all(result):
            return validation_error_response(mapper.error_report(result))
        return {"id": result.primary.id}

    @app.post("/broken")
    async def broken(request: Request):
        mapper.map(await request.json(), {"people": ["name"]})

    return TestClient(app)


def test_saves_a_valid_document(client, bob):
    r = client.post("/people", json={"data": {"type": "people", "id": bob.id, "attributes": {"name": "rob"}}})
    assert r.status_code == 200
    assert r.json() == {"id": bob.id}
    assert bob.name == "rob"


def test_not_found_is_404(client):
    r = client.post("/people", json={"data": {"type": "people", "id": "999", "attributes": {"name": "x"}}})
    assert r.status_code == 404
    assert r.headers["content-type"].startswith(JSONAPI_MEDIA_TYPE)
    (error,) = r.json()["errors"]
    assert error["status"] == "404"
    assert error["code"] == "not_found"
    assert error["meta"] == {"type": "people", "id": "999"}


def test_type_mismatch_is_422(client, bob):
    r = client.post("/people", json={"data": {"type": "people", "id": bob.id, "attributes": {"pet": "3"}}})
    assert r.status_code == 422
    assert r.json()["errors"][0]["code"] == "type_mismatch"


def test_validation_failures_are_422_error_documents(client, bob):
    r = client.post(
        "/people",
        json={
            "data": {"type": "people", "id": bob.id, "relationships": {"pet": {"data": {"type": "pet_dogs", "id": "@1"}}}},
            "included": [{"type": "pet_dogs", "id": "@1"}],
        },
    )
    assert r.status_code == 422
    assert r.headers["content-type"].startswith(JSONAPI_MEDIA_TYPE)
    (error,) = r.json()["errors"]
    assert error["source"] == {"pointer": "/included/0/attributes/name"}


def test_rules_errors_do_not_leak_details(client):
    r = client.post("/broken", json={"data": None})
    assert r.status_code == 500
    (error,) = r.json()["errors"]
    assert error == {"status": "500", "code": "internal_error", "title": "Internal Server Error"}
    assert "scope" not in r.text

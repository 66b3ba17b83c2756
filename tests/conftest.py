import pytest

from docmapper import DocumentMapper, InMemoryRepository, MapperSettings, TypeRegistry
from docmapper.observability.metrics import reset_metrics

from sample_entities import Person, PetDog


@pytest.fixture(autouse=True)
def _clean_metrics(monkeypatch):
    for name in ("DOCMAPPER_METRICS_ENABLED", "DOCMAPPER_TEMP_ID_PREFIX"):
        monkeypatch.delenv(name, raising=False)
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture()
def repo():
    return InMemoryRepository()


@pytest.fixture()
def registry():
    return TypeRegistry([Person, PetDog])


@pytest.fixture()
def mapper(repo, registry):
    return DocumentMapper(repo, registry, settings=MapperSettings())


@pytest.fixture()
def bob(repo):
    return repo.add(Person(name="bob", country="uruguay"))


@pytest.fixture()
def ana(repo):
    return repo.add(Person(name="ana", country="uruguay"))


@pytest.fixture()
def ace(repo):
    return repo.add(PetDog(name="ace", country="uruguay"))


@pytest.fixture()
def uruguay_rules():
    return {
        "people": ["name", "pet", "parent", {"country": "uruguay"}],
        "pet_dogs": ["name", {"country": "uruguay"}],
    }


@pytest.fixture()
def doc_updating_bob_ana_and_adding_pet(bob, ana):
    return {
        "data": {
            "type": "people",
            "id": bob.id,
            "attributes": {"name": "rob", "admin": True},
            "relationships": {
                "pet": {"data": {"type": "pet_dogs", "id": "@1"}},
                "parent": {"data": {"type": "people", "id": ana.id}},
            },
        },
        "included": [
            {
                "type": "people",
                "id": ana.id,
                "relationships": {
                    "pet": {"data": {"type": "pet_dogs", "id": "@1"}},
                    "parent": {"data": {"type": "people", "id": bob.id}},
                },
            },
            {"type": "pet_dogs", "id": "@1", "attributes": {"name": "ace"}},
        ],
    }

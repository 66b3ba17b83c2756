import pytest

from docmapper import MapperSettings, NotFoundError, TypeMismatchError
from docmapper.core.graph import RelationshipLinker, ResourceBuilder, ResourceGraph, ResourceIdentifier
from docmapper.core.rules import compile_rules

from sample_entities import PetDog


def _link(repo, registry, fragments, rules=None, settings=None):
    settings = settings or MapperSettings()
    compiled = compile_rules(
        rules
        or {
            "people": ["name", "pet", "parent", "children", {"country": "uruguay"}],
            "pet_dogs": ["name", {"country": "uruguay"}],
        },
        registry=registry,
    )
    graph = ResourceGraph()
    builder = ResourceBuilder(compiled, repo, graph, settings)
    nodes = [builder.build(raw, f"/included/{i}") for i, raw in enumerate(fragments)]
    RelationshipLinker(compiled, repo, graph, settings).link_all()
    return nodes


def test_temporary_references_resolve_within_the_document(repo, registry):
    owner, dog = _link(
        repo,
        registry,
        [
            {"type": "people", "id": "@1", "relationships": {"pet": {"data": {"type": "pet_dogs", "id": "@1"}}}},
            {"type": "pet_dogs", "id": "@1", "attributes": {"name": "ace"}},
        ],
    )
    assert owner.entity.pet is dog.entity


def test_forward_and_cyclic_references(repo, registry):
    a, b = _link(
        repo,
        registry,
        [
            {"type": "people", "id": "@a", "relationships": {"parent": {"data": {"type": "people", "id": "@b"}}}},
            {"type": "people", "id": "@b", "relationships": {"parent": {"data": {"type": "people", "id": "@a"}}}},
        ],
    )
    assert a.entity.parent is b.entity
    assert b.entity.parent is a.entity


def test_real_ids_prefer_the_graph_over_the_repository(repo, registry, bob):
    (kid, bob_node) = _link(
        repo,
        registry,
        [
            {"type": "people", "relationships": {"parent": {"data": {"type": "people", "id": str(bob.id)}}}},
            {"type": "people", "id": str(bob.id), "attributes": {"name": "rob"}},
        ],
    )
    assert bob_node.entity is bob
    assert kid.entity.parent is bob
    assert bob.name == "rob"


def test_real_ids_fall_back_to_a_scoped_lookup(repo, registry, ace):
    (node,) = _link(
        repo,
        registry,
        [{"type": "people", "relationships": {"pet": {"data": {"type": "pet_dogs", "id": ace.id}}}}],
    )
    assert node.entity.pet is ace


def test_out_of_scope_reference_is_not_found(repo, registry):
    rex = repo.add(PetDog(name="rex", country="belgium"))
    with pytest.raises(NotFoundError) as e:
        _link(
            repo,
            registry,
            [{"type": "people", "relationships": {"pet": {"data": {"type": "pet_dogs", "id": rex.id}}}}],
        )
    assert e.value.type == "pet_dogs"


def test_missing_temporary_reference_is_not_found(repo, registry):
    with pytest.raises(NotFoundError) as e:
        _link(
            repo,
            registry,
            [{"type": "people", "relationships": {"pet": {"data": {"type": "pet_dogs", "id": "@9"}}}}],
        )
    assert e.value.id == "@9"
    assert repo.count(PetDog) == 0


def test_references_to_types_outside_the_rules_are_ignored(repo, registry):
    (node,) = _link(
        repo,
        registry,
        [{"type": "people", "relationships": {"pet": {"data": {"type": "pet_dogs", "id": "1"}}}}],
        rules={"people": ["pet", {"country": "uruguay"}]},
    )
    assert node.entity.pet is None


def test_to_many_appends_in_document_order(repo, registry, bob, ana):
    (parent,) = _link(
        repo,
        registry,
        [
            {
                "type": "people",
                "relationships": {
                    "children": {
                        "data": [
                            {"type": "people", "id": ana.id},
                            {"type": "people", "id": bob.id},
                            {"type": "pet_dogs_unknown", "id": "3"},
                        ]
                    }
                },
            }
        ],
    )
    assert parent.entity.children == [ana, bob]


def test_wrong_target_type_is_a_type_mismatch(repo, registry, ana):
    with pytest.raises(TypeMismatchError):
        _link(
            repo,
            registry,
            [{"type": "people", "relationships": {"pet": {"data": {"type": "people", "id": ana.id}}}}],
        )


def test_relationship_on_a_plain_attribute_is_a_type_mismatch(repo, registry):
    with pytest.raises(TypeMismatchError):
        _link(
            repo,
            registry,
            [{"type": "people", "relationships": {"name": {"data": {"type": "people", "id": "@1"}}}}],
        )


def test_custom_temporary_prefix(repo, registry):
    settings = MapperSettings(temp_id_prefix="tmp-")
    owner, dog = _link(
        repo,
        registry,
        [
            {"type": "people", "relationships": {"pet": {"data": {"type": "pet_dogs", "id": "tmp-1"}}}},
            {"type": "pet_dogs", "id": "tmp-1", "attributes": {"name": "ace"}},
        ],
        settings=settings,
    )
    assert owner.entity.pet is dog.entity
    assert dog.entity.id is None


def test_resource_identifier_temporary_check():
    assert ResourceIdentifier("people", "@1").is_temporary()
    assert not ResourceIdentifier("people", "1").is_temporary()
    assert not ResourceIdentifier("people").is_temporary()

import pytest

from docmapper.core.inflect import default_type_name, pascalize, singularize


@pytest.mark.parametrize(
    "plural,single",
    [
        ("dogs", "dog"),
        ("people", "person"),
        ("categories", "category"),
        ("addresses", "address"),
        ("boxes", "box"),
        ("wolves", "wolf"),
        ("news", "news"),
        ("status", "status"),
    ],
)
def test_singularize(plural, single):
    assert singularize(plural) == single


def test_pascalize_joins_words():
    assert pascalize("pet_dog") == "PetDog"
    assert pascalize("line-item") == "LineItem"


def test_default_type_name_singularizes_last_word_only():
    assert default_type_name("pet_dogs") == "PetDog"
    assert default_type_name("people") == "Person"
    assert default_type_name("persons") == "Person"
    assert default_type_name("sales_people") == "SalesPerson"

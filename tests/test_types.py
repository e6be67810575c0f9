import pytest
from pydantic import ValidationError

from sshoc_client.types import (
    Actor,
    ActorSource,
    ConceptProperty,
    Item,
    ValueProperty,
    is_concept_property,
    is_value_property,
)

VOCAB = {
    "accessibleAt": "https://vocabs.example.org/tadirah",
    "closed": True,
    "code": "tadirah2",
    "label": "TaDiRAH",
    "namespace": "tadirah2",
    "scheme": "https://vocabs.example.org/tadirah/scheme",
}


def prop_type(kind):
    return {
        "allowedVocabularies": [VOCAB] if kind == "concept" else [],
        "code": "activity" if kind == "concept" else "version",
        "groupName": "Bibliographic",
        "hidden": False,
        "label": "Activity" if kind == "concept" else "Version",
        "ord": 1,
        "type": kind,
    }


CONCEPT_PROP = {
    "type": prop_type("concept"),
    "concept": {
        "candidate": False,
        "code": "analyzing",
        "definition": "",
        "label": "Analyzing",
        "notation": "",
        "uri": "https://vocabs.example.org/tadirah/analyzing",
        "vocabulary": VOCAB,
    },
}
VALUE_PROP = {"type": prop_type("string"), "value": "1.2.0"}


def nested_actor(depth):
    actor = {"id": depth, "name": f"actor {depth}", "externalIds": [], "affiliations": []}
    for i in range(depth):
        actor = {"id": i, "name": f"actor {i}", "externalIds": [], "affiliations": [actor]}
    return actor


def test_property_predicates_on_raw_and_parsed():
    assert is_concept_property(CONCEPT_PROP)
    assert not is_value_property(CONCEPT_PROP)
    for kind in ("string", "url", "int", "float", "date", "boolean"):
        raw = {"type": prop_type(kind), "value": "x"}
        assert is_value_property(raw)
        assert not is_concept_property(raw)

    item = Item.model_validate({
        "category": "tool-or-service", "id": 1, "label": "Voyant", "lastInfoUpdate":
        "2023-04-01T10:00:00+0000", "persistentId": "abc", "description": "", "owner": "admin",
        "status": "approved", "properties": [CONCEPT_PROP, VALUE_PROP],
    })
    concept, value = item.properties
    assert isinstance(concept, ConceptProperty)
    assert isinstance(value, ValueProperty)
    assert is_concept_property(concept)
    assert is_value_property(value)


def test_snapshots_are_frozen():
    actor = Actor.model_validate(nested_actor(1))
    with pytest.raises(ValidationError):
        actor.name = "changed"


def test_affiliations_parse_as_tree():
    actor = Actor.model_validate(nested_actor(3))
    assert actor.affiliations[0].affiliations[0].affiliations[0].name == "actor 3"


def test_affiliation_depth_limit():
    with pytest.raises(ValidationError):
        Actor.model_validate(nested_actor(40))


def test_actor_source_url_template():
    source = ActorSource(code="orcid", label="ORCID", ord=1,
                         urlTemplate="https://orcid.org/{source-actor-id}")
    assert source.url_for("0000-0002-1825-0097") == "https://orcid.org/0000-0002-1825-0097"

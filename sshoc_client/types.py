from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
    model_validator,
)

ITEM_CATEGORIES = ("dataset", "publication", "tool-or-service", "training-material", "workflow")
ITEM_FACETS = ("activity", "keyword", "source", "language")
ITEM_SORT_ORDERS = ("score", "label", "modified-on")
ITEM_DRAFT_SORT_ORDERS = ("label", "modified-on")
ITEM_STATUS = ("approved", "deprecated", "disapproved", "draft", "ingested", "suggested")

Category = Literal["dataset", "publication", "tool-or-service", "training-material", "workflow"]
CategoryWithStep = Literal[
    "dataset", "publication", "tool-or-service", "training-material", "workflow", "step"
]
Facet = Literal["activity", "keyword", "source", "language"]
SortOrder = Literal["score", "label", "modified-on"]
DraftSortOrder = Literal["label", "modified-on"]
ItemStatus = Literal["approved", "deprecated", "disapproved", "draft", "ingested", "suggested"]
ValueKind = Literal["string", "url", "int", "float", "date", "boolean"]

IsoDateString = str
UrlString = str

MAX_AFFILIATION_DEPTH = 32
SOURCE_ACTOR_ID_PLACEHOLDER = "{source-actor-id}"


class Snapshot(BaseModel):
    """Read-only value parsed from a server response. Unknown fields are kept."""

    model_config = ConfigDict(frozen=True, extra="allow")


# --------- Actors ---------
class ActorSource(Snapshot):
    code: str
    label: str
    ord: int
    urlTemplate: UrlString

    def url_for(self, source_actor_id: str) -> str:
        return self.urlTemplate.replace(SOURCE_ACTOR_ID_PLACEHOLDER, source_actor_id)


class ActorExternalId(Snapshot):
    identifier: str
    identifierService: ActorSource


class Actor(Snapshot):
    id: int
    name: str
    email: str | None = None
    website: UrlString | None = None
    externalIds: list[ActorExternalId] = Field(default_factory=list)
    affiliations: list[Actor] = Field(default_factory=list)

    @field_validator("affiliations")
    @classmethod
    def _limit_affiliation_depth(cls, value: list[Actor]) -> list[Actor]:
        # children are validated first, so each level only measures its own subtree
        if affiliation_depth(value) > MAX_AFFILIATION_DEPTH:
            raise ValueError(f"actor affiliations nested deeper than {MAX_AFFILIATION_DEPTH}")
        return value


def affiliation_depth(actors: list[Actor]) -> int:
    if not actors:
        return 0
    return 1 + max(affiliation_depth(a.affiliations) for a in actors)


class ActorRole(Snapshot):
    code: str
    label: str
    ord: int


class Contributor(Snapshot):
    actor: Actor
    role: ActorRole


# --------- Vocabularies & properties ---------
class VocabularyBase(Snapshot):
    accessibleAt: str
    closed: bool
    code: str
    label: str
    namespace: str
    scheme: str


class PropertyTypeBase(Snapshot):
    allowedVocabularies: list[VocabularyBase] = Field(default_factory=list)
    code: str
    groupName: str
    hidden: bool
    label: str
    ord: int


class ConceptPropertyType(PropertyTypeBase):
    type: Literal["concept"]


class ValuePropertyType(PropertyTypeBase):
    type: ValueKind


PropertyType = Union[ConceptPropertyType, ValuePropertyType]


class ConceptBase(Snapshot):
    candidate: bool
    code: str
    definition: str
    label: str
    notation: str
    uri: str
    vocabulary: VocabularyBase


class ConceptProperty(Snapshot):
    concept: ConceptBase
    type: ConceptPropertyType


class ValueProperty(Snapshot):
    type: ValuePropertyType
    value: str


def _property_kind(value: Any) -> str:
    """Tag a property as "concept" or "value" from its nested ``type.type``."""
    prop_type = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if isinstance(prop_type, dict):
        kind = prop_type.get("type")
    else:
        kind = getattr(prop_type, "type", None)
    return "concept" if kind == "concept" else "value"


Property = Annotated[
    Union[
        Annotated[ConceptProperty, Tag("concept")],
        Annotated[ValueProperty, Tag("value")],
    ],
    Discriminator(_property_kind),
]


def is_concept_property(value: ConceptProperty | ValueProperty | dict) -> bool:
    return _property_kind(value) == "concept"


def is_value_property(value: ConceptProperty | ValueProperty | dict) -> bool:
    return _property_kind(value) != "concept"


# --------- Items ---------
class ItemBase(Snapshot):
    category: CategoryWithStep
    id: int
    label: str
    lastInfoUpdate: IsoDateString
    persistentId: str


class Item(ItemBase):
    accessibleAt: list[UrlString] = Field(default_factory=list)
    contributors: list[Contributor] = Field(default_factory=list)
    description: str
    owner: str
    properties: list[Property] = Field(default_factory=list)
    status: ItemStatus
    thumbnailId: str | None = None


# --------- Responses ---------
class CategoryCount(Snapshot):
    checked: bool
    count: int
    label: str


class FacetValueCount(Snapshot):
    checked: bool
    count: int


class SearchResponse(Snapshot):
    categories: dict[Category, CategoryCount]
    count: int
    facets: dict[Facet, dict[str, FacetValueCount]]
    hits: int
    items: list[Item]
    order: list[SortOrder]
    page: int
    pages: int
    perpage: int
    q: str | None = None


class AutocompleteSuggestion(Snapshot):
    phrase: str
    persistentId: str


class AutocompleteResponse(Snapshot):
    phrase: str
    suggestions: list[AutocompleteSuggestion]


# --------- Request parameters ---------
FieldFilterValue = Union[str, list[str]]


class SearchParams(BaseModel):
    """Search request in caller terms.

    Facet filters are accepted under their friendly names (``activities``,
    ``keywords``, ``languages``, ``sources``) or their wire names
    (``f.activity`` ...). Keys starting with ``d.`` are indexed-field searches
    (e.g. ``d.status``, ``d.owner``, ``d.curation-flag-url``) and are collected
    into ``field_filters``; the server accepts solr syntax in their values.

    ``order``, ``page`` and ``perpage`` default to ``["label"]``, 1 and 25 when
    encoded. ``perpage`` must not exceed 100, which the server enforces.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    q: str | None = None
    categories: list[Category] | None = None
    advanced: bool | None = None
    includeSteps: bool | None = None
    order: list[SortOrder] | None = None
    page: int | None = None
    perpage: int | None = None
    activities: list[str] | None = Field(
        default=None, validation_alias=AliasChoices("activities", "f.activity")
    )
    keywords: list[str] | None = Field(
        default=None, validation_alias=AliasChoices("keywords", "f.keyword")
    )
    languages: list[str] | None = Field(
        default=None, validation_alias=AliasChoices("languages", "f.language")
    )
    sources: list[str] | None = Field(
        default=None, validation_alias=AliasChoices("sources", "f.source")
    )
    field_filters: dict[str, FieldFilterValue] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_field_filters(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        filters = dict(data.get("field_filters") or {})
        rest = {}
        for key, value in data.items():
            if key.startswith("d."):
                filters[key] = value
            elif key != "field_filters":
                rest[key] = value
        rest["field_filters"] = filters
        return rest

    @field_validator("field_filters")
    @classmethod
    def _prefix_field_filters(cls, value: dict[str, FieldFilterValue]) -> dict[str, FieldFilterValue]:
        return {(k if k.startswith("d.") else f"d.{k}"): v for k, v in value.items()}


class AutocompleteParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # must not be empty; not checked here, the server decides
    q: str
    category: Category | None = None

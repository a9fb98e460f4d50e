"""Pydantic models describing Wikibase action-API and SPARQL payloads."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Annotated, Literal, TypeAlias, TypeVar, cast

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from transit_topo.domain.errors import SchemaError

EntityId: TypeAlias = str  # Q123, P45
LanguageCode: TypeAlias = str

ITEM_ID_PATTERN = re.compile(r"Q[1-9][0-9]*")


def is_item_id(value: str) -> bool:
    return ITEM_ID_PATTERN.fullmatch(value) is not None


class WikibaseBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


M = TypeVar("M", bound=BaseModel)


def parse_payload(model: type[M], payload: object) -> M:
    """Validate ``payload`` against ``model``, raising :class:`SchemaError` on mismatch."""

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise SchemaError(f"Unexpected {model.__name__} payload: {exc}") from exc


# --- datavalues -----------------------------------------------------------------


class StringValue(WikibaseBaseModel):
    type: Literal["string"] = "string"
    value: str


class EntityIdPayload(WikibaseBaseModel):
    id: EntityId
    entity_type: str | None = Field(default=None, alias="entity-type")
    numeric_id: int | None = Field(default=None, alias="numeric-id")

    @model_validator(mode="before")
    @classmethod
    def _derive_id(cls, value: object) -> object:
        # older Wikibase versions only send entity-type and numeric-id
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            if (
                "id" not in mapping_value
                and mapping_value.get("entity-type") == "item"
                and "numeric-id" in mapping_value
            ):
                data: dict[str, object] = dict(mapping_value)
                data["id"] = f"Q{mapping_value.get('numeric-id')}"
                return data
        return value


class ItemValue(WikibaseBaseModel):
    type: Literal["wikibase-entityid"] = "wikibase-entityid"
    value: EntityIdPayload

    @classmethod
    def for_item(cls, numeric_id: int) -> ItemValue:
        return cls(
            value=EntityIdPayload(id=f"Q{numeric_id}", entity_type="item", numeric_id=numeric_id)
        )

    @classmethod
    def for_entity_id(cls, entity_id: EntityId) -> ItemValue:
        if not is_item_id(entity_id):
            raise ValueError(f"Not an item identifier: {entity_id!r}")
        return cls.for_item(int(entity_id[1:]))


Datavalue = Annotated[StringValue | ItemValue, Field(discriminator="type")]


# --- entities -------------------------------------------------------------------


class Snak(WikibaseBaseModel):
    snaktype: Literal["value", "somevalue", "novalue"] = "value"
    property: EntityId | None = None
    datavalue: Datavalue | None = None


class Claim(WikibaseBaseModel):
    mainsnak: Snak
    type: str = "statement"
    rank: Literal["preferred", "normal", "deprecated"] = "normal"

    @classmethod
    def with_value(cls, property_id: EntityId, datavalue: StringValue | ItemValue) -> Claim:
        return cls(mainsnak=Snak(property=property_id, datavalue=datavalue))


class Label(WikibaseBaseModel):
    language: LanguageCode
    value: str


class Entity(WikibaseBaseModel):
    id: EntityId
    claims: dict[EntityId, list[Claim]] | None = None
    labels: dict[LanguageCode, Label] | None = None
    missing: str | None = None

    @model_validator(mode="after")
    def _drop_content_of_missing(self) -> Entity:
        if self.missing is not None:
            self.claims = None
            self.labels = None
        return self

    @property
    def is_missing(self) -> bool:
        return self.missing is not None

    def item_values(self, property_id: EntityId) -> list[EntityId]:
        """Ids of the items ``property_id`` points to."""

        if not self.claims:
            return []
        return [
            claim.mainsnak.datavalue.value.id
            for claim in self.claims.get(property_id, [])
            if isinstance(claim.mainsnak.datavalue, ItemValue)
        ]

    def label(self, language: LanguageCode) -> str | None:
        if not self.labels:
            return None
        entry = self.labels.get(language)
        return entry.value if entry is not None else None

    def any_label(self, language: LanguageCode) -> str | None:
        """Return the label in ``language``, else the first available one."""

        preferred = self.label(language)
        if preferred is not None or not self.labels:
            return preferred
        return next(iter(self.labels.values())).value


class EntityResponse(WikibaseBaseModel):
    entities: dict[EntityId, Entity]


class SearchResultItem(WikibaseBaseModel):
    id: EntityId
    label: str
    url: str | None = None


class SearchResponse(WikibaseBaseModel):
    search: list[SearchResultItem] = Field(default_factory=list["SearchResultItem"])


class Tokens(WikibaseBaseModel):
    csrftoken: str


class TokenQuery(WikibaseBaseModel):
    tokens: Tokens


class TokenResponse(WikibaseBaseModel):
    query: TokenQuery


# --- write responses ------------------------------------------------------------


class InsertedEntity(WikibaseBaseModel):
    id: EntityId


class ApiMessagePayload(WikibaseBaseModel):
    name: str
    parameters: list[str] = Field(default_factory=list)

    @field_validator("parameters", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        if isinstance(value, list):
            return [item if isinstance(item, str) else str(item) for item in value]
        return value


class ApiErrorPayload(WikibaseBaseModel):
    code: str
    info: str
    messages: list[ApiMessagePayload] = Field(default_factory=list["ApiMessagePayload"])


class ErrorResponse(WikibaseBaseModel):
    error: ApiErrorPayload


class EditEntityResponse(WikibaseBaseModel):
    """Either the created entity or the error, never both and never neither."""

    entity: InsertedEntity | None = None
    error: ApiErrorPayload | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> EditEntityResponse:
        if (self.entity is None) == (self.error is None):
            raise ValueError("expected exactly one of 'entity' or 'error'")
        return self


# --- SPARQL ---------------------------------------------------------------------


class SparqlTerm(WikibaseBaseModel):
    type: Literal["uri", "literal", "bnode", "typed-literal"]
    value: str
    language: str | None = Field(default=None, alias="xml:lang")


class SparqlHead(WikibaseBaseModel):
    vars: list[str] = Field(default_factory=list)


class SparqlResults(WikibaseBaseModel):
    bindings: list[dict[str, SparqlTerm]]


class SparqlResponse(WikibaseBaseModel):
    head: SparqlHead = Field(default_factory=SparqlHead)
    results: SparqlResults

    def rows(self) -> list[dict[str, str]]:
        return [
            {name: term.value for name, term in binding.items()}
            for binding in self.results.bindings
        ]

"""Schema for ``_llms.json`` customization documents.

A customization document tunes the index generated for the directory that
contains it: title and description overrides, guidance for readers, curated
``offers`` surfaced to the parent, section definitions, per-file overrides,
filters, promotion rules and related-topic cross references.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

MAX_OFFERS = 6


class _Model(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _match_keys_ignoring_case(cls, data: Any) -> Any:
        """Rename keys such as ``Title`` or ``SHORTDESCRIPTION`` to their field key."""
        if not isinstance(data, dict):
            return data
        known: Dict[str, str] = {}
        for name, info in cls.model_fields.items():
            keys = [name]
            if info.alias:
                keys.append(info.alias)
            if isinstance(info.validation_alias, AliasChoices):
                keys += [
                    choice for choice in info.validation_alias.choices if isinstance(choice, str)
                ]
            for key in keys:
                known.setdefault(key.lower(), key)
        return {
            known.get(key.lower(), key) if isinstance(key, str) else key: value
            for key, value in data.items()
        }


class GuidanceSection(_Model):
    title: Optional[str] = None
    intro: Optional[str] = None
    items: List[str] = Field(default_factory=list)


class SectionDefinition(_Model):
    """Either a child reference (``path``) or a standalone section (``name``)."""

    name: Optional[str] = None
    path: Optional[str] = None
    priority: int = 0
    description: Optional[str] = None
    include: Optional[List[str]] = Field(
        default=None, validation_alias=AliasChoices("include", "wants")
    )

    @model_validator(mode="after")
    def _require_path_or_name(self) -> "SectionDefinition":
        if not (self.path or self.name):
            raise ValueError("section needs either 'path' or 'name'")
        return self

    @property
    def is_child_reference(self) -> bool:
        return bool(self.path)


class NodeOverride(_Model):
    rename: Optional[str] = None
    description: Optional[str] = None


class PromoteRule(_Model):
    path: str
    levels: int = Field(default=1, ge=0)


class RelatedTopic(_Model):
    path: str
    weight: Optional[float] = None
    keywords: List[str] = Field(default_factory=list)
    reason: Optional[str] = None


class LlmsCustomization(_Model):
    schema_url: Optional[str] = Field(default=None, alias="$schema")
    title: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = Field(default=None, alias="shortDescription")
    preamble: Optional[str] = None
    guidance: Optional[GuidanceSection] = None
    offers: List[str] = Field(default_factory=list)
    sections: List[SectionDefinition] = Field(default_factory=list)
    nodes: Dict[str, NodeOverride] = Field(default_factory=dict)
    filter: List[str] = Field(default_factory=list)
    promote: List[PromoteRule] = Field(default_factory=list)
    related: List[RelatedTopic] = Field(default_factory=list)

    @field_validator("offers")
    @classmethod
    def _cap_offers(cls, offers: List[str]) -> List[str]:
        return offers[:MAX_OFFERS]

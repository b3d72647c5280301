"""
Base Schema Models for the Dwolla Client

This module defines the base model every request and response payload inherits
from, the HAL+JSON envelope shared by all Dwolla resources, and the helper that
turns an outgoing payload into its JSON wire representation.

Core Classes:
    - DwollaModel: Pydantic base model with camelCase aliases and compact JSON output
    - Link: A single HAL link
    - HalResource: Resource envelope carrying ``_links`` and ``_embedded``

Dependencies:
    - pydantic: For data validation and serialization
"""

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def dumps(data: Any) -> str:
    """Compact JSON: no extra whitespace, non-ASCII kept as-is."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


class DwollaModel(BaseModel):
    """
    Pydantic base model matching the Dwolla wire format.

    Field names are written in snake_case and serialized in camelCase, which
    is what the API expects. Either name is accepted when validating.

    Example:
        class CreateCustomerRequest(DwollaModel):
            first_name: str
            last_name: str

        CreateCustomerRequest(first_name="Jane", last_name="Doe").to_json()
        # Returns: '{"firstName":"Jane","lastName":"Doe"}'
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    def to_json(self) -> str:
        """
        Convert model to a compact JSON string.

        Fields are written by alias and ``None`` values are omitted.

        Returns:
            str: JSON string with no extra whitespace.
        """
        return dumps(self.model_dump(mode="json", by_alias=True, exclude_none=True))


def serialize_body(content: Any) -> str:
    """
    Serialize an outgoing request payload to JSON.

    Pydantic models are dumped by alias with ``None`` fields omitted, so the
    same rule applies to DwollaModel and plain BaseModel payloads. Anything else
    (dicts, lists) goes straight to ``json.dumps``.
    """
    if isinstance(content, DwollaModel):
        return content.to_json()
    if isinstance(content, BaseModel):
        return dumps(content.model_dump(mode="json", by_alias=True, exclude_none=True))
    return dumps(content)


class Link(BaseModel):
    """A HAL link.

    Attributes:
        href: Absolute URL of the linked resource.
        type: Media type of the linked resource, when given.
        resource_type: Dwolla resource type (``resource-type`` on the wire).
    """
    model_config = ConfigDict(populate_by_name=True)

    href: str
    type: Optional[str] = None
    resource_type: Optional[str] = Field(default=None, alias="resource-type")


class HalResource(DwollaModel):
    """
    Envelope shared by every HAL+JSON resource.

    Concrete resources subclass this and add their own fields.

    Attributes:
        links: Links keyed by relation name (``_links``).
        embedded: Embedded resources keyed by relation name (``_embedded``).
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, extra="allow")

    links: Dict[str, Link] = Field(default_factory=dict, alias="_links")
    embedded: Dict[str, Any] = Field(default_factory=dict, alias="_embedded")

    def link(self, name: str) -> Optional[str]:
        """Return the href of the named link, or None if absent."""
        found = self.links.get(name)
        return found.href if found else None

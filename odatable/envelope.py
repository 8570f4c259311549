"""Response envelopes: the collection wrapper and single-entity metadata.

Collection responses look like::

    {"@odata.context": "...", "@odata.count": 42, "@odata.nextLink": "...", "value": [...]}

All knowledge of wire key names lives here; callers only see ``Envelope``
attributes and plain entity dicts.
"""

import logging
from typing import Any, Mapping, Optional

from pydantic import AliasChoices, BaseModel, Field, ValidationError, ValidationInfo, field_validator

logger = logging.getLogger("odatable")

METADATA_PREFIX = "@"


class Envelope(BaseModel):
    """Collection envelope with the wire metadata mapped to plain attribute names."""

    model_config = {"populate_by_name": True, "extra": "ignore"}

    value: list[Any] = Field(default_factory=list)
    total_count: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("@odata.count", "totalCount", "total_count", "count"),
    )
    next_link: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("@odata.nextLink", "nextLink", "next_link"),
    )
    context: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("@odata.context", "context"),
    )

    @field_validator("value", mode="before")
    @classmethod
    def _value_as_list(cls, value: Any) -> list[Any]:
        if value is None:
            return []
        if not isinstance(value, list):
            logger.warning("Envelope `value` is %s, not a list; treating as empty", type(value).__name__)
            return []
        return value

    @field_validator("total_count", mode="before")
    @classmethod
    def _total_count_as_int(cls, value: Any) -> Optional[int]:
        if value is None or isinstance(value, bool):
            return None
        try:
            count = int(value)
        except (TypeError, ValueError, OverflowError):
            logger.warning("Envelope count %r is not an integer; ignoring it", value)
            return None
        return max(count, 0)

    @field_validator("next_link", "context", mode="before")
    @classmethod
    def _link_as_str(cls, value: Any, info: ValidationInfo) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        logger.warning("Envelope %s %r is not a string; ignoring it", info.field_name, value)
        return None


def parse_envelope(payload: Any) -> Envelope:
    """Read a collection envelope; anything that is not a mapping becomes an empty envelope."""
    if isinstance(payload, Envelope):
        return payload
    if not isinstance(payload, Mapping):
        logger.warning("Expected an envelope object, got %s; treating as empty", type(payload).__name__)
        return Envelope()
    if "value" not in payload:
        logger.warning("Envelope has no `value` field; treating as empty")
    try:
        return Envelope.model_validate(dict(payload))
    except ValidationError as error:
        logger.warning("Envelope metadata is invalid, keeping only its items: %s", error)
        return Envelope(value=payload.get("value"))


def parse_collection(payload: Any) -> list[Any]:
    """The ``value`` list of a collection response, or ``[]`` if it is missing."""
    return parse_envelope(payload).value


def parse_entity(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow copy of a single-entity response without its ``@``-prefixed metadata keys."""
    return {
        key: value
        for key, value in payload.items()
        if not (isinstance(key, str) and key.startswith(METADATA_PREFIX))
    }

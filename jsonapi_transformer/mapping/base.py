"""Per-type mapping consulted by the transformer."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourceMapping(BaseModel):
    """How one source class is projected into a JSON:API resource.

    ``id_properties`` are read in declaration order and joined with ``.``
    to build composite ids. ``resource_url`` may contain ``{property}``
    placeholders, one per id property. ``filter_keys``,
    ``hidden_properties`` and ``aliased_properties`` drive tree
    preprocessing; ``relationships`` is static metadata merged into the
    relationship summaries of included resources.
    """

    model_config = ConfigDict(frozen=True)

    class_name: str
    id_properties: List[str] = Field(default_factory=list)
    alias: Optional[str] = None
    resource_url: Optional[str] = None
    self_url: Optional[str] = None
    first_url: Optional[str] = None
    last_url: Optional[str] = None
    prev_url: Optional[str] = None
    next_url: Optional[str] = None
    related_url: Optional[str] = None
    relationships: Dict[str, Any] = Field(default_factory=dict)
    filter_keys: List[str] = Field(default_factory=list)
    hidden_properties: List[str] = Field(default_factory=list)
    aliased_properties: Dict[str, str] = Field(default_factory=dict)

    def top_level_links(self) -> dict[str, Optional[str]]:
        """Return the candidate top-level links keyed by link name."""
        return {
            "self": self.self_url,
            "first": self.first_url,
            "last": self.last_url,
            "prev": self.prev_url,
            "next": self.next_url,
            "related": self.related_url,
        }

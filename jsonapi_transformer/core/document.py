"""JSON:API document assembly."""

from typing import Any, Iterable, Mapping

LINK_NAMES = ("self", "first", "last", "prev", "next", "related")


class JSONAPIDocumentBuilder:
    """Build JSON:API v1.1 documents from projected resources."""

    def build_single(
        self,
        resource: Mapping[str, Any],
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
        version: str | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API document for a single resource object."""
        document: dict[str, Any] = {"data": dict(resource)}
        return self._finish(document, included=included, links=links, meta=meta, version=version)

    def build_collection(
        self,
        resources: Iterable[Mapping[str, Any]],
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
        version: str | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API document for a collection of resources."""
        document: dict[str, Any] = {"data": [dict(item) for item in resources]}
        return self._finish(document, included=included, links=links, meta=meta, version=version)

    def build_links(self, candidates: Mapping[str, str | None]) -> dict[str, str]:
        """Keep the non-empty top-level links, in their canonical order."""
        return {name: candidates[name] for name in LINK_NAMES if candidates.get(name)}

    def _finish(
        self,
        document: dict[str, Any],
        *,
        included: Iterable[Mapping[str, Any]] | None,
        links: Mapping[str, Any] | None,
        meta: Mapping[str, Any] | None,
        version: str | None,
    ) -> dict[str, Any]:
        included = list(included or [])
        if included:
            document["included"] = [dict(item) for item in included]
        if links:
            document["links"] = dict(links)
        if meta:
            document["meta"] = dict(meta)
        if version:
            document["jsonapi"] = {"version": version}
        return document

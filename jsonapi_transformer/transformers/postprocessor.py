"""Final cleanup of an assembled document."""

from typing import Any

from jsonapi_transformer.utils.tree import flatten_values, strip_class_identifiers


def postprocess(document: dict[str, Any]) -> dict[str, Any]:
    """Flatten scalar wrappers and drop class identifiers. Idempotent."""
    return strip_class_identifiers(flatten_values(document))

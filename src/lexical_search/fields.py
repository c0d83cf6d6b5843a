"""
Field extraction and weighting for structured records.

Records are arbitrary nested mappings/lists. Extraction flattens them into
{field_path: string_value}; weighting turns those fields into one combined
text blob where important fields are repeated to bias term frequencies.

Path syntax:
    "title"            top-level key
    "user.profile"     nested mapping keys
    "tags[0]"          list index
    "users[1].name"    mixed
    "tags.0"           numeric segment on a list (same as tags[0])
"""

import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Records may come from foreign API payloads; nothing deeper is indexed
MAX_FIELD_DEPTH = 32

# Ordered (patterns, weight) rules, first match wins
FIELD_WEIGHT_RULES: Tuple[Tuple[Tuple[str, ...], float], ...] = (
    (("id", "key"), 1.8),
    (("title", "name"), 1.5),
    (("label", "tag"), 1.3),
    (("description", "summary"), 1.2),
)
DEFAULT_FIELD_WEIGHT = 1.0

_SEGMENT = re.compile(r"^([^\[\]]*)((?:\[\d+\])*)$")
_INDEX = re.compile(r"\[(\d+)\]")

_MISSING = object()


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _parse_path(path: str) -> List[Any]:
    """Split a field path into mapping keys (str) and list indices (int)."""
    steps: List[Any] = []
    for segment in path.split("."):
        match = _SEGMENT.match(segment)
        if not match:
            # Malformed brackets: treat the whole segment as a literal key
            steps.append(segment)
            continue
        key, indices = match.groups()
        if key:
            steps.append(key)
        steps.extend(int(i) for i in _INDEX.findall(indices))
    return steps


def resolve_path(record: Any, path: str, default: Any = None) -> Any:
    """
    Resolve a field path against a record.

    Returns `default` when any step is missing or the shape does not fit.
    """
    current = record
    for step in _parse_path(path):
        if isinstance(step, int) or (isinstance(step, str) and step.isdigit() and _is_list(current)):
            if not _is_list(current):
                return default
            position = int(step)
            if position >= len(current):
                return default
            current = current[position]
        elif isinstance(current, Mapping) and step in current:
            current = current[step]
        else:
            return default
    return current


def _walk(value: Any, prefix: str, depth: int, seen: set, result: Dict[str, str]) -> None:
    if isinstance(value, str):
        result[prefix] = value
        return

    if not isinstance(value, Mapping) and not _is_list(value):
        # Numbers, booleans, None: no contribution
        return

    if depth >= MAX_FIELD_DEPTH:
        logger.debug(f"Field depth limit reached at '{prefix}', skipping subtree")
        return

    marker = id(value)
    if marker in seen:
        return
    seen.add(marker)

    if isinstance(value, Mapping):
        for key, child in value.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            _walk(child, path, depth + 1, seen, result)
    else:
        for position, child in enumerate(value):
            _walk(child, f"{prefix}[{position}]", depth + 1, seen, result)


def extract_fields(record: Any, fields: Optional[Iterable[str]] = None) -> Dict[str, str]:
    """
    Extract searchable string fields from a record.

    Args:
        record: Mapping (possibly nested, possibly cyclic)
        fields: Field paths to restrict extraction to. When empty or None,
            every string leaf of the record is extracted.

    Returns:
        Dict {field_path: string_value} in traversal order

    Example:
        >>> extract_fields({"title": "Doc", "meta": {"tags": ["a", "b"]}, "n": 3})
        {'title': 'Doc', 'meta.tags[0]': 'a', 'meta.tags[1]': 'b'}
    """
    result: Dict[str, str] = {}

    if fields:
        for path in fields:
            value = resolve_path(record, path, _MISSING)
            if isinstance(value, str):
                result[path] = value
        return result

    _walk(record, "", 0, set(), result)
    return result


def _leaf_key(path: str) -> str:
    return _INDEX.sub("", path).rsplit(".", 1)[-1]


def field_weight(path: str, boost: Optional[Mapping] = None) -> float:
    """
    Relevance multiplier for a field path.

    Caller boosts win over the rule table: an exact path match first, then the
    last key of the path. Matching is case-insensitive.
    """
    lowered = path.lower()

    if boost:
        boosts = {str(name).lower(): float(weight) for name, weight in boost.items()}
        if lowered in boosts:
            return boosts[lowered]
        leaf = _leaf_key(lowered)
        if leaf in boosts:
            return boosts[leaf]

    for patterns, weight in FIELD_WEIGHT_RULES:
        if any(pattern in lowered for pattern in patterns):
            return weight

    return DEFAULT_FIELD_WEIGHT


def combine_fields(fields: Mapping, boost: Optional[Mapping] = None) -> str:
    """
    Build the combined document text, repeating each field floor(weight) times.

    Example:
        >>> combine_fields({"title": "Guide", "body": "text"}, boost={"title": 2})
        'Guide Guide text'
    """
    parts: List[str] = []
    for path, value in fields.items():
        repetitions = max(1, math.floor(field_weight(path, boost)))
        parts.extend([value] * repetitions)
    return " ".join(parts)

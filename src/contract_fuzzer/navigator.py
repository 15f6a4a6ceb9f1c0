"""Path-addressable access to JSON-like documents.

Fuzzer strategies use these helpers to read, replace or delete a single field
inside a request payload. A document is either an already parsed tree
(``dict``/``list``/primitives) or its JSON text. Mutations never touch the
input: they return a new document in the same form they were given, sharing
every subtree that was not on the mutated path.

Paths are sequences of segments (field names or array indexes). Their flat
string form joins segments with ``#``, e.g. ``order#items#0#sku``. Field names
that themselves contain ``#`` cannot be expressed in the flat form; pass a
segment list instead.

A path that does not resolve is never an error. Every operation reports it
through a ``found`` flag and leaves the decision to the caller.
"""

import json
import logging
import re
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

SEPARATOR = "#"

Segment = Union[str, int]
Path = Union[str, Sequence[Segment]]

_MISSING = object()
_FIELD_PATH_TOKEN = re.compile(r"([^.\[\]]+)|\[(\d+)\]")


def parse_path(path: Path) -> List[Segment]:
    """Split a ``#``-joined path into segments. Sequences are copied as-is."""
    if isinstance(path, str):
        if not path:
            return []
        return path.split(SEPARATOR)
    return list(path)


def join_path(segments: Sequence[Segment]) -> str:
    """Render segments in the flat ``#``-joined form."""
    return SEPARATOR.join(str(segment) for segment in segments)


def split_field_path(field_path: str) -> List[Segment]:
    """Turn a listing path such as ``order.items[0].sku`` into segments."""
    return [
        int(index) if index else name
        for name, index in _FIELD_PATH_TOKEN.findall(field_path)
    ]


def is_valid_json(text: Optional[str]) -> bool:
    """Check whether the given text parses as JSON."""
    if text is None:
        return False
    try:
        json.loads(text)
    except ValueError:
        return False
    return True


def is_empty_payload(payload: Optional[str]) -> bool:
    """Check if the payload is missing, blank, ``{}`` or a quoted ``"{}"``."""
    if payload is None or not payload.strip():
        return True
    return payload.strip() in ("{}", '"{}"')


def _load(document: Any) -> Tuple[Any, bool]:
    if isinstance(document, (str, bytes, bytearray)):
        try:
            return json.loads(document), True
        except ValueError:
            logger.debug("Document is not valid JSON, treating every path as not found")
            return _MISSING, True
    return document, False


def _dump(tree: Any) -> str:
    return json.dumps(tree, separators=(",", ":"), ensure_ascii=False)


def _as_key(segment: Segment) -> str:
    return segment if isinstance(segment, str) else str(segment)


def _as_index(segment: Segment, size: int) -> Optional[int]:
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        index = segment
    elif isinstance(segment, str) and segment.isascii() and segment.isdigit():
        index = int(segment)
    else:
        return None
    return index if 0 <= index < size else None


def _step(node: Any, segment: Segment) -> Any:
    if isinstance(node, dict):
        return node.get(_as_key(segment), _MISSING)
    if isinstance(node, list):
        index = _as_index(segment, len(node))
        return _MISSING if index is None else node[index]
    return _MISSING


def _resolve(tree: Any, segments: Sequence[Segment]) -> Any:
    node = tree
    for segment in segments:
        node = _step(node, segment)
        if node is _MISSING:
            logger.debug("Path %s not found", join_path(segments))
            return _MISSING
    return node


def _replaced(node: Any, segments: Sequence[Segment], value: Any) -> Tuple[Any, Any]:
    """Copy-on-write substitution. Returns the new node and the value it displaced."""
    if not segments:
        return value, node

    head, rest = segments[0], segments[1:]
    child = _step(node, head)
    if child is _MISSING:
        return _MISSING, None

    new_child, previous = _replaced(child, rest, value)
    if new_child is _MISSING:
        return _MISSING, None

    if isinstance(node, dict):
        copy = dict(node)
        copy[_as_key(head)] = new_child
    else:
        copy = list(node)
        copy[_as_index(head, len(node))] = new_child
    return copy, previous


def get(document: Any, path: Path) -> Tuple[Any, bool]:
    """Read the node at ``path``.

    Args:
        document: Parsed tree or JSON text
        path: ``#``-joined string or segment sequence; empty means the root

    Returns:
        Tuple of (node, found). ``node`` is None when not found
    """
    tree, _ = _load(document)
    if tree is _MISSING:
        return None, False
    node = _resolve(tree, parse_path(path))
    if node is _MISSING:
        return None, False
    return node, True


def replace(document: Any, path: Path, value: Any) -> Tuple[Any, Any, bool]:
    """Substitute the node at ``path`` with ``value``.

    Args:
        document: Parsed tree or JSON text
        path: Location of the node to substitute
        value: The new node

    Returns:
        Tuple of (new document, replaced value, found). When the path does
        not resolve the original document is returned untouched
    """
    tree, from_text = _load(document)
    if tree is _MISSING:
        return document, None, False

    new_tree, previous = _replaced(tree, parse_path(path), value)
    if new_tree is _MISSING:
        return document, None, False
    return (_dump(new_tree) if from_text else new_tree), previous, True


def delete(document: Any, path: Path) -> Tuple[Any, bool]:
    """Remove the object field at ``path``.

    Array elements are never removed; targeting one reports not found.
    """
    tree, from_text = _load(document)
    segments = parse_path(path)
    if tree is _MISSING or not segments:
        return document, False

    parent = _resolve(tree, segments[:-1])
    key = _as_key(segments[-1])
    if not isinstance(parent, dict) or key not in parent:
        return document, False

    new_parent = {name: child for name, child in parent.items() if name != key}
    new_tree, _ = _replaced(tree, segments[:-1], new_parent)
    return (_dump(new_tree) if from_text else new_tree), True


def add_field(document: Any, parent_path: Path, key: str, value: Any) -> Tuple[Any, bool]:
    """Add (or overwrite) ``key`` inside the object at ``parent_path``."""
    parent, found = get(document, parent_path)
    if not found or not isinstance(parent, dict):
        return document, False

    new_parent = dict(parent)
    new_parent[key] = value
    new_document, _, _ = replace(document, parent_path, new_parent)
    return new_document, True


def rename_field(document: Any, path: Path, new_key: str) -> Tuple[Any, bool]:
    """Move the field at ``path`` under ``new_key``, keeping its position and value."""
    segments = parse_path(path)
    if not segments:
        return document, False

    parent, found = get(document, segments[:-1])
    old_key = _as_key(segments[-1])
    if not found or not isinstance(parent, dict) or old_key not in parent:
        return document, False

    new_parent = {
        (new_key if name == old_key else name): child for name, child in parent.items()
    }
    new_document, _, _ = replace(document, segments[:-1], new_parent)
    return new_document, True


def is_field_present(document: Any, path: Path) -> bool:
    return get(document, path)[1]


def is_primitive(document: Any, path: Path) -> bool:
    """True if the node at ``path`` is a string, number, boolean or null."""
    node, found = get(document, path)
    return found and not isinstance(node, (dict, list))


def is_object(document: Any, path: Path) -> bool:
    node, found = get(document, path)
    return found and isinstance(node, dict)


def is_array(document: Any, path: Path) -> bool:
    node, found = get(document, path)
    return found and isinstance(node, list)


def list_field_paths(document: Any) -> Iterator[str]:
    """Yield every field path in the document, e.g. ``order``, ``order.items[0].sku``.

    Object fields are dot-joined and array elements are indexed. The result
    is a generator: it is consumed once and parses text documents lazily.
    """
    tree, _ = _load(document)
    if tree is _MISSING:
        return
    yield from _walk(tree, "")


def _walk(node: Any, prefix: str) -> Iterator[str]:
    if isinstance(node, dict):
        for key, child in node.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            yield name
            yield from _walk(child, name)
    elif isinstance(node, list):
        for index, child in enumerate(node):
            yield from _walk(child, f"{prefix}[{index}]")

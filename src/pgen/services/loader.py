"""Loading schema documents from YAML files.

Python dicts keep insertion order, so PyYAML's safe loader already preserves
declaration order. The loader below additionally rejects duplicate keys, which
PyYAML would otherwise resolve silently by keeping the last one.
"""

from collections.abc import Hashable
from pathlib import Path
from typing import Any

import structlog
import yaml

from pgen.errors import DocumentLoadError

MERGE_TAG = "tag:yaml.org,2002:merge"


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that fails on a key repeated within one mapping."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _ in node.value:
            if key_node.tag == MERGE_TAG:
                continue
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key '{key}'",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def parse_document(text: str) -> dict[str, Any]:
    """Decode YAML text into an ordered schema document.

    Raises:
        DocumentLoadError: If the text is not valid YAML or not a mapping.
    """
    try:
        document = yaml.load(text, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise DocumentLoadError(f"error: invalid model: {_one_line(str(exc))}") from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise DocumentLoadError("error: model should be a mapping of enumerations and tables")
    return document


def load_document(path: Path | str, logger: structlog.stdlib.BoundLogger | None = None) -> dict[str, Any]:
    """Read and decode the schema document at ``path``.

    Raises:
        DocumentLoadError: If the file is missing, is a directory, cannot be read
            or does not decode to a mapping.
    """
    logger = logger or structlog.get_logger(__name__)
    path = Path(path)

    if not path.exists():
        raise DocumentLoadError("error: model not found")
    if path.is_dir():
        raise DocumentLoadError("error: model should be a YAML file")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(f"unknown error: {exc}") from exc

    document = parse_document(text)
    logger.debug("document_loaded", path=str(path), entry_count=len(document))
    return document


def _one_line(message: str) -> str:
    return " ".join(message.split())

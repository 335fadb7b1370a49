"""
Translation catalog loading and cleanup

A catalog is either one JSON file or a directory of JSON files. It is
flattened into ``{key: leaf value}`` where nested objects join with ``.`` and
array items are addressed as ``[i]``.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Set, Union

from keyhunt.core.exceptions import (
    CatalogNotFoundError, EmptyCatalogError, CatalogParseError, CatalogWriteError
)
from keyhunt.core.hunt_logging import get_logger, log_catalog_event

logger = get_logger(__name__)

PathLike = Union[str, Path]


def list_catalog_files(path: PathLike) -> List[Path]:
    """
    Return the JSON files that make up a catalog path

    A directory contributes every ``*.json`` directly inside it, sorted by
    name so the merge order is stable.
    """
    path = Path(path)

    if path.is_dir():
        files = sorted(p for p in path.iterdir() if p.is_file() and p.suffix == ".json")
        if not files:
            raise EmptyCatalogError(path)
        return files
    if path.is_file():
        return [path]
    raise CatalogNotFoundError(path)


def load_translations(path: PathLike) -> Dict[str, Any]:
    """
    Load and flatten a catalog

    Later files override keys defined by earlier ones.
    """
    translations: Dict[str, Any] = {}
    files = list_catalog_files(path)

    for catalog_file in files:
        translations.update(load_translation_file(catalog_file))

    log_catalog_event('catalog_loaded', path=str(path), files=len(files), keys=len(translations))
    return translations


def _read_json(file_path: Path) -> Any:
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CatalogParseError(file_path, e) from e


def load_translation_file(file_path: PathLike) -> Dict[str, Any]:
    """Load and flatten a single JSON file"""
    file_path = Path(file_path)
    flat = flatten_json(_read_json(file_path))
    logger.debug('catalog_file_loaded', path=str(file_path), keys=len(flat))
    return flat


def flatten_json(value: Any, prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested JSON into path keys

    >>> flatten_json({"user": {"name": "A"}, "items": ["x"]})
    {'user.name': 'A', 'items[0]': 'x'}
    """
    result: Dict[str, Any] = {}

    if isinstance(value, dict):
        for key, val in value.items():
            new_prefix = f"{prefix}.{key}" if prefix else str(key)
            result.update(flatten_json(val, new_prefix))
    elif isinstance(value, list):
        for i, val in enumerate(value):
            result.update(flatten_json(val, f"{prefix}[{i}]"))
    else:
        # str, int, float, bool and None are leaves
        result[prefix] = value

    return result


def used_ancestors(used_keys: Iterable[str]) -> Set[str]:
    """Every branch path that has at least one used key below it"""
    ancestors: Set[str] = set()
    for key in used_keys:
        for i, ch in enumerate(key):
            if i and ch in ".[":
                ancestors.add(key[:i])
    return ancestors


def remove_keys_from_value(value: Any, unused_keys: Iterable[str], used_keys: Set[str]) -> Any:
    """
    Return a copy of ``value`` without the unused keys

    Object members are dropped when unused, or when they were a branch that
    ends up empty. Array slots are kept as they are so the indices of the
    surviving keys do not shift.
    """
    unused_set = set(unused_keys)
    keep = set(used_keys) | used_ancestors(used_keys)

    def clean(node: Any, prefix: str) -> Any:
        if isinstance(node, dict):
            cleaned = {}
            for key, val in node.items():
                current_path = f"{prefix}.{key}" if prefix else str(key)
                cleaned_val = clean(val, current_path)

                if current_path not in keep and current_path in unused_set:
                    continue
                if isinstance(val, dict) and val and not cleaned_val:
                    continue
                cleaned[key] = cleaned_val
            return cleaned

        if isinstance(node, list):
            return [clean(item, f"{prefix}[{i}]") for i, item in enumerate(node)]

        return node

    return clean(value, "")


def remove_unused_from_file(file_path: PathLike, unused_keys: Iterable[str], used_keys: Set[str]) -> None:
    """Rewrite one catalog file without its unused keys"""
    file_path = Path(file_path)
    cleaned = remove_keys_from_value(_read_json(file_path), unused_keys, used_keys)

    try:
        file_path.write_text(json.dumps(cleaned, ensure_ascii=False, indent=2) + "\n", encoding='utf-8')
    except OSError as e:
        raise CatalogWriteError(file_path, e) from e

    log_catalog_event('catalog_file_cleaned', path=str(file_path))


def remove_unused_keys(translation_path: PathLike, unused_keys: Iterable[str], used_keys: Set[str]) -> List[Path]:
    """
    Remove unused keys from every file of a catalog

    Returns the files that were rewritten.
    """
    unused_keys = list(unused_keys)
    files = list_catalog_files(translation_path)

    for catalog_file in files:
        remove_unused_from_file(catalog_file, unused_keys, used_keys)

    return files

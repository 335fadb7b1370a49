"""
Prefix extraction and matcher compilation

Every catalog key gets an exact matcher (the key as a whole word). Every base
prefix, the part of a key before its last ``.``, gets a dynamic matcher that
spots keys built at runtime such as ``t(`status.${value}`)``.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Set

from keyhunt.core.hunt_logging import get_logger

logger = get_logger(__name__)

PATH_SEPARATOR = "."

# Leading context (quote, backtick, "Namespace:") is not anchored on purpose
DYNAMIC_SUFFIX = r"\.\$\{[^}]+\}"


@dataclass(frozen=True)
class Matcher:
    """A compiled pattern bound to one key or one prefix"""
    target: str
    pattern: re.Pattern

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def base_prefix(key: str) -> Optional[str]:
    """``a.b.c`` -> ``a.b``; None when the key has no separator"""
    head, sep, _ = key.rpartition(PATH_SEPARATOR)
    return head if sep else None


def extract_base_prefixes(keys: Iterable[str]) -> Dict[str, Set[str]]:
    """
    Group keys by base prefix

    ``["status.open", "status.closed", "title"]`` gives
    ``{"status": {"status.open", "status.closed"}}``; ``title`` has no prefix.
    """
    prefix_map: Dict[str, Set[str]] = {}
    for key in keys:
        prefix = base_prefix(key)
        if prefix is not None:
            prefix_map.setdefault(prefix, set()).add(key)
    return prefix_map


def exact_pattern(key: str) -> str:
    return r"\b" + re.escape(key) + r"\b"


def dynamic_pattern(prefix: str) -> str:
    return re.escape(prefix) + DYNAMIC_SUFFIX


def _compile(targets: Iterable[str], build, kind: str) -> List[Matcher]:
    matchers: List[Matcher] = []
    for target in targets:
        try:
            matchers.append(Matcher(target, re.compile(build(target))))
        except re.error as e:
            # The target is simply never detected through this matcher
            logger.debug('matcher_skipped', kind=kind, target=target, error=str(e))
    return matchers


def compile_exact_matchers(keys: Iterable[str]) -> List[Matcher]:
    """One word-bounded literal matcher per key"""
    return _compile(keys, exact_pattern, "exact")


def compile_dynamic_matchers(prefixes: Mapping[str, Set[str]]) -> List[Matcher]:
    """One ``<prefix>.${...}`` matcher per prefix"""
    return _compile(prefixes.keys(), dynamic_pattern, "dynamic")

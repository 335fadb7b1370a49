"""
Single-pass usage scan

Each source file is read once. Exact matchers run first, then dynamic
matchers for the prefixes that are still open. A prefix stops costing regex
work as soon as all of its keys were found literally ("complete") or one
dynamic use was found; neither state is ever reverted.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set

from keyhunt.core.hunt_logging import get_logger, log_file_event, log_scan_event
from keyhunt.core.matchers import (
    Matcher, extract_base_prefixes, compile_exact_matchers, compile_dynamic_matchers
)

logger = get_logger(__name__)

# progress(index, total, path), index starts at 1
ProgressCallback = Callable[[int, int, str], None]


@dataclass
class UsageState:
    """Mutable results of one scan"""
    used_keys: Set[str] = field(default_factory=set)
    dynamic_prefixes: Set[str] = field(default_factory=set)
    complete_prefixes: Set[str] = field(default_factory=set)

    def is_resolved(self, prefix: str) -> bool:
        return prefix in self.dynamic_prefixes or prefix in self.complete_prefixes


def read_source_file(path: str) -> Optional[str]:
    """File content as text, or None when it cannot be read as UTF-8"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        log_file_event('file_skipped', path, error=str(e))
        return None


def assemble_usage_result(state: UsageState, prefixes: Mapping[str, Set[str]]) -> Set[str]:
    """Literal hits plus every key below a dynamically used prefix"""
    used = set(state.used_keys)
    for prefix in state.dynamic_prefixes:
        used.update(prefixes.get(prefix, ()))
    return used


class ScanEngine:
    """Applies compiled matchers to a sequence of files"""

    def __init__(self, exact_matchers: Iterable[Matcher], dynamic_matchers: Iterable[Matcher],
                 prefixes: Mapping[str, Set[str]]):
        self.exact_matchers: List[Matcher] = list(exact_matchers)
        self.dynamic_matchers: List[Matcher] = list(dynamic_matchers)
        self.prefixes = prefixes
        self.key_to_prefix: Dict[str, str] = {
            key: prefix for prefix, keys in prefixes.items() for key in keys
        }

    def scan_state(self, files: Iterable[str], progress: Optional[ProgressCallback] = None) -> UsageState:
        """Run the scan and return the raw state"""
        state = UsageState()
        # Keys of each prefix not found literally yet; 0 means complete
        remaining = {prefix: len(keys) for prefix, keys in self.prefixes.items()}

        files = list(files)
        total = len(files)
        for index, path in enumerate(files, 1):
            if progress is not None:
                progress(index, total, path)

            content = read_source_file(path)
            if content is None:
                continue

            self._match_exact(content, state, remaining)
            self._match_dynamic(content, state, remaining)

        return state

    def scan(self, files: Iterable[str], progress: Optional[ProgressCallback] = None) -> Set[str]:
        """Run the scan and return the used keys"""
        return assemble_usage_result(self.scan_state(files, progress), self.prefixes)

    def _match_exact(self, content: str, state: UsageState, remaining: Dict[str, int]) -> None:
        for matcher in self.exact_matchers:
            key = matcher.target
            if key in state.used_keys:
                continue

            prefix = self.key_to_prefix.get(key)
            # All keys of a dynamically used prefix are added at the end
            if prefix is not None and prefix in state.dynamic_prefixes:
                continue

            if not matcher.matches(content):
                continue

            state.used_keys.add(key)
            if prefix is not None:
                remaining[prefix] -= 1
                if remaining[prefix] == 0:
                    state.complete_prefixes.add(prefix)
                    logger.debug('prefix_complete', prefix=prefix)

    def _match_dynamic(self, content: str, state: UsageState, remaining: Dict[str, int]) -> None:
        for matcher in self.dynamic_matchers:
            prefix = matcher.target
            if state.is_resolved(prefix):
                continue

            if remaining.get(prefix) == 0:
                state.complete_prefixes.add(prefix)
                continue

            if matcher.matches(content):
                state.dynamic_prefixes.add(prefix)
                logger.debug('prefix_dynamic', prefix=prefix)


def find_used_keys(exact_matchers: Iterable[Matcher], dynamic_matchers: Iterable[Matcher],
                   prefixes: Mapping[str, Set[str]], files: Iterable[str],
                   progress: Optional[ProgressCallback] = None) -> Set[str]:
    """Scan ``files`` once with both matcher families"""
    return ScanEngine(exact_matchers, dynamic_matchers, prefixes).scan(files, progress)


def check_translation_usage(translations: Mapping[str, Any], files: Iterable[str],
                            progress: Optional[ProgressCallback] = None) -> Set[str]:
    """
    Find which catalog keys are referenced by the given source files

    Args:
        translations: Flattened catalog, only the keys matter
        files: Ordered source file paths
        progress: Optional per-file callback

    Returns:
        Used keys, always a subset of ``translations``
    """
    start = time.perf_counter()
    keys = list(translations.keys())
    files = list(files)

    prefixes = extract_base_prefixes(keys)
    exact_matchers = compile_exact_matchers(keys)
    dynamic_matchers = compile_dynamic_matchers(prefixes)
    logger.debug('matchers_compiled', exact=len(exact_matchers), dynamic=len(dynamic_matchers))

    log_scan_event('scan_started', files=len(files), keys=len(keys), prefixes=len(prefixes))
    used_keys = find_used_keys(exact_matchers, dynamic_matchers, prefixes, files, progress)
    log_scan_event('scan_finished', used=len(used_keys),
                   seconds=round(time.perf_counter() - start, 3))

    return used_keys

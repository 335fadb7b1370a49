"""Ignore rules for source discovery.

Patterns use gitignore semantics via `pathspec`: a bare name such as
``node_modules`` matches that directory or file at any depth, and ``*.test.ts``
matches by file name anywhere below the scanned directory.
"""

from dataclasses import dataclass
from pathlib import PurePath
from typing import List, Optional, Tuple, Union

import pathspec


# Build output, dependencies, tooling state and test code
DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = (
    "node_modules",
    ".git",
    "dist",
    "build",
    "target",
    ".next",
    ".nuxt",
    ".cache",
    "coverage",
    ".idea",
    ".vscode",
    ".DS_Store",
    "*.log",
    # Test directories
    "__tests__",
    "tests",
    "test",
    # Test files
    "*.test.js",
    "*.test.jsx",
    "*.test.ts",
    "*.test.tsx",
    "*.spec.js",
    "*.spec.jsx",
    "*.spec.ts",
    "*.spec.tsx",
    "*.snap",
)


@dataclass(frozen=True)
class IgnorePatterns:
    spec: pathspec.GitIgnoreSpec

    def should_ignore(self, rel_path: Union[str, PurePath], is_dir: bool = False) -> bool:
        """Check a path relative to the directory being scanned."""
        posix = PurePath(rel_path).as_posix()
        # Directory-only patterns ("build/") need the trailing slash to match.
        if is_dir and not posix.endswith("/"):
            posix += "/"
        return self.spec.match_file(posix)


def load_ignore_patterns(extra_patterns: Optional[List[str]] = None) -> IgnorePatterns:
    """Defaults plus optional extra patterns (later patterns win, `!x` re-includes)."""

    patterns: List[str] = list(DEFAULT_IGNORE_PATTERNS)
    if extra_patterns:
        patterns.extend(extra_patterns)

    spec = pathspec.GitIgnoreSpec.from_lines(patterns)
    return IgnorePatterns(spec=spec)

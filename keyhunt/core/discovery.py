"""
Source file discovery

Produces the ordered list of files the scanner reads. Ignored directories are
pruned during the walk so their contents are never visited.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional

from keyhunt.config.settings import settings
from keyhunt.core.exceptions import ConfigurationError
from keyhunt.core.hunt_logging import get_logger
from keyhunt.core.ignore import IgnorePatterns, load_ignore_patterns

logger = get_logger(__name__)


def validate_source_dirs(source_dirs: Optional[Iterable[str]]) -> List[str]:
    """Drop empty entries; no directories means the current directory"""
    valid_dirs = [d for d in (source_dirs or []) if d]
    return valid_dirs or ["."]


def _has_extension(file_name: str, extensions: Iterable[str]) -> bool:
    return Path(file_name).suffix[1:].lower() in extensions


def iter_source_files(root: Path, ignore: IgnorePatterns, extensions: set,
                      follow_links: bool = False) -> Iterable[Path]:
    """Yield matching files below ``root`` in sorted walk order"""

    def on_error(err: OSError):
        logger.debug('walk_error', path=getattr(err, 'filename', None), error=str(err))

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=follow_links):
        current = Path(dirpath)
        rel_dir = current.relative_to(root)

        # Filter directories in-place
        dirnames[:] = sorted(
            d for d in dirnames
            if not ignore.should_ignore(rel_dir / d, is_dir=True)
        )

        for fn in sorted(filenames):
            if not _has_extension(fn, extensions):
                continue
            if ignore.should_ignore(rel_dir / fn):
                continue
            p = current / fn
            if not follow_links and p.is_symlink():
                continue
            yield p


def discover_source_files(source_dirs: Iterable[str], ignore: Optional[IgnorePatterns] = None,
                          extensions: Optional[Iterable[str]] = None,
                          follow_links: Optional[bool] = None) -> List[str]:
    """
    Collect candidate source files from every directory

    Args:
        source_dirs: Directories to walk, in order
        ignore: Ignore rules (defaults plus settings.extra_ignore_patterns)
        extensions: Extensions without the dot (default settings.source_extensions)
        follow_links: Follow symlinked directories and files

    Returns:
        File paths as strings; a directory that does not exist is skipped
    """
    if ignore is None:
        ignore = load_ignore_patterns(settings.extra_ignore_patterns)
    if extensions is None:
        extensions = settings.source_extensions
    if follow_links is None:
        follow_links = settings.follow_links
    extensions = {ext.strip().lstrip(".").lower() for ext in extensions} - {""}
    if not extensions:
        raise ConfigurationError("No source file extensions configured")
    source_dirs = list(source_dirs)

    all_files: List[str] = []
    for source_dir in source_dirs:
        root = Path(source_dir)
        if not root.is_dir():
            logger.warning('source_dir_missing', path=source_dir)
            continue
        all_files.extend(str(p) for p in iter_source_files(root, ignore, extensions, follow_links))

    logger.info('files_discovered', count=len(all_files), dirs=len(source_dirs))
    return all_files

"""
Console output for hunt results

Results go to stdout, errors to stderr.
"""

import sys
from typing import Sequence, TextIO, Optional

from keyhunt.models.schemas import HuntStats

NO_UNUSED = "✓ No unused translation keys found!"


def _out(stream: Optional[TextIO]) -> TextIO:
    return stream if stream is not None else sys.stdout


def _count_line(count: int) -> str:
    return f"⚠️ {count} unused translation keys"


def _removed_line(count: int) -> str:
    return f"✓ {count} unused translation keys removed from translation files"


def print_results(unused_keys: Sequence[str], stats: HuntStats, show_stats: bool = False,
                  show_keys: bool = False, stream: Optional[TextIO] = None):
    """Report mode: count only, or the key list and/or statistics"""
    out = _out(stream)

    if not show_stats and not show_keys:
        print(NO_UNUSED if not unused_keys else _count_line(len(unused_keys)), file=out)
        return

    if show_keys:
        print_unused_keys(unused_keys, stream=out)
        if show_stats:
            print(file=out)

    if show_stats:
        print_stats(stats, stream=out)


def print_unused_keys(unused_keys: Sequence[str], stream: Optional[TextIO] = None):
    out = _out(stream)
    if not unused_keys:
        return

    for key in unused_keys:
        print(f"- {key}", file=out)

    print(f"\n{_count_line(len(unused_keys))}\n", file=out)


def print_stats(stats: HuntStats, cleared: bool = False, stream: Optional[TextIO] = None):
    out = _out(stream)
    print(f"Files scanned: {stats.files_total}", file=out)
    print(f"Keys checked: {stats.keys_total}", file=out)
    print(f"Time spent: {stats.formatted_duration()}", file=out)

    # After a clear the unused count is already in the headline
    if not cleared:
        print(f"Keys not used: {stats.unused_keys_count}", file=out)


def print_cleared_results(unused_keys: Sequence[str], stats: HuntStats, show_stats: bool = False,
                          stream: Optional[TextIO] = None):
    """Clear mode: how many keys were removed, then optional statistics"""
    out = _out(stream)
    print(NO_UNUSED if not unused_keys else _removed_line(len(unused_keys)), file=out)

    if show_stats:
        print(file=out)
        print_stats(stats, cleared=True, stream=out)


def print_validate_results(unused_keys: Sequence[str], stream: Optional[TextIO] = None):
    """Minimal output for pre-commit hooks"""
    out = _out(stream)
    if not unused_keys:
        print(NO_UNUSED, file=out)
    else:
        print(f"✗ {len(unused_keys)} unused translation keys found", file=out)


def print_error(message: str, stream: Optional[TextIO] = None):
    print(f"Error: {message}", file=stream if stream is not None else sys.stderr)

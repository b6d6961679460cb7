"""Path normalization for configured report paths.

Report paths come from multi-valued properties and may be relative to the
module that declares them. Normalization is purely lexical: the filesystem is
never consulted, so a report that does not exist yet still normalizes.
"""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Iterable, List, Sequence, Tuple, Union

from dotnetreports.core.logging import get_logger

LOGGER = get_logger(__name__)

RawPath = Union[str, PurePath]


class InvalidPathError(ValueError):
    """A configured path is empty or escapes the filesystem root."""

    def __init__(self, raw_path: object, reason: str) -> None:
        super().__init__(f"Invalid report path {raw_path!r}: {reason}")
        self.raw_path = raw_path
        self.reason = reason


def normalize(raw_path: RawPath, base_path: RawPath) -> Path:
    """Resolve a raw path against a base directory and collapse dot segments.

    Args:
        raw_path: Relative or absolute path as written in the configuration.
        base_path: Directory relative paths are resolved against (module root).

    Returns:
        Absolute, lexically normalized path.

    Raises:
        InvalidPathError: If the path is empty or climbs above the root.
    """
    text = str(raw_path).strip() if raw_path is not None else ""
    if not text:
        raise InvalidPathError(raw_path, "path is empty")

    candidate = Path(text)
    if not candidate.is_absolute():
        base = Path(str(base_path).strip() or ".")
        if not base.is_absolute():
            base = Path.cwd() / base
        candidate = base / candidate

    anchor = candidate.anchor
    parts: List[str] = []
    for part in candidate.parts[1:] if anchor else candidate.parts:
        if part in ("", "."):
            continue
        if part == "..":
            if not parts:
                raise InvalidPathError(raw_path, "path escapes the filesystem root")
            parts.pop()
            continue
        parts.append(part)

    return Path(anchor, *parts)


def split_path_list(value: Union[None, str, Iterable[str], object]) -> List[str]:
    """Split a multi-valued property into trimmed, non-empty entries.

    Accepts a comma-separated string or a list of strings (each of which may
    itself be comma-separated). Other scalars, such as a YAML number, are
    read as their string form.
    """
    if value is None:
        return []
    if isinstance(value, str):
        chunks: Iterable[str] = [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        chunks = [str(item) for item in value if item is not None]
    else:
        chunks = [str(value)]

    entries: List[str] = []
    for chunk in chunks:
        for entry in chunk.split(","):
            entry = entry.strip()
            if entry:
                entries.append(entry)
    return entries


def normalize_all(
    raw_paths: Sequence[RawPath],
    base_path: RawPath,
) -> Tuple[List[Path], List[InvalidPathError]]:
    """Normalize a batch of paths, isolating failures per path.

    Returns:
        Tuple of (normalized paths in input order, rejected path errors).
    """
    valid: List[Path] = []
    rejected: List[InvalidPathError] = []
    for raw in raw_paths:
        try:
            valid.append(normalize(raw, base_path))
        except InvalidPathError as e:
            LOGGER.warning(f"Skipping report path: {e}")
            rejected.append(e)
    return valid, rejected

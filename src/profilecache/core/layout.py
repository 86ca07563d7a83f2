"""Artifact layout rules.

The same rule is applied to the working root and to every store root, so
relative artifact locations are directly comparable between them.
"""

from __future__ import annotations

from pathlib import PurePosixPath


# Number of leading identifier characters used as the shard directory
SHARD_PREFIX_LENGTH = 2


def locate(artifact_id: str) -> str:
    """Compute the relative location of an artifact from its identifier.

    Format: <first two characters>/<identifier>

    Args:
        artifact_id: Stable identifier of the artifact.

    Returns:
        POSIX-style relative path, e.g. "ab/ab12cd34".

    Raises:
        ValueError: If the identifier is empty or contains a path separator.

    Example:
        >>> locate("ab12cd34")
        'ab/ab12cd34'
    """
    if not artifact_id:
        raise ValueError("Artifact identifier cannot be empty")
    if "/" in artifact_id or "\\" in artifact_id or artifact_id in {".", ".."}:
        raise ValueError(f"Invalid artifact identifier: {artifact_id!r}")

    return f"{artifact_id[:SHARD_PREFIX_LENGTH]}/{artifact_id}"


def artifact_id_of(location: str) -> str:
    """Return the artifact identifier stored at a location.

    Example:
        >>> artifact_id_of("ab/ab12cd34")
        'ab12cd34'
    """
    return PurePosixPath(location).name

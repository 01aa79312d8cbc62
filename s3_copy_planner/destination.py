"""Destination key computation for the three addressing modes.

Flat copy
    No source root and no relative folder: the object lands directly under the
    destination folder and loses its original directory structure.
Root-mirrored
    A source root (explicit ``sourceRootFolderKey`` or the folder of a wildcard)
    is given: directories below that root are recreated under the destination.
Relative-placed
    A ``destinationRelativeFolderKey`` is given: as flat copy, but inside an
    extra caller chosen sub folder of the destination.
"""

from __future__ import annotations

import posixpath
from typing import Optional


def _folder_segments(*parts: str) -> list[str]:
    return [segment for part in parts for segment in part.split("/") if segment not in ("", ".")]


def compute_destination_key(
    source_key: str,
    source_wildcard_root: Optional[str] = None,
    destination_folder_key: Optional[str] = None,
    destination_relative_folder_key: Optional[str] = None,
) -> str:
    """Derive the full destination key of an object.

    Args:
        source_key: The key of a concrete source object
        source_wildcard_root: If present, the folder the object was found under;
            the path below it is kept
        destination_folder_key: The batch destination folder ("" or slash terminated)
        destination_relative_folder_key: A folder to add below the destination folder

    Returns:
        The destination key, never starting with a slash

    Raises:
        ValueError: If source_key is a folder marker (trailing slash) or does not
            name an object below source_wildcard_root
    """
    if source_key.endswith("/"):
        raise ValueError(
            f"Source key {source_key} cannot represent a folder (trailing slash) by the time "
            "it gets to destination name resolution - it must represent an actual object"
        )
    if posixpath.basename(source_key) in (".", ".."):
        raise ValueError(f"Source key {source_key} ends in a relative path segment and cannot name an object")
    destination_folder_key = destination_folder_key or ""
    destination_relative_folder_key = destination_relative_folder_key or ""

    if source_wildcard_root:
        relative_name = posixpath.relpath(source_key, source_wildcard_root)
    else:
        relative_name = posixpath.basename(source_key)

    if relative_name in ("", ".", "..") or relative_name.startswith("../"):
        raise ValueError(f"Source key {source_key} does not name an object that can be given a destination")

    # the object name itself is never collapsed, only the folders around it
    return "/".join(_folder_segments(destination_folder_key, destination_relative_folder_key) + [relative_name])

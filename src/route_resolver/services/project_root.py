"""Project root discovery."""

import os

from route_resolver.services.workspace import FileSystem


def find_project_root(
    file_path: str,
    fs: FileSystem,
    manifest_name: str = "package.json",
) -> str | None:
    """
    Walk up from a file's directory to the nearest one holding the manifest.

    The file's own directory is checked first. The filesystem root itself
    is never checked. Returns None when no ancestor below it has a manifest.
    """
    current = os.path.dirname(os.path.abspath(file_path))
    while True:
        parent = os.path.dirname(current)
        if parent == current:
            return None
        if fs.is_file(os.path.join(current, manifest_name)):
            return current
        current = parent

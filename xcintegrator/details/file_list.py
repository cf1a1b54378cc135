import logging

from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def file_list_contents(paths: List[str]) -> str:
    return "\n".join(paths)


# Write a .xcfilelist, leaving the file untouched when its contents already match.
# Returns whether the file was written.
def update_changed_file(path: Path, paths: List[str]) -> bool:
    path = Path(path)
    contents = file_list_contents(paths)
    if path.is_file() and path.read_text() == contents:
        logger.debug("file list %s is up to date", path)
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents)
    return True

# Input and output paths of script phases.
#
# Xcode exports every input and output path of a script phase to the environment of
# the script, so a phase with too many paths breaks `env`. Projects new enough to
# understand .xcfilelist files get the paths written to file lists instead, older
# ones get them inline up to MAX_INPUT_OUTPUT_PATHS.

import logging
import re

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from xcintegrator.details.as_iterator import unique
from xcintegrator.details.file_list import file_list_contents
from xcintegrator.integrator.mutations import Mutation, WriteFileList, plan_update
from xcintegrator.project.model import PBXShellScriptBuildPhase, XcodeProject

logger = logging.getLogger(__name__)

# Maximum number of input and output paths for a script phase
MAX_INPUT_OUTPUT_PATHS = 1000

# Minimum Xcode compatibility version understanding file lists
MIN_FILE_LIST_COMPATIBILITY_VERSION = (9, 3)

# Minimum object version understanding file lists, used when the compatibility
# version is missing or unparseable
MIN_FILE_LIST_OBJECT_VERSION = 50

_COMPATIBILITY_VERSION = re.compile(r"Xcode ([0-9]*\.[0-9]*)")


# Where the file list of one build configuration is written, and how the phase refers to it
@dataclass(frozen=True)
class FileListConfigKey:
    file_list_path: Path
    file_list_relative_path: str


PathsByConfig = Dict[FileListConfigKey, List[str]]


def _parse_version(version: str) -> Optional[Tuple[int, ...]]:
    parts = version.split(".")
    if not all(part.isdigit() for part in parts):
        return None
    return tuple(int(part) for part in parts)


def input_output_paths_use_filelist(project: XcodeProject) -> bool:
    version = None
    compatibility_version = project.root_object.compatibilityVersion
    if compatibility_version is not None:
        match = _COMPATIBILITY_VERSION.search(compatibility_version)
        if match:
            version = _parse_version(match.group(1))
    if version is None:
        return int(project.object_version) >= MIN_FILE_LIST_OBJECT_VERSION
    return version >= MIN_FILE_LIST_COMPATIBILITY_VERSION


def validate_input_output_path_limit(
    input_paths: List[str],
    output_paths: List[str],
    limit: int = MAX_INPUT_OUTPUT_PATHS,
) -> Tuple[List[str], List[str]]:
    # Both lists are dropped together, never truncated
    if len(input_paths) + len(output_paths) > limit:
        logger.warning(
            "%d input and output paths exceed the limit of %d, dropping them",
            len(input_paths) + len(output_paths),
            limit,
        )
        return [], []
    return input_paths, output_paths


def _file_list_is_current(path: Path, paths: List[str]) -> bool:
    path = Path(path)
    return path.is_file() and path.read_text() == file_list_contents(paths)


def plan_input_output_paths(
    project: XcodeProject,
    phase: PBXShellScriptBuildPhase,
    input_paths_by_config: PathsByConfig,
    output_paths_by_config: PathsByConfig,
    limit: int = MAX_INPUT_OUTPUT_PATHS,
) -> List[Mutation]:
    mutations: List[Mutation] = []
    if input_output_paths_use_filelist(project):
        for paths_by_config in (input_paths_by_config, output_paths_by_config):
            for key, paths in paths_by_config.items():
                if not _file_list_is_current(key.file_list_path, paths):
                    mutations.append(WriteFileList(key.file_list_path, list(paths)))
        desired = {
            "inputPaths": None,
            "outputPaths": None,
            "inputFileListPaths": unique(
                key.file_list_relative_path for key in input_paths_by_config
            ),
            "outputFileListPaths": unique(
                key.file_list_relative_path for key in output_paths_by_config
            ),
        }
    else:
        input_paths = unique(
            path for paths in input_paths_by_config.values() for path in paths
        )
        output_paths = unique(
            path for paths in output_paths_by_config.values() for path in paths
        )
        input_paths, output_paths = validate_input_output_path_limit(
            input_paths, output_paths, limit
        )
        desired = {
            "inputPaths": input_paths,
            "outputPaths": output_paths,
            "inputFileListPaths": None,
            "outputFileListPaths": None,
        }
    return mutations + plan_update(phase, desired)

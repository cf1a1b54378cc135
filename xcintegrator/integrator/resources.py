import os

from typing import Dict, List, Tuple

from xcintegrator.details.as_iterator import unique
from xcintegrator.details.targets import IntegrationTarget
from xcintegrator.integrator.mutations import Mutation, apply_mutations, plan_update
from xcintegrator.integrator.names import COPY_RESOURCES
from xcintegrator.integrator.paths import (
    MAX_INPUT_OUTPUT_PATHS,
    FileListConfigKey,
    PathsByConfig,
    plan_input_output_paths,
)
from xcintegrator.integrator.phases import (
    create_or_update_shell_script_build_phase,
    remove_script_phase_from_target,
)
from xcintegrator.project.model import FileType, PBXNativeTarget, XcodeProject

RESOURCES_FOLDER = "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}"


def resource_output_paths(resource_input_paths: List[str]) -> List[str]:
    output_paths = []
    for input_path in resource_input_paths:
        input_path = input_path.rstrip("/")
        extname = os.path.splitext(input_path)[1]
        # Every asset catalog is compiled into the single Assets.car
        basename = "Assets" if extname == ".xcassets" else os.path.basename(input_path)
        if extname and basename.endswith(extname):
            basename = basename[: -len(extname)]
        output_extension = FileType.output_extension_for_resource(extname)
        output_paths.append(f"{RESOURCES_FOLDER}/{basename}{output_extension}")
    return unique(output_paths)


def copy_resources_paths_by_config(
    target: IntegrationTarget,
) -> Tuple[PathsByConfig, PathsByConfig]:
    script_path = target.copy_resources_script_relative_path
    input_paths_by_config: Dict[FileListConfigKey, List[str]] = {}
    output_paths_by_config: Dict[FileListConfigKey, List[str]] = {}
    for config, resource_paths in target.resource_paths_by_config.items():
        input_key = FileListConfigKey(
            target.file_list_path("resources", config, "input"),
            target.file_list_relative_path("resources", "input"),
        )
        input_paths_by_config[input_key] = [script_path] + list(resource_paths)
        output_key = FileListConfigKey(
            target.file_list_path("resources", config, "output"),
            target.file_list_relative_path("resources", "output"),
        )
        output_paths_by_config[output_key] = resource_output_paths(resource_paths)
    return input_paths_by_config, output_paths_by_config


def create_or_update_copy_resources_script_phase(
    project: XcodeProject,
    native_target: PBXNativeTarget,
    script_path: str,
    input_paths_by_config: PathsByConfig,
    output_paths_by_config: PathsByConfig,
    limit: int = MAX_INPUT_OUTPUT_PATHS,
) -> List[Mutation]:
    phase, mutations = create_or_update_shell_script_build_phase(
        project, native_target, COPY_RESOURCES
    )
    mutations += apply_mutations(
        project,
        plan_update(phase, {"shellScript": f'"{script_path}"\n'})
        + plan_input_output_paths(
            project, phase, input_paths_by_config, output_paths_by_config, limit
        ),
    )
    return mutations


def remove_copy_resources_script_phase(
    project: XcodeProject, native_target: PBXNativeTarget
) -> List[Mutation]:
    return remove_script_phase_from_target(project, native_target, COPY_RESOURCES)

import os

from typing import Dict, List, Tuple

from xcintegrator.details.as_iterator import unique
from xcintegrator.details.targets import FrameworkPaths, IntegrationTarget, XCFramework
from xcintegrator.details.targets.script_phase import ExecutionPosition
from xcintegrator.integrator.mutations import Mutation, apply_mutations, plan_update
from xcintegrator.integrator.names import COPY_XCFRAMEWORKS, EMBED_FRAMEWORKS
from xcintegrator.integrator.ordering import reorder_script_phase
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
from xcintegrator.project.model import PBXNativeTarget, XcodeProject

# Native target kinds whose product bundle receives the embedded frameworks.
# Extensions are not listed, their frameworks are embedded in the host target.
EMBED_FRAMEWORK_TARGET_TYPES = (
    "application",
    "application_on_demand_install_capable",
    "unit_test_bundle",
    "ui_test_bundle",
    "watch2_extension",
    "messages_application",
)

# Native target kinds embedded in a host target that does the embedding
EMBED_FRAMEWORKS_IN_HOST_TARGET_TYPES = (
    "app_extension",
    "framework",
    "static_library",
    "messages_extension",
    "watch_extension",
    "xpc_service",
)

FRAMEWORKS_FOLDER = "${TARGET_BUILD_DIR}/${FRAMEWORKS_FOLDER_PATH}"


def embed_frameworks_input_paths(
    framework_paths: List[FrameworkPaths], xcframeworks: List[XCFramework]
) -> List[str]:
    input_paths = [paths.source_path for paths in framework_paths]
    # Static xcframework slices are never copied, only dynamic ones are inputs
    for xcframework in xcframeworks:
        if not xcframework.build_type.is_dynamic_framework:
            continue
        name = xcframework.name
        input_paths.append(f"{xcframework.intermediate_dir}/{name}.framework/{name}")
    return input_paths


def embed_frameworks_output_paths(
    framework_paths: List[FrameworkPaths], xcframeworks: List[XCFramework]
) -> List[str]:
    paths = unique(
        f"{FRAMEWORKS_FOLDER}/{os.path.basename(paths.source_path)}"
        for paths in framework_paths
    )
    xcframework_paths = [
        f"{FRAMEWORKS_FOLDER}/{xcframework.name}.framework"
        for xcframework in xcframeworks
        if xcframework.build_type.is_dynamic_framework
    ]
    return paths + xcframework_paths


def embed_frameworks_paths_by_config(
    target: IntegrationTarget,
) -> Tuple[PathsByConfig, PathsByConfig]:
    script_path = target.embed_frameworks_script_relative_path
    input_paths_by_config: Dict[FileListConfigKey, List[str]] = {}
    output_paths_by_config: Dict[FileListConfigKey, List[str]] = {}
    configs = sorted(
        set(target.framework_paths_by_config) | set(target.xcframeworks_by_config)
    )
    for config in configs:
        framework_paths = target.framework_paths_by_config.get(config, [])
        xcframeworks = target.xcframeworks_by_config.get(config, [])

        input_key = FileListConfigKey(
            target.file_list_path("frameworks", config, "input"),
            target.file_list_relative_path("frameworks", "input"),
        )
        input_paths_by_config[input_key] = [script_path] + embed_frameworks_input_paths(
            framework_paths, xcframeworks
        )
        output_key = FileListConfigKey(
            target.file_list_path("frameworks", config, "output"),
            target.file_list_relative_path("frameworks", "output"),
        )
        output_paths_by_config[output_key] = embed_frameworks_output_paths(
            framework_paths, xcframeworks
        )
    return input_paths_by_config, output_paths_by_config


def create_or_update_embed_frameworks_script_phase(
    project: XcodeProject,
    native_target: PBXNativeTarget,
    script_path: str,
    input_paths_by_config: PathsByConfig,
    output_paths_by_config: PathsByConfig,
    limit: int = MAX_INPUT_OUTPUT_PATHS,
) -> List[Mutation]:
    phase, mutations = create_or_update_shell_script_build_phase(
        project, native_target, EMBED_FRAMEWORKS
    )
    mutations += apply_mutations(
        project,
        plan_update(phase, {"shellScript": f'"{script_path}"\n'})
        + plan_input_output_paths(
            project, phase, input_paths_by_config, output_paths_by_config, limit
        ),
    )
    return mutations


def remove_embed_frameworks_script_phase(
    project: XcodeProject, native_target: PBXNativeTarget
) -> List[Mutation]:
    return remove_script_phase_from_target(project, native_target, EMBED_FRAMEWORKS)


def create_or_update_copy_xcframeworks_script_phase(
    project: XcodeProject,
    native_target: PBXNativeTarget,
    script_path: str,
    input_paths_by_config: PathsByConfig,
    output_paths_by_config: PathsByConfig,
    limit: int = MAX_INPUT_OUTPUT_PATHS,
) -> List[Mutation]:
    """Copy the matching xcframework slices to the intermediate build directory before compiling."""
    phase, mutations = create_or_update_shell_script_build_phase(
        project, native_target, COPY_XCFRAMEWORKS
    )
    mutations += apply_mutations(
        project,
        plan_update(phase, {"shellScript": f'"{script_path}"\n'})
        + plan_input_output_paths(
            project, phase, input_paths_by_config, output_paths_by_config, limit
        ),
    )
    mutations += reorder_script_phase(
        project, native_target, phase, ExecutionPosition.BEFORE_COMPILE
    )
    return mutations


def remove_copy_xcframeworks_script_phase(
    project: XcodeProject, native_target: PBXNativeTarget
) -> List[Mutation]:
    return remove_script_phase_from_target(project, native_target, COPY_XCFRAMEWORKS)


def native_targets_to_embed_in(target: IntegrationTarget) -> List[PBXNativeTarget]:
    if target.requires_host_target:
        return []
    return [
        native_target
        for native_target in target.user_targets
        if native_target.symbol_type in EMBED_FRAMEWORK_TARGET_TYPES
    ]

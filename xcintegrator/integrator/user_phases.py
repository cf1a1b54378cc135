from typing import List, Sequence

from xcintegrator.details.targets import ScriptPhaseSpec
from xcintegrator.integrator.mutations import (
    Mutation,
    RemoveBuildPhase,
    apply_mutations,
    plan_update,
)
from xcintegrator.integrator.names import (
    is_user_phase_name,
    strip_user_prefix,
    user_phase_name,
)
from xcintegrator.integrator.ordering import reorder_script_phase
from xcintegrator.integrator.phases import create_or_update_shell_script_build_phase
from xcintegrator.project.model import PBXNativeTarget, XcodeProject


def plan_obsolete_user_script_phases(
    project: XcodeProject,
    native_target: PBXNativeTarget,
    script_phases: Sequence[ScriptPhaseSpec],
) -> List[Mutation]:
    declared = {spec.name for spec in script_phases}
    return [
        RemoveBuildPhase(native_target.id, phase.id)
        for phase in project.shell_script_build_phases(native_target)
        if is_user_phase_name(phase.name)
        and strip_user_prefix(phase.name) not in declared
    ]


def user_script_phase_fields(spec: ScriptPhaseSpec) -> dict:
    fields = {
        "shellScript": spec.script,
        "shellPath": spec.shell_path or "/bin/sh",
        "inputPaths": spec.input_files,
        "outputPaths": spec.output_files,
        "inputFileListPaths": spec.input_file_lists,
        "outputFileListPaths": spec.output_file_lists,
        "dependencyFile": spec.dependency_file,
    }
    # Xcode leaves showEnvVarsInLog unset unless the user turned it off
    if spec.show_env_vars_in_log is False:
        fields["showEnvVarsInLog"] = "0"
    return fields


# Phases carrying the user prefix but no longer declared are deleted. Declared ones
# are created or updated in declaration order, then moved to their position.
def create_or_update_user_script_phases(
    project: XcodeProject,
    native_target: PBXNativeTarget,
    script_phases: Sequence[ScriptPhaseSpec],
) -> List[Mutation]:
    mutations = apply_mutations(
        project, plan_obsolete_user_script_phases(project, native_target, script_phases)
    )
    for spec in script_phases:
        phase, created = create_or_update_shell_script_build_phase(
            project, native_target, user_phase_name(spec.name), None
        )
        mutations += created
        mutations += apply_mutations(
            project, plan_update(phase, user_script_phase_fields(spec))
        )
        mutations += reorder_script_phase(
            project, native_target, phase, spec.execution_position
        )
    return mutations

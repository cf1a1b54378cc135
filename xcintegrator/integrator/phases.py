from typing import List, Optional, Tuple

from xcintegrator.integrator.mutations import (
    AddBuildPhase,
    Mutation,
    RemoveBuildPhase,
    RenameBuildPhase,
    apply_mutations,
)
from xcintegrator.integrator.names import PhaseName
from xcintegrator.project.model import (
    PBXNativeTarget,
    PBXShellScriptBuildPhase,
    XcodeProject,
)


# Phases named by the current spelling win over legacy spellings, which win over any
# other name ending with the stem
def find_script_phase(
    project: XcodeProject, native_target: PBXNativeTarget, name: PhaseName
) -> Optional[PBXShellScriptBuildPhase]:
    phases = [
        phase
        for phase in project.shell_script_build_phases(native_target)
        if name.matches(phase.name)
    ]
    for accept in (name.is_current, name.is_legacy):
        phase = next((p for p in phases if accept(p.name)), None)
        if phase is not None:
            return phase
    return next(iter(phases), None)


# Plan the creation or rename of the script phase called `name`.
# An existing phase is reused and renamed to the current spelling when it drifted,
# otherwise a detached phase is returned together with the mutation appending it to
# the target. `show_env_vars_in_log` is only set on creation, None leaves it unset.
def plan_shell_script_build_phase(
    project: XcodeProject,
    native_target: PBXNativeTarget,
    name: PhaseName,
    show_env_vars_in_log: Optional[str] = "0",
) -> Tuple[PBXShellScriptBuildPhase, List[Mutation]]:
    phase = find_script_phase(project, native_target, name)
    if phase is not None:
        if name.is_current(phase.name):
            return phase, []
        return phase, [RenameBuildPhase(phase.id, name.current)]
    phase = PBXShellScriptBuildPhase(
        name=name.current,
        target_name=native_target.name,
        showEnvVarsInLog=show_env_vars_in_log,
    )
    return phase, [AddBuildPhase(native_target.id, phase)]


def create_or_update_shell_script_build_phase(
    project: XcodeProject,
    native_target: PBXNativeTarget,
    name: PhaseName,
    show_env_vars_in_log: Optional[str] = "0",
) -> Tuple[PBXShellScriptBuildPhase, List[Mutation]]:
    phase, mutations = plan_shell_script_build_phase(
        project, native_target, name, show_env_vars_in_log
    )
    return phase, apply_mutations(project, mutations)


def plan_remove_script_phase(
    project: XcodeProject, native_target: PBXNativeTarget, name: PhaseName
) -> List[Mutation]:
    phase = find_script_phase(project, native_target, name)
    if phase is None:
        return []
    return [RemoveBuildPhase(native_target.id, phase.id)]


def remove_script_phase_from_target(
    project: XcodeProject, native_target: PBXNativeTarget, name: PhaseName
) -> List[Mutation]:
    return apply_mutations(
        project, plan_remove_script_phase(project, native_target, name)
    )

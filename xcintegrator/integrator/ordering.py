from typing import List, Union

from xcintegrator.details.targets.script_phase import ExecutionPosition
from xcintegrator.integrator.mutations import Mutation, MoveBuildPhase, apply_mutations
from xcintegrator.project.model import (
    PBXHeadersBuildPhase,
    PBXNativeTarget,
    PBXShellScriptBuildPhase,
    PBXSourcesBuildPhase,
    XcodeProject,
)

_ANCHOR_PHASE_TYPES = {
    ExecutionPosition.BEFORE_COMPILE: PBXSourcesBuildPhase,
    ExecutionPosition.AFTER_COMPILE: PBXSourcesBuildPhase,
    ExecutionPosition.BEFORE_HEADERS: PBXHeadersBuildPhase,
    ExecutionPosition.AFTER_HEADERS: PBXHeadersBuildPhase,
}

_ORDER_BEFORE = (ExecutionPosition.BEFORE_COMPILE, ExecutionPosition.BEFORE_HEADERS)


# Plan moving `script_phase` next to the sources or headers phase. Nothing moves
# when the phase already sits on the requested side of its anchor, when the target
# has no anchor phase, or when the script phase is not part of the target.
def plan_reorder_script_phase(
    project: XcodeProject,
    native_target: PBXNativeTarget,
    script_phase: PBXShellScriptBuildPhase,
    execution_position: Union[None, str, ExecutionPosition],
) -> List[Mutation]:
    position = ExecutionPosition.parse(execution_position)
    if position == ExecutionPosition.ANY:
        return []
    anchor_type = _ANCHOR_PHASE_TYPES[position]
    order_before = position in _ORDER_BEFORE

    phases = project.build_phases(native_target)
    anchor_index = next(
        (i for i, phase in enumerate(phases) if isinstance(phase, anchor_type)), None
    )
    if anchor_index is None:
        return []
    script_index = next(
        (
            i
            for i, phase in enumerate(phases)
            if isinstance(phase, PBXShellScriptBuildPhase)
            and phase.name is not None
            and phase.name == script_phase.name
        ),
        None,
    )
    if script_index is None:
        return []
    if (order_before and script_index > anchor_index) or (
        not order_before and script_index < anchor_index
    ):
        return [MoveBuildPhase(native_target.id, script_index, anchor_index)]
    return []


def reorder_script_phase(
    project: XcodeProject,
    native_target: PBXNativeTarget,
    script_phase: PBXShellScriptBuildPhase,
    execution_position: Union[None, str, ExecutionPosition],
) -> List[Mutation]:
    return apply_mutations(
        project,
        plan_reorder_script_phase(
            project, native_target, script_phase, execution_position
        ),
    )

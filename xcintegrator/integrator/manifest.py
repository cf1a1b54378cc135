from typing import List

from xcintegrator.details.targets import IntegrationTarget
from xcintegrator.integrator.mutations import (
    Mutation,
    PlaceBuildPhaseFirst,
    apply_mutations,
    plan_update,
)
from xcintegrator.integrator.names import CHECK_MANIFEST
from xcintegrator.integrator.phases import create_or_update_shell_script_build_phase
from xcintegrator.project.model import PBXNativeTarget, XcodeProject

CHECK_MANIFEST_INPUT_PATHS = [
    "${PODS_PODFILE_DIR_PATH}/Podfile.lock",
    "${PODS_ROOT}/Manifest.lock",
]

CHECK_MANIFEST_SCRIPT = """\
diff "${PODS_PODFILE_DIR_PATH}/Podfile.lock" "${PODS_ROOT}/Manifest.lock" > /dev/null
if [ $? != 0 ] ; then
    # print error to STDERR
    echo "error: The sandbox is not in sync with the Podfile.lock. Run 'pod install' or update your CocoaPods installation." >&2
    exit 1
fi
# This output is used by Xcode 'outputs' to avoid re-running this script phase.
echo "SUCCESS" > "${SCRIPT_OUTPUT_FILE_0}"
"""


def add_check_manifest_lock_script_phase(
    project: XcodeProject, native_target: PBXNativeTarget, output_path: str
) -> List[Mutation]:
    # Always the first phase of the target
    phase, mutations = create_or_update_shell_script_build_phase(
        project, native_target, CHECK_MANIFEST
    )
    planned: List[Mutation] = []
    indices = [
        i for i, ref in enumerate(native_target.buildPhases) if ref.id == phase.id
    ]
    if indices != [0]:
        planned.append(PlaceBuildPhaseFirst(native_target.id, phase.id))
    planned += plan_update(
        phase,
        {
            "shellScript": CHECK_MANIFEST_SCRIPT,
            "inputPaths": list(CHECK_MANIFEST_INPUT_PATHS),
            "outputPaths": [output_path],
        },
    )
    return mutations + apply_mutations(project, planned)


def add_check_manifest_lock_script_phases(target: IntegrationTarget) -> List[Mutation]:
    mutations: List[Mutation] = []
    for native_target in target.user_targets:
        mutations += add_check_manifest_lock_script_phase(
            target.user_project,
            native_target,
            target.check_manifest_lock_script_output_file_path,
        )
    return mutations

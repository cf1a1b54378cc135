"""Tests for the copy resources script phase."""

from conftest import add_native_target

from xcintegrator import TargetIntegrator
from xcintegrator.integrator.names import COPY_RESOURCES
from xcintegrator.integrator.phases import find_script_phase
from xcintegrator.integrator.resources import resource_output_paths
from xcintegrator.project.model import PBXShellScriptBuildPhase, ProductType

RESOURCES = {
    "Debug": [
        "${PODS_ROOT}/Lib/Resources/Images.xcassets",
        "${PODS_ROOT}/Lib/Resources/Main.storyboard",
        "${PODS_ROOT}/Lib/Resources/Cell.xib",
        "${PODS_ROOT}/Lib/Resources/logo.png",
    ],
}


class TestOutputPaths:
    def test_output_paths(self):
        assert resource_output_paths(RESOURCES["Debug"]) == [
            "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}/Assets.car",
            "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}/Main.storyboardc",
            "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}/Cell.nib",
            "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}/logo.png",
        ]

    def test_asset_catalogs_collapse(self):
        assert resource_output_paths(["A/One.xcassets", "B/Two.xcassets"]) == [
            "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}/Assets.car",
        ]

    def test_trailing_slash(self):
        assert resource_output_paths(["${PODS_ROOT}/Lib/Foo.bundle/", "Images.xcassets/"]) == [
            "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}/Foo.bundle",
            "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}/Assets.car",
        ]

    def test_data_models(self):
        assert resource_output_paths(["Model.xcdatamodeld", "Map.xcmappingmodel", "LICENSE"]) == [
            "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}/Model.momd",
            "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}/Map.cdm",
            "${TARGET_BUILD_DIR}/${UNLOCALIZED_RESOURCES_FOLDER_PATH}/LICENSE",
        ]


class TestCopyResourcesPhase:
    def test_added_with_file_lists(self, project, app_target, make_target, tmp_path):
        target = make_target(resource_paths_by_config=RESOURCES)
        TargetIntegrator(target).add_copy_resources_script_phase()
        phase = find_script_phase(project, app_target, COPY_RESOURCES)
        assert phase.name == "[CP] Copy Pods Resources"
        assert phase.outputFileListPaths == [
            "${PODS_ROOT}/Target Support Files/Pods-App/Pods-App-resources-${CONFIGURATION}-output-files.xcfilelist"
        ]
        written = target.file_list_path("resources", "Debug", "input").read_text().split("\n")
        assert written[0] == target.copy_resources_script_relative_path
        assert written[1:] == RESOURCES["Debug"]

    def test_removed_without_resources(self, project, app_target, make_target):
        project.append_build_phase(
            app_target, PBXShellScriptBuildPhase(name="[CP] Copy Pods Resources", target_name="App")
        )
        TargetIntegrator(make_target()).add_copy_resources_script_phase()
        assert find_script_phase(project, app_target, COPY_RESOURCES) is None

    def test_static_library_never_gets_the_phase(self, project, app_target, make_target):
        library = add_native_target(project, "StaticLib", ProductType.STATIC_LIBRARY)
        target = make_target(user_targets=[app_target, library], resource_paths_by_config=RESOURCES)
        TargetIntegrator(target).integrate()
        TargetIntegrator(target).integrate()
        assert find_script_phase(project, library, COPY_RESOURCES) is None
        assert find_script_phase(project, app_target, COPY_RESOURCES) is not None

"""Tests for the input/output path planner shared by every script phase."""

import pytest

from xcintegrator.integrator.mutations import WriteFileList, apply_mutations
from xcintegrator.integrator.paths import (
    MAX_INPUT_OUTPUT_PATHS,
    FileListConfigKey,
    input_output_paths_use_filelist,
    plan_input_output_paths,
    validate_input_output_path_limit,
)
from xcintegrator.project.model import PBXShellScriptBuildPhase, ProductType, XcodeProject


def make_phase(project, native_target):
    phase = PBXShellScriptBuildPhase(name="[CP] Test", target_name=native_target.name)
    project.append_build_phase(native_target, phase)
    return phase


def keys(tmp_path, config):
    return (
        FileListConfigKey(tmp_path / f"in-{config}.xcfilelist", "${PODS_ROOT}/in-${CONFIGURATION}.xcfilelist"),
        FileListConfigKey(tmp_path / f"out-{config}.xcfilelist", "${PODS_ROOT}/out-${CONFIGURATION}.xcfilelist"),
    )


class TestEncodingMode:
    @pytest.mark.parametrize(
        "compatibility_version, object_version, expected",
        [
            ("Xcode 9.3", 46, True),
            ("Xcode 10.0", 46, True),
            ("Xcode 9.2", 56, False),
            ("Xcode 3.2", 56, False),
            (None, 50, True),
            (None, 48, False),
            ("Xcode 14", 56, True),
            ("garbage", 46, False),
        ],
    )
    def test_mode(self, compatibility_version, object_version, expected):
        project = XcodeProject(
            "App", compatibility_version=compatibility_version, object_version=object_version
        )
        assert input_output_paths_use_filelist(project) is expected


class TestPathLimit:
    def test_over_limit_clears_both(self):
        inputs = [f"in{i}" for i in range(501)]
        outputs = [f"out{i}" for i in range(500)]
        assert validate_input_output_path_limit(inputs, outputs) == ([], [])

    def test_at_limit_keeps_both(self):
        inputs = [f"in{i}" for i in range(500)]
        outputs = [f"out{i}" for i in range(500)]
        assert validate_input_output_path_limit(inputs, outputs) == (inputs, outputs)


class TestInlineMode:
    def test_flattens_and_dedupes(self, legacy_project, tmp_path):
        native_target = legacy_project.new_native_target("App", ProductType.APPLICATION)
        phase = make_phase(legacy_project, native_target)
        debug_in, debug_out = keys(tmp_path, "Debug")
        release_in, release_out = keys(tmp_path, "Release")
        mutations = plan_input_output_paths(
            legacy_project,
            phase,
            {debug_in: ["script.sh", "a"], release_in: ["script.sh", "b"]},
            {debug_out: ["x"], release_out: ["x", "y"]},
        )
        apply_mutations(legacy_project, mutations)
        assert phase.inputPaths == ["script.sh", "a", "b"]
        assert phase.outputPaths == ["x", "y"]
        assert phase.inputFileListPaths is None
        assert phase.outputFileListPaths is None
        assert not any(isinstance(m, WriteFileList) for m in mutations)
        assert not (tmp_path / "in-Debug.xcfilelist").exists()

    def test_1001_paths_are_dropped(self, legacy_project, tmp_path):
        native_target = legacy_project.new_native_target("App", ProductType.APPLICATION)
        phase = make_phase(legacy_project, native_target)
        key_in, key_out = keys(tmp_path, "Debug")
        apply_mutations(
            legacy_project,
            plan_input_output_paths(
                legacy_project,
                phase,
                {key_in: [f"in{i}" for i in range(501)]},
                {key_out: [f"out{i}" for i in range(500)]},
            ),
        )
        assert phase.inputPaths == []
        assert phase.outputPaths == []

    def test_999_paths_are_kept(self, legacy_project, tmp_path):
        native_target = legacy_project.new_native_target("App", ProductType.APPLICATION)
        phase = make_phase(legacy_project, native_target)
        key_in, key_out = keys(tmp_path, "Debug")
        apply_mutations(
            legacy_project,
            plan_input_output_paths(
                legacy_project,
                phase,
                {key_in: [f"in{i}" for i in range(500)]},
                {key_out: [f"out{i}" for i in range(499)]},
            ),
        )
        assert len(phase.inputPaths) == 500
        assert len(phase.outputPaths) == 499

    def test_limit_is_configurable(self, legacy_project, tmp_path):
        native_target = legacy_project.new_native_target("App", ProductType.APPLICATION)
        phase = make_phase(legacy_project, native_target)
        key_in, key_out = keys(tmp_path, "Debug")
        apply_mutations(
            legacy_project,
            plan_input_output_paths(legacy_project, phase, {key_in: ["a", "b"]}, {key_out: ["c"]}, limit=2),
        )
        assert phase.inputPaths == []
        assert phase.outputPaths == []
        assert MAX_INPUT_OUTPUT_PATHS == 1000


class TestFileListMode:
    def test_writes_file_lists_and_references_them(self, project, app_target, tmp_path):
        phase = make_phase(project, app_target)
        debug_in, debug_out = keys(tmp_path, "Debug")
        release_in, release_out = keys(tmp_path, "Release")
        apply_mutations(
            project,
            plan_input_output_paths(
                project,
                phase,
                {debug_in: ["script.sh", "a"], release_in: ["script.sh", "b"]},
                {debug_out: ["x"], release_out: ["y"]},
            ),
        )
        assert phase.inputPaths is None
        assert phase.outputPaths is None
        assert phase.inputFileListPaths == ["${PODS_ROOT}/in-${CONFIGURATION}.xcfilelist"]
        assert phase.outputFileListPaths == ["${PODS_ROOT}/out-${CONFIGURATION}.xcfilelist"]
        assert (tmp_path / "in-Debug.xcfilelist").read_text() == "script.sh\na"
        assert (tmp_path / "out-Release.xcfilelist").read_text() == "y"

    def test_unchanged_file_lists_are_not_rewritten(self, project, app_target, tmp_path):
        phase = make_phase(project, app_target)
        key_in, key_out = keys(tmp_path, "Debug")
        inputs, outputs = {key_in: ["a"]}, {key_out: ["b"]}
        apply_mutations(project, plan_input_output_paths(project, phase, inputs, outputs))
        assert plan_input_output_paths(project, phase, inputs, outputs) == []

    def test_switching_mode_clears_inline_paths(self, project, app_target, tmp_path):
        phase = make_phase(project, app_target)
        phase.inputPaths = ["stale"]
        phase.outputPaths = ["stale"]
        key_in, key_out = keys(tmp_path, "Debug")
        apply_mutations(project, plan_input_output_paths(project, phase, {key_in: ["a"]}, {key_out: ["b"]}))
        assert phase.inputPaths is None
        assert phase.outputPaths is None
        assert phase.inputFileListPaths

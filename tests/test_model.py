"""Tests for the project graph arena in xcintegrator.project.model."""

from xcintegrator.project.model import (
    FileType,
    PBXGroup,
    PBXShellScriptBuildPhase,
    ProductType,
    XcodeProject,
    generate_id,
)


class TestIdentifiers:
    def test_ids_are_deterministic(self):
        assert generate_id("PBXGroup:Pods") == generate_id("PBXGroup:Pods")
        assert len(generate_id("PBXGroup:Pods")) == 24

    def test_colliding_keys_are_rekeyed(self, project, app_target):
        first = PBXShellScriptBuildPhase(name="Run", target_name="App")
        second = PBXShellScriptBuildPhase(name="Run", target_name="App")
        project.append_build_phase(app_target, first)
        project.append_build_phase(app_target, second)
        assert first.id != second.id
        assert project.get(first.id) is first
        assert project.get(second.id) is second


class TestGroups:
    def test_find_subpath_creates_intermediate_groups(self, project):
        group = project.find_subpath("Pods/Pods-App-OnDemandResources", create=True)
        assert group.name == "Pods-App-OnDemandResources"
        assert project.find_subpath("Pods/Pods-App-OnDemandResources") is group
        assert project.parent_of(group) is project.find_subpath("Pods")

    def test_find_subpath_without_create(self, project):
        assert project.find_subpath("Pods/Missing") is None

    def test_remove_group_is_recursive(self, project):
        outer = project.find_subpath("Pods/Outer", create=True)
        inner = project.new_group(outer, "Inner")
        ref = project.new_file(inner, "Resources/image.png")
        project.remove(outer)
        assert not project.contains(outer)
        assert not project.contains(inner)
        assert not project.contains(ref)
        assert project.find_subpath("Pods").children == []

    def test_remove_absent_object_is_noop(self, project):
        group = PBXGroup(name="Detached")
        project.remove(group)
        project.remove(None)

    def test_new_file_infers_file_type(self, project):
        ref = project.new_file(project.main_group, "Resources/Main.storyboard")
        assert ref.fileType == FileType.STORYBOARD
        assert ref.name == "Main.storyboard"


class TestBuildFiles:
    def test_add_file_reference_is_idempotent(self, project, app_target):
        phase = project.frameworks_build_phase(app_target)
        ref = project.new_file(project.frameworks_group, "Pods_App.framework")
        first = project.add_file_reference(phase, ref)
        second = project.add_file_reference(phase, ref)
        assert first is second
        assert len(phase.files) == 1

    def test_removing_file_reference_drops_build_files(self, project, app_target):
        phase = project.resources_build_phase(app_target)
        ref = project.new_file(project.main_group, "image.png")
        project.add_file_reference(phase, ref)
        project.remove(ref)
        assert phase.files == []

    def test_frameworks_build_phase_is_created_once(self, project):
        native_target = project.new_native_target("Tool", ProductType.TOOL)
        phase = project.frameworks_build_phase(native_target)
        assert project.frameworks_build_phase(native_target) is phase
        assert len(native_target.buildPhases) == 1


class TestOnDemandResources:
    def test_add_merges_tags(self, project, app_target):
        ref = project.new_file(project.main_group, "level1.png")
        project.add_on_demand_resources(app_target, {"level1": [ref]})
        project.add_on_demand_resources(app_target, {"levels": [ref], "level1": [ref]})
        build_file = project.build_file(project.resources_build_phase(app_target), ref)
        assert build_file.settings["ASSET_TAGS"] == ["level1", "levels"]

    def test_remove_drops_build_file_once_untagged(self, project, app_target):
        ref = project.new_file(project.main_group, "level1.png")
        project.add_on_demand_resources(app_target, {"a": [ref], "b": [ref]})
        phase = project.resources_build_phase(app_target)
        project.remove_on_demand_resources(app_target, {"a": [ref]})
        assert project.build_file(phase, ref).settings["ASSET_TAGS"] == ["b"]
        project.remove_on_demand_resources(app_target, {"b": [ref]})
        assert project.build_file(phase, ref) is None

    def test_remove_without_resources_phase_adds_nothing(self, project):
        native_target = project.new_native_target("Tool", ProductType.TOOL)
        project.remove_on_demand_resources(native_target, {"a": []})
        assert native_target.buildPhases == []


class TestProductType:
    def test_symbol_types(self):
        assert ProductType.APPLICATION.symbol_type == "application"
        assert ProductType.APP_EXTENSION.symbol_type == "app_extension"
        assert ProductType.STATIC_LIBRARY.symbol_type == "static_library"

    def test_output_extension_for_resource(self):
        assert FileType.output_extension_for_resource(".xib") == ".nib"
        assert FileType.output_extension_for_resource(".xcassets") == ".car"
        assert FileType.output_extension_for_resource(".png") == ".png"


def test_project_defaults():
    project = XcodeProject("Sample")
    assert project.root_object.name == "Sample"
    assert project.main_group.children == []
    assert project.targets == []

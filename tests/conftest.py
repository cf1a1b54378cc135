"""Shared fixtures: a user project with an application target and an integration target factory."""

import pytest

from xcintegrator.details.targets import IntegrationTarget
from xcintegrator.project.model import (
    PBXFrameworksBuildPhase,
    PBXHeadersBuildPhase,
    PBXResourcesBuildPhase,
    PBXSourcesBuildPhase,
    ProductType,
    XcodeProject,
)


def add_native_target(project, name, product_type=ProductType.APPLICATION, headers=False):
    native_target = project.new_native_target(name, product_type)
    if headers:
        project.append_build_phase(native_target, PBXHeadersBuildPhase(target_name=name))
    project.append_build_phase(native_target, PBXSourcesBuildPhase(target_name=name))
    project.append_build_phase(native_target, PBXFrameworksBuildPhase(target_name=name))
    project.append_build_phase(native_target, PBXResourcesBuildPhase(target_name=name))
    return native_target


def phase_names(project, native_target):
    return [
        getattr(phase, "name", None) or type(phase).__name__
        for phase in project.build_phases(native_target)
    ]


@pytest.fixture
def project():
    return XcodeProject("App", compatibility_version="Xcode 9.3")


@pytest.fixture
def legacy_project():
    return XcodeProject("App", compatibility_version="Xcode 8.0", object_version=48)


@pytest.fixture
def app_target(project):
    return add_native_target(project, "App")


@pytest.fixture
def make_target(project, app_target, tmp_path):
    def factory(**kwargs):
        kwargs.setdefault("label", "Pods-App")
        kwargs.setdefault("product_basename", "Pods_App")
        kwargs.setdefault("user_project", project)
        kwargs.setdefault("user_targets", [app_target])
        kwargs.setdefault("sandbox_root", tmp_path / "Pods")
        return IntegrationTarget(**kwargs)

    return factory

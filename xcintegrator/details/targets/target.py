from pathlib import Path
from typing import Dict, List, Optional, Sequence

from xcintegrator.details.targets.frameworks import FrameworkPaths, XCFramework
from xcintegrator.details.targets.script_phase import ScriptPhaseSpec
from xcintegrator.project.model import PBXNativeTarget, ProductType, XcodeProject


# Library target pulled in by an integration target
class LibraryTarget:
    def __init__(
        self,
        *,
        label: str,
        on_demand_resources: Optional[Dict[str, List[str]]] = None,
    ):
        self.label = label
        # tag -> absolute resource paths
        self.on_demand_resources = on_demand_resources or {}

    @property
    def on_demand_resources_group_name(self) -> str:
        return f"{self.label}-OnDemandResources"


# The logical unit integrated into one or more native targets of a user project.
# Everything here is computed by the installation pass, the integrator only reads it.
class IntegrationTarget:
    def __init__(
        self,
        *,
        label: str,
        product_basename: str,
        user_project: XcodeProject,
        user_targets: Sequence[PBXNativeTarget],
        sandbox_root: Path,
        product_type: ProductType = ProductType.FRAMEWORK,
        requires_host_target: bool = False,
        resource_paths_by_config: Optional[Dict[str, List[str]]] = None,
        framework_paths_by_config: Optional[Dict[str, List[FrameworkPaths]]] = None,
        xcframeworks_by_config: Optional[Dict[str, List[XCFramework]]] = None,
        script_phases: Optional[List[ScriptPhaseSpec]] = None,
        library_targets: Optional[List[LibraryTarget]] = None,
    ):
        if product_type not in (ProductType.FRAMEWORK, ProductType.STATIC_LIBRARY):
            raise ValueError(f"unsupported product type {product_type}")
        self.label = label
        self.product_basename = product_basename
        self.product_type = product_type
        self.user_project = user_project
        self.user_targets = list(user_targets)
        self.sandbox_root = Path(sandbox_root)
        self.requires_host_target = requires_host_target
        self.resource_paths_by_config = resource_paths_by_config or {}
        self.framework_paths_by_config = framework_paths_by_config or {}
        self.xcframeworks_by_config = xcframeworks_by_config or {}
        self.script_phases = script_phases or []
        self.library_targets = library_targets or []

        names = [spec.name for spec in self.script_phases]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate script phase names in {label}: {names}")

    @property
    def name(self) -> str:
        return self.label

    @property
    def product_name(self) -> str:
        if self.product_type == ProductType.FRAMEWORK:
            return f"{self.product_basename}.framework"
        return f"lib{self.product_basename}.a"

    @property
    def includes_resources(self) -> bool:
        return any(self.resource_paths_by_config.values())

    @property
    def includes_frameworks(self) -> bool:
        return any(self.framework_paths_by_config.values())

    @property
    def includes_dynamic_xcframeworks(self) -> bool:
        return any(
            xcf.build_type.is_dynamic_framework
            for xcframeworks in self.xcframeworks_by_config.values()
            for xcf in xcframeworks
        )

    # -- support files ---------------------------------------------------------

    @property
    def support_files_dir(self) -> Path:
        return self.sandbox_root.joinpath("Target Support Files", self.label)

    @property
    def support_files_relative_dir(self) -> str:
        return f"${{PODS_ROOT}}/Target Support Files/{self.label}"

    @property
    def embed_frameworks_script_relative_path(self) -> str:
        return f"{self.support_files_relative_dir}/{self.label}-frameworks.sh"

    @property
    def copy_resources_script_relative_path(self) -> str:
        return f"{self.support_files_relative_dir}/{self.label}-resources.sh"

    def file_list_path(self, kind: str, config: str, direction: str) -> Path:
        return self.support_files_dir.joinpath(
            f"{self.label}-{kind}-{config}-{direction}-files.xcfilelist"
        )

    def file_list_relative_path(self, kind: str, direction: str) -> str:
        return (
            f"{self.support_files_relative_dir}/"
            f"{self.label}-{kind}-${{CONFIGURATION}}-{direction}-files.xcfilelist"
        )

    @property
    def check_manifest_lock_script_output_file_path(self) -> str:
        return f"$(DERIVED_FILE_DIR)/{self.label}-checkManifestLockResult.txt"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} for target `{self.label}'>"

import logging

from typing import List, Optional

from xcintegrator.config import Config
from xcintegrator.details.targets import IntegrationTarget
from xcintegrator.integrator.frameworks import (
    EMBED_FRAMEWORKS_IN_HOST_TARGET_TYPES,
    create_or_update_embed_frameworks_script_phase,
    embed_frameworks_paths_by_config,
    native_targets_to_embed_in,
    remove_embed_frameworks_script_phase,
)
from xcintegrator.integrator.manifest import add_check_manifest_lock_script_phases
from xcintegrator.integrator.mutations import Mutation
from xcintegrator.integrator.names import REMOVED_PHASE_NAMES
from xcintegrator.integrator.on_demand import add_on_demand_resources
from xcintegrator.integrator.phases import remove_script_phase_from_target
from xcintegrator.integrator.products import add_product_reference
from xcintegrator.integrator.resources import (
    copy_resources_paths_by_config,
    create_or_update_copy_resources_script_phase,
    remove_copy_resources_script_phase,
)
from xcintegrator.integrator.user_phases import create_or_update_user_script_phases
from xcintegrator.project.model import PBXNativeTarget

logger = logging.getLogger(__name__)


class TargetIntegrator:
    """
    Integrates one IntegrationTarget into the native targets of its user project.

    Every step converges the project towards the desired state, so integrating the
    same target twice leaves the project as the first run left it. Build phase
    changes are returned as the list of applied mutations.
    """

    def __init__(self, target: IntegrationTarget, config: Optional[Config] = None):
        self.target = target
        self.config = config or Config()

    @property
    def project(self):
        return self.target.user_project

    @property
    def native_targets(self) -> List[PBXNativeTarget]:
        return self.target.user_targets

    def integrate(self) -> List[Mutation]:
        logger.info(
            "Integrating target `%s` (%s project)",
            self.target.name,
            self.project.root_object.name,
        )
        mutations: List[Mutation] = []
        mutations += self.remove_obsolete_script_phases()
        self.config.xcconfig_integrator(self.target, self.native_targets)
        add_product_reference(self.target)
        mutations += self.add_embed_frameworks_script_phase()
        mutations += self.remove_embed_frameworks_script_phase_from_embedded_targets()
        mutations += self.add_copy_resources_script_phase()
        mutations += add_check_manifest_lock_script_phases(self.target)
        mutations += self.add_user_script_phases()
        add_on_demand_resources(self.target)
        return mutations

    # -- integration steps -----------------------------------------------------

    def remove_obsolete_script_phases(self) -> List[Mutation]:
        mutations: List[Mutation] = []
        for native_target in self.native_targets:
            for name in REMOVED_PHASE_NAMES:
                mutations += remove_script_phase_from_target(
                    self.project, native_target, name
                )
        return mutations

    def add_embed_frameworks_script_phase(self) -> List[Mutation]:
        mutations: List[Mutation] = []
        native_targets = native_targets_to_embed_in(self.target)
        if not (
            self.target.includes_frameworks
            or self.target.includes_dynamic_xcframeworks
        ):
            for native_target in native_targets:
                mutations += remove_embed_frameworks_script_phase(
                    self.project, native_target
                )
            return mutations

        input_paths_by_config, output_paths_by_config = {}, {}
        if self.config.use_input_output_paths:
            input_paths_by_config, output_paths_by_config = (
                embed_frameworks_paths_by_config(self.target)
            )
        for native_target in native_targets:
            mutations += create_or_update_embed_frameworks_script_phase(
                self.project,
                native_target,
                self.target.embed_frameworks_script_relative_path,
                input_paths_by_config,
                output_paths_by_config,
                self.config.max_input_output_paths,
            )
        return mutations

    def remove_embed_frameworks_script_phase_from_embedded_targets(
        self,
    ) -> List[Mutation]:
        # Older releases added the phase to embedded targets, their host embeds now
        mutations: List[Mutation] = []
        if not self.target.requires_host_target:
            return mutations
        for native_target in self.native_targets:
            if native_target.symbol_type in EMBED_FRAMEWORKS_IN_HOST_TARGET_TYPES:
                mutations += remove_embed_frameworks_script_phase(
                    self.project, native_target
                )
        return mutations

    def add_copy_resources_script_phase(self) -> List[Mutation]:
        mutations: List[Mutation] = []
        if not self.target.includes_resources:
            for native_target in self.native_targets:
                mutations += remove_copy_resources_script_phase(
                    self.project, native_target
                )
            return mutations

        input_paths_by_config, output_paths_by_config = {}, {}
        if self.config.use_input_output_paths:
            input_paths_by_config, output_paths_by_config = (
                copy_resources_paths_by_config(self.target)
            )
        for native_target in self.native_targets:
            # Resources cannot be embedded in a static library
            if native_target.symbol_type == "static_library":
                continue
            mutations += create_or_update_copy_resources_script_phase(
                self.project,
                native_target,
                self.target.copy_resources_script_relative_path,
                input_paths_by_config,
                output_paths_by_config,
                self.config.max_input_output_paths,
            )
        return mutations

    def add_user_script_phases(self) -> List[Mutation]:
        mutations: List[Mutation] = []
        for native_target in self.native_targets:
            mutations += create_or_update_user_script_phases(
                self.project, native_target, self.target.script_phases
            )
        return mutations

    def __call__(self) -> List[Mutation]:
        return self.integrate()

    def __repr__(self) -> str:
        return f"#<{self.__class__.__name__} for target `{self.target.label}'>"


def integrate(target: IntegrationTarget, config: Optional[Config] = None) -> List[Mutation]:
    return TargetIntegrator(target, config).integrate()

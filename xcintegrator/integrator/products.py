import logging
import re

from typing import Optional

from xcintegrator.details.targets import IntegrationTarget
from xcintegrator.project.model import (
    FileType,
    PBXFileReference,
    PBXGroup,
    ProductType,
    SourceTree,
    XcodeProject,
)

logger = logging.getLogger(__name__)

# Product names written by any release of the integrator
FRAMEWORK_NAMES = re.compile(r"^(libPods.*\.a)|(Pods.*\.framework)$", re.IGNORECASE)


def new_product_ref(
    project: XcodeProject, group: PBXGroup, target: IntegrationTarget
) -> PBXFileReference:
    if target.product_type == ProductType.FRAMEWORK:
        file_type = FileType.FRAMEWORK
    else:
        file_type = FileType.ARCHIVE
    ref = PBXFileReference(
        name=None,
        path=target.product_name,
        sourceTree=SourceTree.BUILT_PRODUCTS_DIR,
        explicitFileType=file_type,
        includeInIndex=0,
    )
    project.add_child(group, ref)
    return ref


# Link the integration product into every user target. Products of earlier
# integrations with a different name (a renamed target, or a switch between static
# library and framework) are removed from the Frameworks group and phase first.
def add_product_reference(target: IntegrationTarget) -> None:
    project = target.user_project
    frameworks = project.frameworks_group
    product_name = target.product_name
    for native_target in target.user_targets:
        build_phase = project.frameworks_build_phase(native_target)

        for build_file in project.build_files(build_phase):
            file_ref: Optional[PBXFileReference] = project.file_ref_of(build_file)
            display_name = file_ref.display_name if file_ref else ""
            if not FRAMEWORK_NAMES.search(display_name) or display_name == product_name:
                continue
            logger.info("Removing old product reference `%s` from project.", display_name)
            project.remove(file_ref)
            project.remove_build_file(build_phase, build_file)

        product_ref = next(
            (ref for ref in project.files(frameworks) if ref.path == product_name), None
        ) or new_product_ref(project, frameworks, target)
        project.add_file_reference(build_phase, product_ref)

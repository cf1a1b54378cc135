# On demand resources.
#
# Tagged resources of every library target are mirrored in the user project as
# Pods/<library>-OnDemandResources/<tag>/<file> and registered, with their tag, in
# the resources phase of each user target. Only app level targets may carry on demand
# resources, the caller decides which user targets are passed in.

import logging
import os

from typing import Dict, List

from xcintegrator.details.as_iterator import unique
from xcintegrator.details.targets import IntegrationTarget, LibraryTarget
from xcintegrator.project.model import PBXFileReference, PBXGroup, XcodeProject

logger = logging.getLogger(__name__)

ON_DEMAND_RESOURCES_PARENT_GROUP = "Pods"

KNOWN_ASSET_TAGS = "KnownAssetTags"


def _tag_file_refs(
    project: XcodeProject, group: PBXGroup
) -> Dict[str, List[PBXFileReference]]:
    return {
        tag_group.name: project.files(tag_group)
        for tag_group in project.recursive_children_groups(group)
    }


def remove_library_on_demand_resources(
    target: IntegrationTarget, library: LibraryTarget
) -> None:
    project = target.user_project
    old_group = project.find_subpath(
        f"{ON_DEMAND_RESOURCES_PARENT_GROUP}/{library.on_demand_resources_group_name}"
    )
    if old_group is None:
        return
    old_file_refs = _tag_file_refs(project, old_group)
    for user_target in target.user_targets:
        project.remove_on_demand_resources(user_target, old_file_refs)
    logger.info("Removing on demand resources of `%s` from project.", library.label)
    project.remove(old_group)


def update_library_on_demand_resources(
    target: IntegrationTarget, library: LibraryTarget
) -> List[str]:
    project = target.user_project
    parent = project.find_subpath(ON_DEMAND_RESOURCES_PARENT_GROUP, create=True)
    group_name = library.on_demand_resources_group_name
    odr_group = project.group_named(parent, group_name) or project.new_group(
        parent, group_name
    )
    current_file_refs = [
        ref
        for tag_group in project.recursive_children_groups(odr_group)
        for ref in project.files(tag_group)
    ]

    tag_file_refs: Dict[str, List[PBXFileReference]] = {}
    for tag, resources in library.on_demand_resources.items():
        tag_group = project.group_named(odr_group, tag) or project.new_group(
            odr_group, tag
        )
        file_refs = []
        for resource in resources:
            relative_path = os.path.relpath(resource, target.sandbox_root)
            file_refs.append(
                project.find_file_by_path(tag_group, relative_path)
                or project.new_file(tag_group, relative_path)
            )
        tag_file_refs[tag] = file_refs
    for user_target in target.user_targets:
        project.add_on_demand_resources(user_target, tag_file_refs)

    # Drop references the library no longer provides
    added_ids = {ref.id for refs in tag_file_refs.values() for ref in refs}
    remaining_refs = [ref for ref in current_file_refs if ref.id not in added_ids]
    if remaining_refs:
        for ref in remaining_refs:
            project.remove(ref)
        for tag_group in project.recursive_children_groups(odr_group):
            if project.contains(tag_group) and project.is_empty(tag_group):
                project.remove(tag_group)
    return list(library.on_demand_resources)


def add_on_demand_resources(target: IntegrationTarget) -> List[str]:
    asset_tags_added: List[str] = []
    for library in target.library_targets:
        if not library.on_demand_resources:
            remove_library_on_demand_resources(target, library)
            continue
        asset_tags_added += update_library_on_demand_resources(target, library)

    asset_tags_added = unique(asset_tags_added)
    # Known tags only ever grow, an empty set never overwrites them
    if asset_tags_added:
        attributes = target.user_project.root_object.attributes
        attributes[KNOWN_ASSET_TAGS] = unique(
            list(attributes.get(KNOWN_ASSET_TAGS) or []) + asset_tags_added
        )
    return asset_tags_added

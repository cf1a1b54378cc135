# Build phase mutations.
#
# Planners compare the current project graph with the desired state and return the
# list of mutations that converge the two, without touching the graph. Applying an
# empty list is the steady state reached once a target is integrated.

import logging

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence

from xcintegrator.details.file_list import update_changed_file
from xcintegrator.project.model import BuildPhase, XcodeID, XcodeProject, Reference

logger = logging.getLogger(__name__)


class Mutation(ABC):
    @abstractmethod
    def apply(self, project: XcodeProject) -> None:
        pass


@dataclass
class AddBuildPhase(Mutation):
    target_id: XcodeID
    phase: BuildPhase

    def apply(self, project: XcodeProject) -> None:
        logger.info("Adding Build Phase '%s' to project.", self.phase.display_name)
        project.append_build_phase(project.get(self.target_id), self.phase)


@dataclass
class RenameBuildPhase(Mutation):
    phase_id: XcodeID
    name: str

    def apply(self, project: XcodeProject) -> None:
        phase = project.get(self.phase_id)
        logger.debug("Renaming Build Phase '%s' to '%s'.", phase.name, self.name)
        phase.name = self.name
        for target in project.targets:
            for ref in target.buildPhases:
                if ref.id == self.phase_id:
                    ref.comment = self.name


@dataclass
class RemoveBuildPhase(Mutation):
    target_id: XcodeID
    phase_id: XcodeID

    def apply(self, project: XcodeProject) -> None:
        phase = project.get(self.phase_id)
        if phase is None:
            return
        logger.info("Removing Build Phase '%s' from project.", phase.display_name)
        project.remove_build_phase(project.get(self.target_id), phase)


@dataclass
class MoveBuildPhase(Mutation):
    target_id: XcodeID
    from_index: int
    to_index: int

    def apply(self, project: XcodeProject) -> None:
        phases: List[Reference] = project.get(self.target_id).buildPhases
        phases.insert(self.to_index, phases.pop(self.from_index))


@dataclass
class PlaceBuildPhaseFirst(Mutation):
    target_id: XcodeID
    phase_id: XcodeID

    def apply(self, project: XcodeProject) -> None:
        target = project.get(self.target_id)
        # One entry for the phase, at the front
        first = next(ref for ref in target.buildPhases if ref.id == self.phase_id)
        target.buildPhases = [first] + [
            ref for ref in target.buildPhases if ref.id != self.phase_id
        ]


@dataclass
class UpdateBuildPhase(Mutation):
    phase_id: XcodeID
    fields: Dict[str, Any] = field(default_factory=dict)

    def apply(self, project: XcodeProject) -> None:
        phase = project.get(self.phase_id)
        for name, value in self.fields.items():
            setattr(phase, name, list(value) if isinstance(value, list) else value)


@dataclass
class WriteFileList(Mutation):
    path: Path
    paths: List[str]

    def apply(self, project: XcodeProject) -> None:
        update_changed_file(self.path, self.paths)


def plan_update(phase: BuildPhase, desired: Dict[str, Any]) -> List[Mutation]:
    changed = {
        name: value
        for name, value in desired.items()
        if getattr(phase, name) != value
    }
    if not changed:
        return []
    return [UpdateBuildPhase(phase.id, changed)]


def apply_mutations(
    project: XcodeProject, mutations: Sequence[Mutation]
) -> List[Mutation]:
    for mutation in mutations:
        mutation.apply(project)
    return list(mutations)

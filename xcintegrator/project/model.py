# Xcode project graph model.
#
# This module defines the in-memory object graph of a user project (.xcodeproj) as
# the integrator sees it. Objects live in an arena (XcodeProject) keyed by their
# identifiers and refer to each other only through Reference handles, so groups,
# targets and build phases never hold back-pointers to their owners.

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union, TypeVar, Generic
from abc import ABC, abstractmethod

import os
import uuid


# Type definition for Xcode object identifiers
class XcodeID(str):
    pass


def generate_id(key: str) -> XcodeID:
    return XcodeID(uuid.uuid5(uuid.NAMESPACE_X500, key).hex.upper()[:24])


# Source Tree values used in PBXFileReference and PBXGroup
class SourceTree(Enum):
    GROUP = "<group>"
    SOURCE_ROOT = "SOURCE_ROOT"
    BUILT_PRODUCTS_DIR = "BUILT_PRODUCTS_DIR"
    SDKROOT = "SDKROOT"


# File types used in PBXFileReference
class FileType(Enum):
    STORYBOARD = "file.storyboard"
    XIB = "file.xib"
    PLIST = "text.plist.xml"
    XCCONFIG = "text.xcconfig"
    STRINGS = "text.plist.strings"
    ASSET_CATALOG = "folder.assetcatalog"
    FRAMEWORK = "wrapper.framework"
    BUNDLE = "wrapper.bundle"
    DATA_MODEL = "wrapper.xcdatamodel"
    DYLIB = "compiled.mach-o.dylib"
    ARCHIVE = "archive.ar"
    TEXT = "text"
    FOLDER = "folder"

    @staticmethod
    def from_extension(ext: str) -> "FileType":
        if ext.startswith("."):
            ext = ext[1:]

        ext_to_type = {
            "xib": FileType.XIB,
            "storyboard": FileType.STORYBOARD,
            "plist": FileType.PLIST,
            "xcconfig": FileType.XCCONFIG,
            "strings": FileType.STRINGS,
            "xcassets": FileType.ASSET_CATALOG,
            "framework": FileType.FRAMEWORK,
            "bundle": FileType.BUNDLE,
            "xcdatamodel": FileType.DATA_MODEL,
            "dylib": FileType.DYLIB,
            "a": FileType.ARCHIVE,
        }

        return ext_to_type.get(ext.lower(), FileType.TEXT)

    @staticmethod
    def output_extension_for_resource(ext: str) -> str:
        # Extension of the compiled artifact Xcode produces for a resource input
        return {
            ".storyboard": ".storyboardc",
            ".xib": ".nib",
            ".xcdatamodel": ".mom",
            ".xcdatamodeld": ".momd",
            ".xcmappingmodel": ".cdm",
            ".xcassets": ".car",
        }.get(ext, ext)


# Product types used in PBXNativeTarget
class ProductType(Enum):
    APPLICATION = "com.apple.product-type.application"
    APPLICATION_ON_DEMAND_INSTALL_CAPABLE = (
        "com.apple.product-type.application.on-demand-install-capable"
    )
    FRAMEWORK = "com.apple.product-type.framework"
    STATIC_LIBRARY = "com.apple.product-type.library.static"
    DYNAMIC_LIBRARY = "com.apple.product-type.library.dynamic"
    BUNDLE = "com.apple.product-type.bundle"
    TOOL = "com.apple.product-type.tool"
    UNIT_TEST_BUNDLE = "com.apple.product-type.bundle.unit-test"
    UI_TEST_BUNDLE = "com.apple.product-type.bundle.ui-testing"
    APP_EXTENSION = "com.apple.product-type.app-extension"
    WATCH_EXTENSION = "com.apple.product-type.watchkit-extension"
    WATCH2_EXTENSION = "com.apple.product-type.watchkit2-extension"
    MESSAGES_APPLICATION = "com.apple.product-type.application.messages"
    MESSAGES_EXTENSION = "com.apple.product-type.app-extension.messages"
    XPC_SERVICE = "com.apple.product-type.xpc-service"

    @property
    def symbol_type(self) -> str:
        return self.name.lower()


ReferenceT = TypeVar("ReferenceT", bound="XcodeObject")


@dataclass
class Reference(Generic[ReferenceT]):
    id: XcodeID
    comment: Optional[str] = None


# Base class for all Xcode objects
@dataclass
class XcodeObject(ABC):
    # ID will be generated in __post_init__, the arena may re-key on collision
    id: XcodeID = field(init=False)

    def __post_init__(self) -> None:
        self.id = generate_id(self.key())

    @abstractmethod
    def key(self) -> str:
        pass

    @property
    def display_name(self) -> str:
        name = getattr(self, "name", None)
        if name:
            return name
        path = getattr(self, "path", None)
        if path:
            return path.rsplit("/", 1)[-1]
        return self.__class__.__name__


# PBX* object types
@dataclass
class PBXFileReference(XcodeObject):
    name: Optional[str]
    path: str
    sourceTree: SourceTree = SourceTree.GROUP
    fileType: Optional[FileType] = None
    explicitFileType: Optional[FileType] = None
    includeInIndex: Optional[int] = None

    def key(self) -> str:
        return f"PBXFileReference:{self.path}"


@dataclass
class PBXBuildFile(XcodeObject):
    fileRef: Reference[PBXFileReference]
    settings: Optional[Dict[str, Any]] = None

    def key(self) -> str:
        return f"PBXBuildFile:{self.fileRef.id}"


@dataclass
class BuildPhase(XcodeObject):
    files: List[Reference[PBXBuildFile]] = field(default_factory=list)
    target_name: str = ""  # Name of the target this build phase was created for
    buildActionMask: int = 2147483647
    runOnlyForDeploymentPostprocessing: int = 0

    def key(self) -> str:
        return f"{self.__class__.__name__}:{self.target_name}"


@dataclass
class PBXSourcesBuildPhase(BuildPhase):
    pass


@dataclass
class PBXHeadersBuildPhase(BuildPhase):
    pass


@dataclass
class PBXFrameworksBuildPhase(BuildPhase):
    pass


@dataclass
class PBXResourcesBuildPhase(BuildPhase):
    pass


@dataclass
class PBXCopyFilesBuildPhase(BuildPhase):
    name: Optional[str] = None
    dstPath: str = ""
    dstSubfolderSpec: int = 16

    def key(self) -> str:
        return f"{self.__class__.__name__}:{self.target_name}:{self.name}"


@dataclass
class PBXShellScriptBuildPhase(BuildPhase):
    name: Optional[str] = None
    shellScript: str = ""
    shellPath: str = "/bin/sh"
    inputPaths: Optional[List[str]] = None
    outputPaths: Optional[List[str]] = None
    inputFileListPaths: Optional[List[str]] = None
    outputFileListPaths: Optional[List[str]] = None
    showEnvVarsInLog: Optional[str] = None
    dependencyFile: Optional[str] = None

    def key(self) -> str:
        return f"{self.__class__.__name__}:{self.target_name}:{self.name}"


AnyBuildPhase = Union[
    PBXSourcesBuildPhase,
    PBXHeadersBuildPhase,
    PBXFrameworksBuildPhase,
    PBXResourcesBuildPhase,
    PBXCopyFilesBuildPhase,
    PBXShellScriptBuildPhase,
]


@dataclass
class PBXGroup(XcodeObject):
    name: Optional[str]
    children: List[Reference[Union["PBXGroup", PBXFileReference]]] = field(
        default_factory=list
    )
    sourceTree: SourceTree = SourceTree.GROUP
    path: Optional[str] = None
    group_id: Optional[str] = None  # Optional unique identifier for the group

    def key(self) -> str:
        if self.path:
            return f"PBXGroup:{self.name}:{self.path}"
        elif self.group_id:
            return f"PBXGroup:{self.name}:{self.group_id}"
        return f"PBXGroup:{self.name}"


@dataclass
class PBXNativeTarget(XcodeObject):
    name: str
    productType: ProductType
    buildPhases: List[Reference[AnyBuildPhase]] = field(default_factory=list)
    productName: Optional[str] = None

    def key(self) -> str:
        return f"PBXNativeTarget:{self.name}"

    @property
    def symbol_type(self) -> str:
        return self.productType.symbol_type


@dataclass
class PBXProject(XcodeObject):
    name: str
    mainGroup: Reference[PBXGroup]
    targets: List[Reference[PBXNativeTarget]] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)
    compatibilityVersion: Optional[str] = "Xcode 14.0"

    def key(self) -> str:
        return f"PBXProject:{self.name}"


ObjectT = TypeVar("ObjectT", bound=XcodeObject)


# Arena holding every object of one project
class XcodeProject:
    def __init__(
        self,
        name: str,
        compatibility_version: Optional[str] = "Xcode 14.0",
        object_version: int = 56,
    ):
        self.objects: Dict[XcodeID, XcodeObject] = {}
        # child id -> owning group id
        self._parents: Dict[XcodeID, XcodeID] = {}
        self.object_version = object_version
        main_group = self.add(PBXGroup(name=None, group_id="main"))
        self.root_object = self.add(
            PBXProject(
                name=name,
                mainGroup=Reference(main_group.id),
                compatibilityVersion=compatibility_version,
            )
        )

    # -- arena ---------------------------------------------------------------

    def add(self, obj: ObjectT) -> ObjectT:
        if obj.id in self.objects and self.objects[obj.id] is not obj:
            base = obj.key()
            n = 1
            while obj.id in self.objects:
                obj.id = generate_id(f"{base}#{n}")
                n += 1
        self.objects[obj.id] = obj
        return obj

    def get(self, ref: Union[Reference, XcodeID, str]) -> Optional[XcodeObject]:
        if isinstance(ref, Reference):
            ref = ref.id
        return self.objects.get(ref)

    def contains(self, obj: XcodeObject) -> bool:
        return self.objects.get(obj.id) is obj

    def resolve(self, refs: List[Reference]) -> List[Any]:
        return [self.objects[ref.id] for ref in refs if ref.id in self.objects]

    def remove(self, obj: Optional[XcodeObject]) -> None:
        if obj is None or not self.contains(obj):
            return
        if isinstance(obj, PBXGroup):
            for child in self.resolve(list(obj.children)):
                self.remove(child)
        if isinstance(obj, PBXFileReference):
            for phase in list(self._all_build_phases()):
                self.remove_file_reference(phase, obj)
        parent_id = self._parents.pop(obj.id, None)
        if parent_id is not None and parent_id in self.objects:
            parent = self.objects[parent_id]
            parent.children = [c for c in parent.children if c.id != obj.id]
        del self.objects[obj.id]

    def _all_build_phases(self) -> Iterator[BuildPhase]:
        for obj in list(self.objects.values()):
            if isinstance(obj, BuildPhase):
                yield obj

    # -- groups ----------------------------------------------------------------

    @property
    def main_group(self) -> PBXGroup:
        return self.objects[self.root_object.mainGroup.id]

    def parent_of(self, obj: XcodeObject) -> Optional[PBXGroup]:
        parent_id = self._parents.get(obj.id)
        return self.objects.get(parent_id) if parent_id else None

    def add_child(self, parent: PBXGroup, child: XcodeObject) -> None:
        self.add(child)
        parent.children.append(Reference(child.id, child.display_name))
        self._parents[child.id] = parent.id

    def new_group(self, parent: PBXGroup, name: str) -> PBXGroup:
        group = PBXGroup(name=name, group_id=f"{parent.id}/{name}")
        self.add_child(parent, group)
        return group

    def children_groups(self, group: PBXGroup) -> List[PBXGroup]:
        return [c for c in self.resolve(group.children) if isinstance(c, PBXGroup)]

    def recursive_children_groups(self, group: PBXGroup) -> List[PBXGroup]:
        result: List[PBXGroup] = []
        for child in self.children_groups(group):
            result.append(child)
            result.extend(self.recursive_children_groups(child))
        return result

    def files(self, group: PBXGroup) -> List[PBXFileReference]:
        return [
            c for c in self.resolve(group.children) if isinstance(c, PBXFileReference)
        ]

    def is_empty(self, group: PBXGroup) -> bool:
        return not group.children

    def group_named(self, parent: PBXGroup, name: str) -> Optional[PBXGroup]:
        return next((g for g in self.children_groups(parent) if g.name == name), None)

    def find_subpath(self, path: str, create: bool = False) -> Optional[PBXGroup]:
        group = self.main_group
        for part in path.split("/"):
            child = self.group_named(group, part)
            if child is None:
                if not create:
                    return None
                child = self.new_group(group, part)
            group = child
        return group

    def find_file_by_path(
        self, group: PBXGroup, path: str
    ) -> Optional[PBXFileReference]:
        return next((f for f in self.files(group) if f.path == path), None)

    def new_file(
        self,
        group: PBXGroup,
        path: str,
        source_tree: SourceTree = SourceTree.GROUP,
    ) -> PBXFileReference:
        ref = PBXFileReference(
            name=path.rsplit("/", 1)[-1],
            path=path,
            sourceTree=source_tree,
            fileType=FileType.from_extension(os.path.splitext(path)[1]),
        )
        self.add_child(group, ref)
        return ref

    @property
    def frameworks_group(self) -> PBXGroup:
        return self.find_subpath("Frameworks", create=True)

    # -- targets ---------------------------------------------------------------

    @property
    def targets(self) -> List[PBXNativeTarget]:
        return self.resolve(self.root_object.targets)

    def new_native_target(
        self, name: str, product_type: ProductType
    ) -> PBXNativeTarget:
        target = self.add(PBXNativeTarget(name=name, productType=product_type, productName=name))
        self.root_object.targets.append(Reference(target.id, name))
        return target

    def build_phases(self, target: PBXNativeTarget) -> List[AnyBuildPhase]:
        return self.resolve(target.buildPhases)

    def shell_script_build_phases(
        self, target: PBXNativeTarget
    ) -> List[PBXShellScriptBuildPhase]:
        return [
            p
            for p in self.build_phases(target)
            if isinstance(p, PBXShellScriptBuildPhase)
        ]

    def append_build_phase(self, target: PBXNativeTarget, phase: BuildPhase) -> None:
        self.add(phase)
        target.buildPhases.append(Reference(phase.id, phase.display_name))

    def remove_build_phase(self, target: PBXNativeTarget, phase: BuildPhase) -> None:
        target.buildPhases = [r for r in target.buildPhases if r.id != phase.id]
        if not self._is_phase_referenced(phase):
            self.objects.pop(phase.id, None)

    def _is_phase_referenced(self, phase: BuildPhase) -> bool:
        return any(
            ref.id == phase.id for t in self.targets for ref in t.buildPhases
        )

    def _phase_of_type(self, target: PBXNativeTarget, phase_type: type) -> BuildPhase:
        phase = next(
            (p for p in self.build_phases(target) if type(p) is phase_type), None
        )
        if phase is None:
            phase = phase_type(target_name=target.name)
            self.append_build_phase(target, phase)
        return phase

    def frameworks_build_phase(self, target: PBXNativeTarget) -> PBXFrameworksBuildPhase:
        return self._phase_of_type(target, PBXFrameworksBuildPhase)

    def resources_build_phase(self, target: PBXNativeTarget) -> PBXResourcesBuildPhase:
        return self._phase_of_type(target, PBXResourcesBuildPhase)

    # -- build files -----------------------------------------------------------

    def build_files(self, phase: BuildPhase) -> List[PBXBuildFile]:
        return self.resolve(phase.files)

    def build_file(
        self, phase: BuildPhase, file_ref: PBXFileReference
    ) -> Optional[PBXBuildFile]:
        return next(
            (bf for bf in self.build_files(phase) if bf.fileRef.id == file_ref.id),
            None,
        )

    def file_ref_of(self, build_file: PBXBuildFile) -> Optional[PBXFileReference]:
        return self.get(build_file.fileRef)

    def add_file_reference(
        self, phase: BuildPhase, file_ref: PBXFileReference
    ) -> PBXBuildFile:
        existing = self.build_file(phase, file_ref)
        if existing is not None:
            return existing
        build_file = self.add(
            PBXBuildFile(fileRef=Reference(file_ref.id, file_ref.display_name))
        )
        phase.files.append(Reference(build_file.id, file_ref.display_name))
        return build_file

    def remove_build_file(self, phase: BuildPhase, build_file: PBXBuildFile) -> None:
        phase.files = [r for r in phase.files if r.id != build_file.id]
        self.objects.pop(build_file.id, None)

    def remove_file_reference(
        self, phase: BuildPhase, file_ref: PBXFileReference
    ) -> None:
        build_file = self.build_file(phase, file_ref)
        if build_file is not None:
            self.remove_build_file(phase, build_file)

    # -- on demand resources ---------------------------------------------------

    def add_on_demand_resources(
        self,
        target: PBXNativeTarget,
        tag_file_refs: Dict[str, List[PBXFileReference]],
    ) -> None:
        phase = self.resources_build_phase(target)
        for tag, file_refs in tag_file_refs.items():
            for file_ref in file_refs:
                build_file = self.add_file_reference(phase, file_ref)
                build_file.settings = build_file.settings or {}
                asset_tags = build_file.settings.setdefault("ASSET_TAGS", [])
                if tag not in asset_tags:
                    asset_tags.append(tag)

    def remove_on_demand_resources(
        self,
        target: PBXNativeTarget,
        tag_file_refs: Dict[str, List[PBXFileReference]],
    ) -> None:
        phase = next(
            (p for p in self.build_phases(target) if type(p) is PBXResourcesBuildPhase),
            None,
        )
        if phase is None:
            return
        for tag, file_refs in tag_file_refs.items():
            for file_ref in file_refs:
                build_file = self.build_file(phase, file_ref)
                if build_file is None:
                    continue
                asset_tags = (build_file.settings or {}).get("ASSET_TAGS", [])
                if tag in asset_tags:
                    asset_tags.remove(tag)
                if not asset_tags:
                    self.remove_build_file(phase, build_file)

from xcintegrator.project.model import (
    FileType,
    PBXBuildFile,
    PBXCopyFilesBuildPhase,
    PBXFileReference,
    PBXFrameworksBuildPhase,
    PBXGroup,
    PBXHeadersBuildPhase,
    PBXNativeTarget,
    PBXProject,
    PBXResourcesBuildPhase,
    PBXShellScriptBuildPhase,
    PBXSourcesBuildPhase,
    ProductType,
    Reference,
    SourceTree,
    XcodeProject,
)

from xcintegrator.details.targets.frameworks import BuildType, FrameworkPaths, XCFramework
from xcintegrator.details.targets.script_phase import ExecutionPosition, ScriptPhaseSpec
from xcintegrator.details.targets.target import IntegrationTarget, LibraryTarget

from xcintegrator.config import Config
from xcintegrator.details.targets import (
    BuildType,
    ExecutionPosition,
    FrameworkPaths,
    IntegrationTarget,
    LibraryTarget,
    ScriptPhaseSpec,
    XCFramework,
)
from xcintegrator.integrator import TargetIntegrator, integrate

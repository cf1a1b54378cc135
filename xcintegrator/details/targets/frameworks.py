from dataclasses import dataclass
from enum import Enum


class BuildType(Enum):
    STATIC_LIBRARY = "static library"
    DYNAMIC_LIBRARY = "dynamic library"
    STATIC_FRAMEWORK = "static framework"
    DYNAMIC_FRAMEWORK = "dynamic framework"

    @property
    def is_dynamic_framework(self) -> bool:
        return self is BuildType.DYNAMIC_FRAMEWORK

    @staticmethod
    def parse(value) -> "BuildType":
        if isinstance(value, BuildType):
            return value
        try:
            return BuildType(value)
        except ValueError:
            raise ValueError(f"unknown build type {value!r}") from None


# Paths of a vendored or built framework as consumed by the embed script
@dataclass(frozen=True)
class FrameworkPaths:
    source_path: str


# A multi-slice framework bundle vendored by a library target
@dataclass(frozen=True)
class XCFramework:
    name: str
    target_name: str
    build_type: BuildType = BuildType.DYNAMIC_FRAMEWORK

    def __post_init__(self) -> None:
        object.__setattr__(self, "build_type", BuildType.parse(self.build_type))

    @property
    def intermediate_dir(self) -> str:
        return f"${{PODS_XCFRAMEWORKS_BUILD_DIR}}/{self.target_name}"

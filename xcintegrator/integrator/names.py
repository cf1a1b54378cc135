# Reserved build phase names.
#
# Every phase owned by the integrator has one entry here: its stem, the prefix of the
# current spelling and every spelling older releases wrote. A phase found under a
# legacy spelling, or under any name ending with the stem, is renamed to the current
# spelling instead of being duplicated.

from dataclasses import dataclass
from typing import Optional, Tuple


# Prefix of every build phase added to the user project
BUILD_PHASE_PREFIX = "[CP] "

# Prefix of every build phase declared by the user for a target
USER_BUILD_PHASE_PREFIX = "[CP-User] "


@dataclass(frozen=True)
class PhaseName:
    stem: str
    prefix: str = BUILD_PHASE_PREFIX
    legacy: Tuple[str, ...] = ()

    @property
    def current(self) -> str:
        return self.prefix + self.stem

    def is_current(self, name: Optional[str]) -> bool:
        return name == self.current

    def is_legacy(self, name: Optional[str]) -> bool:
        return name in self.legacy

    def matches(self, name: Optional[str]) -> bool:
        if name is None:
            return False
        return self.is_current(name) or self.is_legacy(name) or name.endswith(self.stem)


CHECK_MANIFEST = PhaseName(
    "Check Pods Manifest.lock",
    legacy=("Check Pods Manifest.lock", "📦 Check Pods Manifest.lock"),
)
EMBED_FRAMEWORKS = PhaseName(
    "Embed Pods Frameworks",
    legacy=("Embed Pods Frameworks", "📦 Embed Pods Frameworks"),
)
COPY_XCFRAMEWORKS = PhaseName("Copy XCFrameworks")
COPY_RESOURCES = PhaseName(
    "Copy Pods Resources",
    legacy=("Copy Pods Resources", "📦 Copy Pods Resources"),
)

# Phases written by previous releases that no longer exist
REMOVED_PHASE_NAMES: Tuple[PhaseName, ...] = (PhaseName("Prepare Artifacts"),)


def user_phase_name(name: str) -> PhaseName:
    # User phases are matched on their full prefixed name, never on the bare stem
    return PhaseName(USER_BUILD_PHASE_PREFIX + name, prefix="")


def is_user_phase_name(name: Optional[str]) -> bool:
    return name is not None and name.startswith(USER_BUILD_PHASE_PREFIX)


def strip_user_prefix(name: str) -> str:
    return name.replace(USER_BUILD_PHASE_PREFIX, "", 1)

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

from xcintegrator.details.as_iterator import optional_list


class ExecutionPosition(Enum):
    ANY = "any"
    BEFORE_COMPILE = "before_compile"
    AFTER_COMPILE = "after_compile"
    BEFORE_HEADERS = "before_headers"
    AFTER_HEADERS = "after_headers"

    @staticmethod
    def parse(value: Union[None, str, "ExecutionPosition"]) -> "ExecutionPosition":
        if isinstance(value, ExecutionPosition):
            return value
        if value is None or value == "":
            return ExecutionPosition.ANY
        try:
            return ExecutionPosition(value)
        except ValueError:
            raise ValueError(f"Unknown execution position `{value}`") from None


# Script phase declared by the user for a target
@dataclass(frozen=True)
class ScriptPhaseSpec:
    name: str
    script: str
    shell_path: Optional[str] = None
    input_files: Optional[List[str]] = None
    output_files: Optional[List[str]] = None
    input_file_lists: Optional[List[str]] = None
    output_file_lists: Optional[List[str]] = None
    dependency_file: Optional[str] = None
    show_env_vars_in_log: Optional[bool] = None
    execution_position: ExecutionPosition = ExecutionPosition.ANY

    def __post_init__(self) -> None:
        for attr in ("input_files", "output_files", "input_file_lists", "output_file_lists"):
            object.__setattr__(self, attr, optional_list(getattr(self, attr)))
        object.__setattr__(
            self, "execution_position", ExecutionPosition.parse(self.execution_position)
        )

    @staticmethod
    def from_dict(values: Dict) -> "ScriptPhaseSpec":
        values = dict(values)
        show_env = values.pop("show_env_vars_in_log", None)
        if isinstance(show_env, str):
            show_env = show_env != "0"
        return ScriptPhaseSpec(show_env_vars_in_log=show_env, **values)

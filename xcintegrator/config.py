from typing import Callable, Optional


def _no_xcconfig_integration(target, native_targets) -> None:
    return None


class Config:
    def __init__(
        self,
        use_input_output_paths: bool = True,
        max_input_output_paths: int = 1000,
        xcconfig_integrator: Optional[Callable] = None,
        **kwargs
    ):
        self.use_input_output_paths = use_input_output_paths
        self.max_input_output_paths = max_input_output_paths
        self.xcconfig_integrator = xcconfig_integrator or _no_xcconfig_integration
        self.__dict__.update(kwargs)

from .step_10_refresh_package_index import RefreshPackageIndexStep
from .step_20_install_build_packages import InstallBuildPackagesStep
from .step_25_install_inference_runtime import InstallInferenceRuntimeStep
from .step_30_install_toolchain_manager import InstallToolchainManagerStep
from .step_40_persist_toolchain_env import PersistToolchainEnvStep
from .step_45_load_toolchain_env import LoadToolchainEnvStep
from .step_50_add_cross_target import AddCrossTargetStep
from .step_60_install_cross_compiler import InstallCrossCompilerStep
from .step_90_post_install_checks import PostInstallChecksStep

__all__ = [
    "RefreshPackageIndexStep",
    "InstallBuildPackagesStep",
    "InstallInferenceRuntimeStep",
    "InstallToolchainManagerStep",
    "PersistToolchainEnvStep",
    "LoadToolchainEnvStep",
    "AddCrossTargetStep",
    "InstallCrossCompilerStep",
    "PostInstallChecksStep",
]

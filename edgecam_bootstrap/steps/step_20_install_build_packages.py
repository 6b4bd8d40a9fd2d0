from __future__ import annotations

from ._packages import InstallPackageGroupStep


class InstallBuildPackagesStep(InstallPackageGroupStep):
    step_id = "20_install_build_packages"
    group = "build_toolchain"

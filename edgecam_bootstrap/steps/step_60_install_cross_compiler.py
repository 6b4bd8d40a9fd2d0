from __future__ import annotations

from ._packages import InstallPackageGroupStep


class InstallCrossCompilerStep(InstallPackageGroupStep):
    # apt (not apt-get) and no -y: the user confirms on the terminal.
    step_id = "60_install_cross_compiler"
    group = "cross_compiler"

from __future__ import annotations

from ._packages import InstallPackageGroupStep


class InstallInferenceRuntimeStep(InstallPackageGroupStep):
    step_id = "25_install_inference_runtime"
    group = "inference_runtime"

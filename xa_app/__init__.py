"""Application layer for xcodearchive: the build, sign, package and archive pipeline."""

from xa_app.api import PipelineController, PipelineResult, RunConfiguration

__version__ = "1.1.0"

__all__ = ["PipelineController", "PipelineResult", "RunConfiguration", "__version__"]

"""Run orchestration for the Radio Venus curation pipeline."""

from radio_venus.pipeline.catalog_pipeline import CatalogPipeline
from radio_venus.pipeline.context import RunContext
from radio_venus.pipeline.progress_tracker import ProgressTracker

__all__ = [
    "CatalogPipeline",
    "ProgressTracker",
    "RunContext",
]

"""Tagging services: pipeline, batch controller and engine container."""

from .batch import BatchController
from .container import TaggingContainer
from .pipeline import TagGenerationPipeline

__all__ = [
    "BatchController",
    "TaggingContainer",
    "TagGenerationPipeline",
]

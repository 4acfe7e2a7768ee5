"""
PipelineLib - Filter parameter application pipeline

This module provides the FilterPipeline, its state models, and the
persisted usage counter behind the review prompt.
"""

from IF_Libs.PipelineLib.parameters import PARAMETER_RANGES, ParameterSet, PipelineState
from IF_Libs.PipelineLib.usage_counter import UsageCounter
from IF_Libs.PipelineLib.filter_pipeline import FilterPipeline

__all__ = [
    "PARAMETER_RANGES",
    "ParameterSet",
    "PipelineState",
    "UsageCounter",
    "FilterPipeline",
]

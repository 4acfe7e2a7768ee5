"""
FilterLib - Filter catalogue and image processing

This module provides the filter kinds and their accepted parameters,
the Pillow/NumPy filter operations, and the filter engine the pipeline
drives.
"""

from IF_Libs.FilterLib.filter_kinds import (
    FilterKind,
    ParameterKey,
    accepted_parameters,
    accepts_parameter,
    parse_filter_kind,
    parse_parameter_key,
    get_filter_options,
)
from IF_Libs.FilterLib.filter_engine import (
    FilterInstance,
    FilterOperation,
    FilterOperationRegistry,
    RenderContext,
    create_filter,
    get_default_registry,
)

__all__ = [
    "FilterKind",
    "ParameterKey",
    "accepted_parameters",
    "accepts_parameter",
    "parse_filter_kind",
    "parse_parameter_key",
    "get_filter_options",
    "FilterInstance",
    "FilterOperation",
    "FilterOperationRegistry",
    "RenderContext",
    "create_filter",
    "get_default_registry",
]

"""
Pipeline data models for InstaFilter.

Classes:
    ParameterSet: Live values of the three adjustable parameters
    PipelineState: Filter kind, parameters and bound source image
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from IF_Libs.constants import (
    DEFAULT_FILTER_NAME,
    DEFAULT_INTENSITY,
    DEFAULT_RADIUS,
    DEFAULT_SCALE,
    INTENSITY_RANGE,
    RADIUS_RANGE,
    SCALE_RANGE,
)
from IF_Libs.FilterLib.filter_kinds import FilterKind, ParameterKey, parse_parameter_key

PARAMETER_RANGES = {
    ParameterKey.INTENSITY: INTENSITY_RANGE,
    ParameterKey.RADIUS: RADIUS_RANGE,
    ParameterKey.SCALE: SCALE_RANGE,
}


@dataclass
class ParameterSet:
    """Current parameter values.

    Ranges (enforced by the input surface, not here):
        intensity: 0-1
        radius: 0-200
        scale: 0-100
    """
    intensity: float = DEFAULT_INTENSITY
    radius: float = DEFAULT_RADIUS
    scale: float = DEFAULT_SCALE

    def get(self, key: ParameterKey) -> float:
        return getattr(self, parse_parameter_key(key).value)

    def set(self, key: ParameterKey, value: float) -> None:
        """
        Set one value.

        Raises:
            ValueError: If key is unknown or value is inf/nan
            TypeError: If value is not a number
        """
        key = parse_parameter_key(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{key.value} must be a number, got {type(value)}")
        try:
            number = float(value)
        except OverflowError:
            raise ValueError(f"{key.value} is too large: {value}") from None
        if not math.isfinite(number):
            raise ValueError(f"{key.value} must be finite, got {value}")
        setattr(self, key.value, number)


@dataclass
class PipelineState:
    """Everything a render depends on.

    Attributes:
        kind: Selected filter
        parameters: Current parameter values
        source: Bound source image, or None while unbound
    """
    kind: FilterKind = FilterKind(DEFAULT_FILTER_NAME)
    parameters: ParameterSet = field(default_factory=ParameterSet)
    source: Optional[Any] = None

    @property
    def is_bound(self) -> bool:
        return self.source is not None

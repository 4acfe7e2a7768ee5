"""
Filter catalogue for InstaFilter.

Defines the closed set of filter kinds, the parameter keys a filter can
accept, and the static table mapping each kind to the keys it accepts.

Classes:
    FilterKind: Enumeration of the available filters
    ParameterKey: Enumeration of the adjustable parameters

Functions:
    accepted_parameters: Keys a filter kind accepts
    accepts_parameter: Check whether a kind accepts a key
    parse_filter_kind: Resolve a kind from its name or display label
    parse_parameter_key: Resolve a key from its name
    get_filter_options: (kind, label) pairs for menus
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Tuple, Union

from IF_Libs.constants import PARAM_INTENSITY, PARAM_RADIUS, PARAM_SCALE


class ParameterKey(Enum):
    """Adjustable filter parameters."""
    INTENSITY = PARAM_INTENSITY
    RADIUS = PARAM_RADIUS
    SCALE = PARAM_SCALE


class FilterKind(Enum):
    """Filters offered by the application, valued by their stable names."""
    CRYSTALLIZE = "Crystallize"
    EDGES = "Edges"
    GAUSSIAN_BLUR = "GaussianBlur"
    PIXELLATE = "Pixellate"
    SEPIA_TONE = "SepiaTone"
    UNSHARP_MASK = "UnsharpMask"
    VIGNETTE = "Vignette"

    @property
    def label(self) -> str:
        return FILTER_LABELS[self]


FILTER_LABELS: Dict[FilterKind, str] = {
    FilterKind.CRYSTALLIZE: "Crystallize",
    FilterKind.EDGES: "Edges",
    FilterKind.GAUSSIAN_BLUR: "Gaussian Blur",
    FilterKind.PIXELLATE: "Pixellate",
    FilterKind.SEPIA_TONE: "Sepia Tone",
    FilterKind.UNSHARP_MASK: "Unsharp Mask",
    FilterKind.VIGNETTE: "Vignette",
}

ACCEPTED_PARAMETERS: Dict[FilterKind, FrozenSet[ParameterKey]] = {
    FilterKind.CRYSTALLIZE: frozenset({ParameterKey.RADIUS}),
    FilterKind.EDGES: frozenset({ParameterKey.INTENSITY}),
    FilterKind.GAUSSIAN_BLUR: frozenset({ParameterKey.RADIUS}),
    FilterKind.PIXELLATE: frozenset({ParameterKey.SCALE}),
    FilterKind.SEPIA_TONE: frozenset({ParameterKey.INTENSITY}),
    FilterKind.UNSHARP_MASK: frozenset({ParameterKey.INTENSITY, ParameterKey.RADIUS}),
    FilterKind.VIGNETTE: frozenset({ParameterKey.INTENSITY, ParameterKey.RADIUS}),
}

# Every kind must be listed in both tables
_missing = set(FilterKind) - set(ACCEPTED_PARAMETERS) | set(FilterKind) - set(FILTER_LABELS)
if _missing:
    raise RuntimeError(f"Filter tables incomplete, missing: {sorted(k.name for k in _missing)}")


def accepted_parameters(kind: FilterKind) -> FrozenSet[ParameterKey]:
    """
    Get the parameter keys a filter kind accepts.

    Args:
        kind: The filter kind

    Returns:
        Frozen set of accepted ParameterKey values
    """
    return ACCEPTED_PARAMETERS[kind]


def accepts_parameter(kind: FilterKind, key: ParameterKey) -> bool:
    return key in ACCEPTED_PARAMETERS[kind]


def parse_filter_kind(value: Union[FilterKind, str]) -> FilterKind:
    """
    Resolve a filter kind from an enum member, its name, value or label.

    Matching ignores case, spaces and underscores, so "Sepia Tone",
    "SepiaTone" and "SEPIA_TONE" all resolve to FilterKind.SEPIA_TONE.

    Args:
        value: FilterKind or string identifying one

    Returns:
        The matching FilterKind

    Raises:
        ValueError: If no kind matches
    """
    if isinstance(value, FilterKind):
        return value

    wanted = _normalize(str(value))
    for kind in FilterKind:
        if wanted in (_normalize(kind.name), _normalize(kind.value), _normalize(kind.label)):
            return kind

    valid = ", ".join(kind.value for kind in FilterKind)
    raise ValueError(f"Unknown filter kind: {value!r}. Valid kinds: {valid}")


def parse_parameter_key(value: Union[ParameterKey, str]) -> ParameterKey:
    """
    Resolve a parameter key from an enum member or its name.

    Raises:
        ValueError: If no key matches
    """
    if isinstance(value, ParameterKey):
        return value

    wanted = _normalize(str(value))
    for key in ParameterKey:
        if wanted in (_normalize(key.name), _normalize(key.value)):
            return key

    valid = ", ".join(key.value for key in ParameterKey)
    raise ValueError(f"Unknown parameter key: {value!r}. Valid keys: {valid}")


def get_filter_options() -> List[Tuple[FilterKind, str]]:
    """Get (kind, label) pairs in menu order."""
    return [(kind, kind.label) for kind in FilterKind]


def _normalize(text: str) -> str:
    return text.replace(" ", "").replace("_", "").lower()

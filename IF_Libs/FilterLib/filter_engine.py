"""
Filter Engine: stateful filter instances and the shared render context.

A FilterInstance is the configurable object the pipeline drives. It holds
its bound input image and its own value for every parameter its kind
accepts, starting from per-kind defaults. Values that are never forwarded
keep those defaults. The RenderContext turns an instance's output into a
standalone raster image.

Classes:
    FilterOperation: Registered operation and defaults for one filter kind
    FilterOperationRegistry: Registry mapping filter kinds to operations
    FilterInstance: Configurable filter bound to one input image
    RenderContext: Rasterizes filter output

Functions:
    get_default_registry: Get the global registry (singleton)
    create_filter: Create a FilterInstance from the default registry
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
import logging

from IF_Libs.constants import RENDER_MODE
from IF_Libs.errors import RenderError
from IF_Libs.FilterLib.filter_kinds import FilterKind, ParameterKey, accepted_parameters
from IF_Libs.FilterLib.filter_ops import (
    apply_crystallize,
    apply_edges,
    apply_gaussian_blur,
    apply_pixellate,
    apply_sepia_tone,
    apply_unsharp_mask,
    apply_vignette,
)

logger = logging.getLogger(__name__)

# Operation signature: (image, **parameter values keyed by ParameterKey.value)
OperationFunction = Callable[..., Any]


@dataclass
class FilterOperation:
    """Operation and parameter defaults for one filter kind.

    Attributes:
        kind: The filter kind implemented
        function: Callable taking the image and keyword parameter values
        defaults: Starting value for every accepted parameter
    """
    kind: FilterKind
    function: OperationFunction
    defaults: Dict[ParameterKey, float] = field(default_factory=dict)

    def __post_init__(self):
        expected = accepted_parameters(self.kind)
        if set(self.defaults) != set(expected):
            raise ValueError(
                f"Defaults for {self.kind.value} must cover exactly "
                f"{sorted(key.value for key in expected)}, "
                f"got {sorted(key.value for key in self.defaults)}"
            )


class FilterOperationRegistry:
    """
    Registry of filter operations keyed by FilterKind.

    Example:
        >>> registry = FilterOperationRegistry()
        >>> registry.register(FilterOperation(FilterKind.EDGES, apply_edges,
        ...                                   {ParameterKey.INTENSITY: 1.0}))
        >>> instance = registry.create(FilterKind.EDGES)
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._operations: Dict[FilterKind, FilterOperation] = {}

    def register(self, operation: FilterOperation) -> None:
        """
        Register an operation.

        Raises:
            ValueError: If the function is not callable
            RuntimeError: If the kind is already registered
        """
        if not callable(operation.function):
            raise ValueError(f"function must be callable, got {type(operation.function)}")

        if operation.kind in self._operations:
            raise RuntimeError(
                f"Filter kind '{operation.kind.value}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._operations[operation.kind] = operation
        logger.debug(f"Registered operation for filter kind: {operation.kind.value}")

    def unregister(self, kind: FilterKind) -> bool:
        if kind in self._operations:
            del self._operations[kind]
            logger.debug(f"Unregistered operation for filter kind: {kind.value}")
            return True
        return False

    def get_operation(self, kind: FilterKind) -> FilterOperation:
        """
        Get the operation for a filter kind.

        Raises:
            KeyError: If kind is not registered
        """
        if kind not in self._operations:
            available = ", ".join(k.value for k in self.list_kinds())
            raise KeyError(
                f"No operation registered for filter kind '{kind.value}'. "
                f"Available kinds: {available}"
            )
        return self._operations[kind]

    def has_operation(self, kind: FilterKind) -> bool:
        return kind in self._operations

    def list_kinds(self) -> List[FilterKind]:
        return sorted(self._operations, key=lambda kind: kind.value)

    def create(self, kind: FilterKind) -> "FilterInstance":
        """Create a fresh FilterInstance for a kind."""
        return FilterInstance(self.get_operation(kind))


class FilterInstance:
    """
    A configurable filter bound to (at most) one input image.

    Parameter values persist on the instance between renders; only keys in
    ``input_keys`` can be set.
    """

    def __init__(self, operation: FilterOperation):
        self._operation = operation
        self._values: Dict[ParameterKey, float] = dict(operation.defaults)
        self.input_image: Optional[Any] = None

    @property
    def kind(self) -> FilterKind:
        return self._operation.kind

    @property
    def input_keys(self) -> frozenset:
        return frozenset(self._values)

    def set_value(self, key: ParameterKey, value: float) -> None:
        """
        Set one parameter value.

        Raises:
            KeyError: If the filter does not accept ``key``
        """
        if key not in self._values:
            raise KeyError(f"{self.kind.value} does not accept parameter '{key.value}'")
        self._values[key] = float(value)

    def value(self, key: ParameterKey) -> float:
        return self._values[key]

    def output_image(self) -> Optional[Any]:
        """
        Apply the filter to the input image.

        Returns:
            Filtered PIL Image, or None if no input image is set
        """
        if self.input_image is None:
            return None

        kwargs = {key.value: value for key, value in self._values.items()}
        return self._operation.function(self.input_image, **kwargs)


class RenderContext:
    """Rasterizes filter output into standalone images of a fixed mode."""

    def __init__(self, mode: str = RENDER_MODE):
        self.mode = mode

    def create_image(self, output: Any) -> Any:
        """
        Rasterize the full extent of ``output``.

        Args:
            output: PIL Image produced by a FilterInstance

        Returns:
            New PIL Image in this context's mode, independent of ``output``

        Raises:
            RenderError: If the output is missing or has an empty extent
        """
        if output is None:
            raise RenderError("Filter produced no output")

        width, height = output.size
        if width <= 0 or height <= 0:
            raise RenderError(f"Filter output has empty extent: {width}x{height}")

        if output.mode == self.mode:
            return output.copy()
        return output.convert(self.mode)


# Global singleton registry
_default_registry: Optional[FilterOperationRegistry] = None


def get_default_registry() -> FilterOperationRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in operations.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = FilterOperationRegistry()
        register_default_operations(_default_registry)

    return _default_registry


def register_default_operations(registry: FilterOperationRegistry) -> None:
    """Register the built-in operation for every FilterKind."""
    registry.register(FilterOperation(
        FilterKind.CRYSTALLIZE, apply_crystallize,
        {ParameterKey.RADIUS: 20.0},
    ))
    registry.register(FilterOperation(
        FilterKind.EDGES, apply_edges,
        {ParameterKey.INTENSITY: 1.0},
    ))
    registry.register(FilterOperation(
        FilterKind.GAUSSIAN_BLUR, apply_gaussian_blur,
        {ParameterKey.RADIUS: 10.0},
    ))
    registry.register(FilterOperation(
        FilterKind.PIXELLATE, apply_pixellate,
        {ParameterKey.SCALE: 8.0},
    ))
    registry.register(FilterOperation(
        FilterKind.SEPIA_TONE, apply_sepia_tone,
        {ParameterKey.INTENSITY: 1.0},
    ))
    registry.register(FilterOperation(
        FilterKind.UNSHARP_MASK, apply_unsharp_mask,
        {ParameterKey.RADIUS: 2.5, ParameterKey.INTENSITY: 0.5},
    ))
    registry.register(FilterOperation(
        FilterKind.VIGNETTE, apply_vignette,
        {ParameterKey.RADIUS: 1.0, ParameterKey.INTENSITY: 0.0},
    ))

    logger.info("Registered default filter operations")


def create_filter(kind: FilterKind) -> FilterInstance:
    """Create a FilterInstance for ``kind`` from the default registry."""
    return get_default_registry().create(kind)

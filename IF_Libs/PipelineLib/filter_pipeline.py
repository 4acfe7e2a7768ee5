"""
Filter Pipeline for InstaFilter.

Owns the selected filter, its live parameter values and the bound source
image, and recomputes the rendered output from scratch after every change.

Only the parameters the selected filter accepts are forwarded to the filter
instance; the others keep whatever value the instance already holds.

Failures never escape a render: a missing image, a decode failure or an
empty filter result all come back as ``None``, are logged, and are kept on
``last_error``. The pipeline state is untouched by a failed render.

The pipeline does no locking. Call it from one thread; decode images
elsewhere (see ImageAcquirer) and bind them from that thread.

Example:
    >>> pipeline = FilterPipeline(counter)
    >>> pipeline.add_output_listener(show_image)
    >>> pipeline.bind_image(load_image("photo.jpg"))
    >>> pipeline.set_filter(FilterKind.VIGNETTE)
    >>> pipeline.set_parameter(ParameterKey.INTENSITY, 0.8)
"""

from typing import Any, Callable, List, Optional, Union
import logging

from IF_Libs.errors import AcquisitionError, InstaFilterError, RenderError
from IF_Libs.FilterLib.filter_engine import (
    FilterInstance,
    FilterOperationRegistry,
    RenderContext,
    get_default_registry,
)
from IF_Libs.FilterLib.filter_kinds import (
    FilterKind,
    ParameterKey,
    accepts_parameter,
    parse_filter_kind,
    parse_parameter_key,
)
from IF_Libs.ImageIOLib.image_import import ImageSource, load_image
from IF_Libs.PipelineLib.parameters import ParameterSet, PipelineState
from IF_Libs.PipelineLib.usage_counter import UsageCounter
from IF_Libs.PrefStoreLib.preference_store import PreferenceStore, default_preferences_path

logger = logging.getLogger(__name__)

OutputListener = Callable[[Optional[Any]], None]
ReviewListener = Callable[[], None]

# Errors Pillow and NumPy raise for images a filter cannot process
_RENDER_FAILURES = (RenderError, ValueError, OverflowError, OSError, MemoryError)


class FilterPipeline:
    """
    Level-triggered filter pipeline.

    Every mutation (bind_image, set_filter, set_parameter) triggers one
    render attempt, and output listeners are called with its result
    (``None`` when nothing was produced).
    """

    def __init__(
        self,
        counter: Optional[UsageCounter] = None,
        registry: Optional[FilterOperationRegistry] = None,
        context: Optional[RenderContext] = None,
    ):
        if counter is None:
            counter = UsageCounter(PreferenceStore(default_preferences_path()))

        self._counter = counter
        self._registry = registry if registry is not None else get_default_registry()
        self._context = context if context is not None else RenderContext()

        self._state = PipelineState()
        self._filter: FilterInstance = self._registry.create(self._state.kind)
        self._output: Optional[Any] = None
        self._last_error: Optional[InstaFilterError] = None

        self._output_listeners: List[OutputListener] = []
        self._review_listeners: List[ReviewListener] = []

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def kind(self) -> FilterKind:
        return self._state.kind

    @property
    def parameters(self) -> ParameterSet:
        return self._state.parameters

    @property
    def has_image(self) -> bool:
        return self._state.is_bound

    @property
    def output(self) -> Optional[Any]:
        """Most recent successfully rendered image."""
        return self._output

    @property
    def last_error(self) -> Optional[Exception]:
        """Error from the most recent failed acquisition or render, if any."""
        return self._last_error

    @property
    def filter_count(self) -> int:
        return self._counter.value

    @property
    def filter_instance(self) -> FilterInstance:
        return self._filter

    def is_parameter_enabled(self, key: Union[ParameterKey, str]) -> bool:
        """True when an image is bound and the current filter accepts ``key``."""
        return self.has_image and accepts_parameter(self._state.kind, parse_parameter_key(key))

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_output_listener(self, listener: OutputListener) -> None:
        if not callable(listener):
            raise ValueError(f"listener must be callable, got {type(listener)}")
        self._output_listeners.append(listener)

    def remove_output_listener(self, listener: OutputListener) -> bool:
        if listener in self._output_listeners:
            self._output_listeners.remove(listener)
            return True
        return False

    def add_review_listener(self, listener: ReviewListener) -> None:
        if not callable(listener):
            raise ValueError(f"listener must be callable, got {type(listener)}")
        self._review_listeners.append(listener)

    def remove_review_listener(self, listener: ReviewListener) -> bool:
        if listener in self._review_listeners:
            self._review_listeners.remove(listener)
            return True
        return False

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def bind_image(self, image: Optional[Any]) -> None:
        """
        Replace the source image and render.

        Args:
            image: Decoded PIL Image, or None to clear the binding

        Raises:
            TypeError: If image is neither None nor a PIL Image
        """
        if image is not None and not (hasattr(image, "filter") and hasattr(image, "size")):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        self._state.source = image
        self._filter.input_image = image
        if image is not None:
            logger.debug(f"Bound source image {image.size[0]}x{image.size[1]}")

        self._render_and_notify()

    def load_image(self, source: ImageSource) -> bool:
        """
        Decode ``source`` and bind it.

        Returns:
            True if the image was bound; False if it could not be acquired,
            in which case the previous binding is kept
        """
        try:
            image = load_image(source)
        except AcquisitionError as e:
            logger.warning(f"Could not acquire image: {e}")
            self._last_error = e
            return False

        self.bind_image(image)
        return True

    def set_filter(self, kind: Union[FilterKind, str]) -> None:
        """
        Select a filter, keeping the parameter values, and render.

        Counts towards the review prompt: when the usage counter reaches its
        threshold, review listeners are called and the counter restarts at 0.

        Raises:
            ValueError: If kind is unknown
        """
        kind = parse_filter_kind(kind)

        self._filter = self._registry.create(kind)
        self._filter.input_image = self._state.source
        self._state.kind = kind
        logger.debug(f"Selected filter {kind.value}")

        self._render_and_notify()

        if self._counter.increment():
            logger.info("Filter usage threshold reached, requesting review")
            for listener in list(self._review_listeners):
                listener()

    def set_parameter(self, key: Union[ParameterKey, str], value: float) -> None:
        """
        Update one parameter and render with the full parameter set.

        Raises:
            ValueError: If key is unknown or value is inf/nan
            TypeError: If value is not a number
        """
        self._state.parameters.set(key, value)
        self._render_and_notify()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> Optional[Any]:
        """
        Apply the current configuration to the bound image.

        Returns:
            New RGBA PIL Image, or None when no image is bound or the
            filter produced no output
        """
        if not self._state.is_bound:
            return None

        kind = self._state.kind
        for key in ParameterKey:
            if accepts_parameter(kind, key):
                self._filter.set_value(key, self._state.parameters.get(key))

        try:
            output = self._filter.output_image()
            if output is None:
                raise RenderError(f"{kind.value} produced no output")
            image = self._context.create_image(output)
        except _RENDER_FAILURES as e:
            error = e if isinstance(e, RenderError) else RenderError(f"{kind.value} failed: {e}")
            logger.warning(f"Render failed: {error}")
            self._last_error = error
            return None

        self._last_error = None
        logger.debug(f"Rendered {kind.value} {image.size[0]}x{image.size[1]}")
        return image

    def _render_and_notify(self) -> Optional[Any]:
        image = self.render()
        if image is not None:
            self._output = image

        for listener in list(self._output_listeners):
            listener(image)

        return image

"""
Constants and configuration values for InstaFilter.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Parameter keys (names match ParameterKey values)
PARAM_INTENSITY = "intensity"
PARAM_RADIUS = "radius"
PARAM_SCALE = "scale"

# Parameter defaults
DEFAULT_INTENSITY = 0.5
DEFAULT_RADIUS = 100.0
DEFAULT_SCALE = 50.0

# Parameter ranges offered by the input surface (min, max)
INTENSITY_RANGE = (0.0, 1.0)
RADIUS_RANGE = (0.0, 200.0)
SCALE_RANGE = (0.0, 100.0)

# Filter selected when the pipeline starts
DEFAULT_FILTER_NAME = "SepiaTone"

# Review prompt
REVIEW_PROMPT_THRESHOLD = 20
FILTER_COUNT_KEY = "filterCount"

# Preference storage
PREFERENCES_DIR_NAME = ".instafilter"
PREFERENCES_FILE_NAME = "preferences.json"

# Supported file formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
STANDARD_IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp)"
EXPORT_IMAGE_FILTER = "PNG Images (*.png);;JPEG Images (*.jpg *.jpeg)"

# Export / share
DEFAULT_OUTPUT_FORMAT = "PNG"
DEFAULT_JPEG_QUALITY = 95
OUTPUT_FILE_PREFIX = "instafilter_"
SHARE_PREVIEW_TITLE = "InstaFilter image"
ALPHA_LESS_FORMATS = {"JPEG", "BMP"}

# Rendered output mode
RENDER_MODE = "RGBA"

# Image acquisition worker pool
ACQUIRE_MAX_WORKERS = 2

# UI constants
WINDOW_TITLE = "InstaFilter"
DEFAULT_WINDOW_WIDTH = 520
DEFAULT_WINDOW_HEIGHT = 760
PREVIEW_MIN_SIZE = 420
SLIDER_STEPS = 100

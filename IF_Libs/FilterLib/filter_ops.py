"""
Filter Operations.

One operation per filter kind, built on Pillow and NumPy:
- Crystallize: Voronoi cells filled with the colour under each cell seed
- Edges: Edge detection scaled by intensity
- Gaussian blur: Smooth blur with circular falloff
- Pixellate: Square blocks of averaged colour
- Sepia tone: Warm brown recolouring blended by intensity
- Unsharp mask: Sharpening by subtracting a blurred copy
- Vignette: Darkening toward the corners

Every operation returns a new image of the same size and leaves the input
untouched. Alpha is carried through unchanged.

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.jpg")
    >>>
    >>> sepia = apply_sepia_tone(img, intensity=0.5)
    >>> blurred = apply_gaussian_blur(img, radius=10)
    >>> blocks = apply_pixellate(img, scale=16)
"""

import math
from typing import Any, Tuple

import numpy as np
from PIL import Image, ImageFilter

# Seed for the crystallize cell jitter; fixed so renders are repeatable
CRYSTALLIZE_SEED = 1729

SEPIA_MATRIX = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float64,
)

# Pillow takes the sharpening percent as a C int
MAX_UNSHARP_PERCENT = 10000


def _check_image(image: Any) -> None:
    if not hasattr(image, "filter"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")


def _split_alpha(image: Any) -> Tuple[Any, Any]:
    """Return (RGB image, alpha band or None)."""
    if image.mode == "RGBA":
        return image.convert("RGB"), image.getchannel("A")
    if image.mode in ("LA", "PA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        return rgba.convert("RGB"), rgba.getchannel("A")
    return image.convert("RGB"), None


def _merge_alpha(rgb: Any, alpha: Any) -> Any:
    if alpha is None:
        return rgb
    result = rgb.convert("RGBA")
    result.putalpha(alpha)
    return result


def _to_uint8(values: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def _limit_distance(image: Any, value: float, name: str) -> float:
    """Clamp a pixel distance to the longest side of the image."""
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return min(float(value), float(max(image.size)))


# ============================================================================
# Crystallize
# ============================================================================

def apply_crystallize(image: Any, radius: float = 20.0) -> Any:
    """
    Break the image into polygonal cells.

    Seeds are placed on a jittered grid with spacing ``radius``; every pixel
    takes the colour found under its nearest seed.

    Args:
        image: PIL Image
        radius: Cell size in pixels (values below 1 are treated as 1)

    Returns:
        Crystallized PIL Image

    Raises:
        TypeError: If image not PIL Image
        ValueError: If radius is not finite
    """
    _check_image(image)

    rgb, alpha = _split_alpha(image)
    src = np.asarray(rgb)
    height, width = src.shape[:2]
    cell = max(1, int(round(_limit_distance(image, radius, "radius"))))

    grid_h = height // cell + 1
    grid_w = width // cell + 1
    rng = np.random.default_rng(CRYSTALLIZE_SEED)
    # One seed per grid cell, plus a ring of cells around the image
    jitter = rng.random((grid_h + 2, grid_w + 2, 2)) * cell
    cell_rows = (np.arange(-1, grid_h + 1) * cell)[:, None]
    cell_cols = (np.arange(-1, grid_w + 1) * cell)[None, :]
    seed_y = cell_rows + jitter[..., 0]
    seed_x = cell_cols + jitter[..., 1]

    yy, xx = np.mgrid[0:height, 0:width]
    base_row = yy // cell + 1
    base_col = xx // cell + 1

    best_dist = np.full((height, width), np.inf)
    best_row = base_row.copy()
    best_col = base_col.copy()
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            rows = base_row + dy
            cols = base_col + dx
            dist = (seed_y[rows, cols] - yy) ** 2 + (seed_x[rows, cols] - xx) ** 2
            closer = dist < best_dist
            best_dist = np.where(closer, dist, best_dist)
            best_row = np.where(closer, rows, best_row)
            best_col = np.where(closer, cols, best_col)

    sample_y = np.clip(seed_y[best_row, best_col].astype(int), 0, height - 1)
    sample_x = np.clip(seed_x[best_row, best_col].astype(int), 0, width - 1)
    result = Image.fromarray(np.ascontiguousarray(src[sample_y, sample_x]))
    return _merge_alpha(result, alpha)


# ============================================================================
# Edges
# ============================================================================

def apply_edges(image: Any, intensity: float = 1.0) -> Any:
    """
    Highlight edges, scaling edge strength by ``intensity``.

    Args:
        image: PIL Image
        intensity: Multiplier applied to the edge response

    Returns:
        PIL Image with edges on a dark background

    Raises:
        TypeError: If image not PIL Image
    """
    _check_image(image)

    rgb, alpha = _split_alpha(image)
    edges = np.asarray(rgb.filter(ImageFilter.FIND_EDGES), dtype=np.float64)
    result = Image.fromarray(_to_uint8(edges * float(intensity)))
    return _merge_alpha(result, alpha)


# ============================================================================
# Gaussian Blur
# ============================================================================

def apply_gaussian_blur(image: Any, radius: float = 10.0) -> Any:
    """
    Apply Gaussian blur to image.

    Args:
        image: PIL Image
        radius: Blur radius in pixels, capped at the longest side; 0 or less
            returns an unchanged copy

    Returns:
        Blurred PIL Image (same mode as input, palette images become RGB)

    Raises:
        TypeError: If image not PIL Image
        ValueError: If radius is not finite
    """
    _check_image(image)

    radius = _limit_distance(image, radius, "radius")
    if radius <= 0:
        return image.copy()

    if image.mode == "P":
        image = image.convert("RGBA" if "transparency" in image.info else "RGB")

    return image.filter(ImageFilter.GaussianBlur(radius=float(radius)))


# ============================================================================
# Pixellate
# ============================================================================

def apply_pixellate(image: Any, scale: float = 8.0) -> Any:
    """
    Replace the image with square blocks of averaged colour.

    Args:
        image: PIL Image
        scale: Block size in pixels; 1 or less returns an unchanged copy

    Returns:
        Pixellated PIL Image (RGB or RGBA)

    Raises:
        TypeError: If image not PIL Image
        ValueError: If scale is not finite
    """
    _check_image(image)

    block = int(round(_limit_distance(image, scale, "scale")))
    if block <= 1:
        return image.copy()

    if image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGBA")

    width, height = image.size
    small = image.reduce(block)
    enlarged = small.resize((small.width * block, small.height * block), Image.NEAREST)
    return enlarged.crop((0, 0, width, height))


# ============================================================================
# Sepia Tone
# ============================================================================

def apply_sepia_tone(image: Any, intensity: float = 1.0) -> Any:
    """
    Recolour the image in sepia tones.

    The result is a linear blend between the original colours (intensity 0)
    and the full sepia transform (intensity 1).

    Args:
        image: PIL Image
        intensity: Blend amount

    Returns:
        Sepia-toned PIL Image

    Raises:
        TypeError: If image not PIL Image
    """
    _check_image(image)

    rgb, alpha = _split_alpha(image)
    src = np.asarray(rgb, dtype=np.float64)
    sepia = np.clip(src @ SEPIA_MATRIX.T, 0, 255)
    amount = float(intensity)
    blended = src * (1.0 - amount) + sepia * amount
    result = Image.fromarray(_to_uint8(blended))
    return _merge_alpha(result, alpha)


# ============================================================================
# Unsharp Mask
# ============================================================================

def apply_unsharp_mask(image: Any, radius: float = 2.5, intensity: float = 0.5) -> Any:
    """
    Sharpen the image with an unsharp mask.

    Args:
        image: PIL Image
        radius: Blur radius of the mask in pixels; 0 or less returns a copy
        intensity: Sharpening strength, 1.0 adds the full difference back

    Returns:
        Sharpened PIL Image

    Raises:
        TypeError: If image not PIL Image
        ValueError: If radius or intensity is not finite
    """
    _check_image(image)

    if not math.isfinite(intensity):
        raise ValueError(f"intensity must be finite, got {intensity}")
    radius = _limit_distance(image, radius, "radius")
    percent = int(round(min(float(intensity) * 100, MAX_UNSHARP_PERCENT)))
    if radius <= 0 or percent <= 0:
        return image.copy()

    rgb, alpha = _split_alpha(image)
    sharpened = rgb.filter(
        ImageFilter.UnsharpMask(radius=float(radius), percent=percent, threshold=0)
    )
    return _merge_alpha(sharpened, alpha)


# ============================================================================
# Vignette
# ============================================================================

def apply_vignette(image: Any, radius: float = 1.0, intensity: float = 0.0) -> Any:
    """
    Darken the image toward its corners.

    Pixels closer to the centre than ``radius`` are untouched; beyond it the
    darkening ramps up smoothly to ``intensity`` at the farthest corner.

    Args:
        image: PIL Image
        radius: Untouched central radius in pixels
        intensity: Darkening at the corners (0 = none, 1 = black)

    Returns:
        Vignetted PIL Image

    Raises:
        TypeError: If image not PIL Image
    """
    _check_image(image)

    rgb, alpha = _split_alpha(image)
    src = np.asarray(rgb, dtype=np.float64)
    height, width = src.shape[:2]

    yy, xx = np.mgrid[0:height, 0:width]
    center_y = (height - 1) / 2.0
    center_x = (width - 1) / 2.0
    distance = np.hypot(yy - center_y, xx - center_x)
    inner = max(0.0, float(radius))
    outer = max(float(np.hypot(center_y, center_x)), inner + 1.0)

    ramp = np.clip((distance - inner) / (outer - inner), 0.0, 1.0)
    ramp = ramp * ramp * (3.0 - 2.0 * ramp)
    factor = 1.0 - float(intensity) * ramp

    result = Image.fromarray(_to_uint8(src * factor[..., None]))
    return _merge_alpha(result, alpha)

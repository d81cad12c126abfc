"""Gamma correction and Matplotlib preview for rendered images.

The renderer works in linear light. Before display or export the averaged
image is gamma corrected with a fixed gamma of 2 (a square root per channel)
and clamped to the displayable range.

Example:
    >>> from weekend_tracer.preview.display import show_preview
    >>> image = renderer.render()
    >>> show_preview(image)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# Fixed display gamma: encoding is out = in^(1/2)
DISPLAY_GAMMA = 2.0

# Upper clamp before scaling to 8 bits, so 256 * value stays below 256
MAX_DISPLAY_VALUE = 0.999


def apply_gamma(
    image: npt.NDArray[np.floating],
    gamma: float = DISPLAY_GAMMA,
) -> npt.NDArray[np.float64]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma value (default 2.0, i.e. a square root).

    Returns:
        Gamma corrected image. NaN and negative inputs are set to zero first.
    """
    # NaN and negatives become zero before the power
    image = np.nan_to_num(np.asarray(image, dtype=np.float64), nan=0.0)
    image = np.maximum(image, 0.0)

    if gamma == 1.0:
        return image
    if gamma == 2.0:
        return np.sqrt(image)
    return np.power(image, 1.0 / gamma)


def process_image_for_display(
    image: npt.NDArray[np.floating],
    gamma: float = DISPLAY_GAMMA,
) -> npt.NDArray[np.float64]:
    """Apply gamma correction and clamp to [0, MAX_DISPLAY_VALUE].

    Args:
        image: Averaged linear image array of shape (H, W, 3).
        gamma: Gamma correction value (default 2.0).

    Returns:
        Processed image ready for display or 8-bit encoding.
    """
    return np.clip(apply_gamma(image, gamma), 0.0, MAX_DISPLAY_VALUE)


def show_preview(
    image: npt.NDArray[np.floating],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 4.5),
    block: bool = True,
) -> None:
    """Display an averaged linear image as a Matplotlib figure.

    Requires the optional "preview" extra (matplotlib).

    Args:
        image: Averaged linear image array of shape (H, W, 3), top row first.
        title: Figure title (default "Render Preview").
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    ax.set_title(title if title is not None else "Render Preview")

    plt.tight_layout()
    plt.show(block=block)

"""Font-size solvers for tile labels and the board overlay."""

from .overlay_fitter import OverlayFitter
from .text_fitter import TextFitter, compute_fit_size

__all__ = ["OverlayFitter", "TextFitter", "compute_fit_size"]

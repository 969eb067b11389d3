"""Data model, input readers, neighbour lists and particle placement for patchy-colloid simulations."""

__version__ = "0.1.0"
__all__ = ["__version__"]
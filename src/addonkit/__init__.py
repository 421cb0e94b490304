"""
addonkit - preset and addon composition engine

addonkit resolves addon packages, loads nested presets and folds their
contributions to named extension points into a single configuration.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]

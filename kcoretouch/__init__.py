"""Touch-surface calibration, TUIO encoding and renderer-free GUI controls for blob tracking."""

__version__ = "0.1.0"
"""Frame types, ROI processing, bitmap persistence, sinks and pointer output for RGB/IR hand tracking."""

__version__ = "0.1.0"
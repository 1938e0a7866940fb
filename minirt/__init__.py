"""Ray tracer that renders .rt scene files to images."""

__version__ = "0.1.0"
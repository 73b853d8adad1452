"""CReal core - cached article bias analysis and article video clips."""

__version__ = "1.0.0"

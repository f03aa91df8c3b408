"""avo-forms: unit-aware input validation and conversion for health-tracking forms."""

__version__ = "0.1.0"

"""Split PDFs into per-page PNGs and mark two-page spreads."""

__version__ = "0.1.0"

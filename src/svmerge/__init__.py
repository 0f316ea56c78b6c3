"""svmerge -- sorted k-way merging of structural-variant evidence files."""

__version__ = "0.1.0"

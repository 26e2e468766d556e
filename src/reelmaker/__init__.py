"""Reel Maker - AI video generation and composition pipeline."""

__version__ = "0.1.0"

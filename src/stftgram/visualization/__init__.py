"""Visualization utilities for inspection and reporting."""

from .spectrogram import plot_spectrogram, power_db

__all__ = ["plot_spectrogram", "power_db"]

"""Toolkit for writing StarCraft II bots: geometry, images, units and protocol upgrading."""

__version__ = "0.1.0"
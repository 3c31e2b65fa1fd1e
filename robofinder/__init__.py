"""
RoboFinder package initializer.
Defines package version; the CLI lives in :mod:`robofinder.cli`.
"""
__version__ = "0.1.0"

"""Release Checker - decide whether a newer release exists for an installed version."""

__version__ = "1.0.0"
__author__ = "Release Checker Contributors"

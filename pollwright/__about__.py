"""Contains metadata about the package, including version information and author details."""

__version__ = "pollwright@0.1.0"
__author__ = "Bud Ecosystem Inc."

"""tasklist - an in-memory task list with a fixed ordering rule."""

__version__ = "0.1.0"

"""Find translation keys that nothing in the source tree refers to."""

__version__ = "0.1.0"

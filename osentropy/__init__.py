"""Random bytes from the operating system's random number generator."""

__version__ = "0.2.12"
__all__ = ["api", "custom", "error", "lazy", "platforms", "use_file", "util"]
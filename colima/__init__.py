"""Building blocks for running container runtimes inside Lima virtual machines."""

__version__ = "0.1.0"
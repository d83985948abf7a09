"""Controller for AM03127 LED message panels: serial protocol, storage and HTTP API."""

__version__ = "0.1.0"
__all__ = ["__version__"]
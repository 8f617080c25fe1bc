"""go-ten: create new Go projects from an interactive terminal wizard."""

__version__ = "0.1.0"

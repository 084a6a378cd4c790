"""Password-protected command-line editor for the press brake CSV databases."""

__version__ = "0.1.0"
__all__ = ["__version__"]
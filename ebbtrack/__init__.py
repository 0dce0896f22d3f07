"""Reports and working-time balances from tracked frames, with holidays, sick days and vacations."""

__version__ = "0.1.0"

__all__ = ["__version__"]
"""spendcap - expense tracking with category spending caps."""

__version__ = "0.1.0"

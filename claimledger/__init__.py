"""Car-insurance claim lifecycle on a key-value ledger."""

__version__ = "1.0.0"

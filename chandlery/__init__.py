"""Ship chandlery order, inventory and profit core."""

__version__ = "1.0.0"

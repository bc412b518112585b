"""Point-of-sale till: catalog browsing, cart, pricing and checkout."""

__version__ = "0.1.0"

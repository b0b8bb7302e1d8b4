"""Content upload pipeline and randomness coordination for catalog minting."""

__version__ = "0.1.0"

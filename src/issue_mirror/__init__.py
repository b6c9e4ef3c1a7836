"""Issue Mirror - copies private issues labeled public into a public repository."""

__version__ = "0.1.0"

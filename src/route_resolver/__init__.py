"""Go-to-definition resolver for AdonisJS-style route files."""

__version__ = "0.1.0"

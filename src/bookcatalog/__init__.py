"""BookCatalog - book catalogue API with cached paged queries."""

__version__ = "0.1.0"

class FeastError(Exception):
    pass


class InvalidQuery(FeastError, ValueError):
    """The query was rejected before anything was asked of a model."""


class PrimaryGenerationFailed(FeastError):
    """Recipe suggestions could not be generated for a query."""


class GenerationError(FeastError):
    """A model call returned something unusable."""


class EnrichmentError(GenerationError):
    """An image could not be generated for a recipe."""

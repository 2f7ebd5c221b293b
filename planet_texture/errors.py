# planet_texture/errors.py

"""Exceptions raised by the planet texture generator."""


class TextureGenerationError(Exception):
    """Base class for every error raised while generating a texture pair."""


class InvalidParameter(TextureGenerationError, ValueError):
    """A generation parameter is missing, malformed or out of range."""


class ResourceUnavailable(TextureGenerationError, RuntimeError):
    """A raster buffer or renderer surface could not be allocated."""


class GenerationCancelled(TextureGenerationError):
    """The pixel loop was stopped by a cancel event or a timeout."""

"""A small 3D arcade hunting game: BMP loading, scene models, game rules and a pygame window."""

__version__ = "1.0.0"
__all__ = ["app", "game", "image", "scene"]
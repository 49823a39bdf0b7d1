"""Package metadata for simplemail."""

__app_name__ = "simplemail"
__version__ = "1.0.0"
__author__ = "simplemail contributors"
__description__ = "Fluent email message builder with multipart text/HTML assembly."

__all__ = ["__app_name__", "__author__", "__description__", "__version__"]

"""studiosite — static site builder for the Mongoose Studio website."""

__version__ = "0.1.0"

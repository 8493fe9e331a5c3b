"""abbrlight - highlight shell abbreviations as they are typed."""

__version__ = "0.1.0"

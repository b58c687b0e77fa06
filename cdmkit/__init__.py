"""Common document model with a builder, a style normalizer, an RTF renderer and insert helpers."""

__version__ = "1.0.0"

__all__ = [
    "model",
    "builder",
    "normalizer",
    "rtf",
    "datetime_format",
    "insert_options",
]
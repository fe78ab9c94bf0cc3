"""Create Notion to-do pages from loosely written, bilingual date input."""

__version__ = "0.1.0"

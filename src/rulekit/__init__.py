"""rulekit — documentation templates, guidelines, and mode-config generation."""

__version__ = "0.1.0"

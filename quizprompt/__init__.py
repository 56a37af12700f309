"""Interactive terminal select prompts with answer validation and transformation."""

__version__ = "0.1.0"
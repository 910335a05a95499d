"""tsnew - scaffold TypeScript projects from presets."""

__version__ = "0.1.0"

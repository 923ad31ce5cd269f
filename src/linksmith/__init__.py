"""linksmith: install a kit of config files as symlinks, with backups."""

__version__ = "0.1.0"

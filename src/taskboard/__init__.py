# src/taskboard/__init__.py

"""Task-management client for a hosted REST backend."""

__version__ = "0.1.0"

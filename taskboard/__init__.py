"""taskboard - kanban task tracker with a REST API and a three-column board."""

__version__ = "0.1.0"

"""xapdesk - control surface for a remote HTTP mixing engine."""

__version__ = "0.1.0"

"""Chat gateway toolkit: session storage, tool registry, logs and platform adapters."""

__version__ = "0.6.7"
"""tonedrift - Emotional tone drift analysis for journal entries."""

__version__ = "0.1.0"

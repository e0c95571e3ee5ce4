"""ComplyEUR: Schengen 90/180-day compliance engine."""

__version__ = "0.1.0"

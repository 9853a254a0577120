"""
CLI module for the Privacy Intelligence System.

Provides command-line interface using Typer:
- analyze: Analyze a single website
- batch: Analyze every website in a URL file
- status: View system status
- config: Configuration management
"""

from privacy_intel.cli.main import app

__all__ = ["app"]

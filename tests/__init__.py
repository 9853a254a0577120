"""
Test suite for Privacy Intelligence System.

Provides tests for all modules:
- Unit tests for fetch, extraction, validators and the LLM summarizer
- Site and batch analysis against fake fetchers
- CLI commands through typer's CliRunner
"""

"""
Test package for psstyle.

This package contains:
- Unit tests for individual components
- Integration tests for the checker and the CLI
- Property-based tests using Hypothesis
"""

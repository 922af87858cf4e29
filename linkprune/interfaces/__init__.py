"""
linkprune - Interfaces Package
==============================

Contains all user-facing interfaces (presentation layer).

Structure:
- cli/: Command-line interface with Rich UI
"""

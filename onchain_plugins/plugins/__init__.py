"""
Plugin system for the onchain plugins.

This package provides plugin management, tool registration and the
Polymarket and Zora plugins themselves.
"""

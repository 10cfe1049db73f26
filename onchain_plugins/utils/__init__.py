"""
Shared helpers for configuration lookup and result serialization.
"""

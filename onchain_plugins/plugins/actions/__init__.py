"""
Action base classes for the onchain plugins.
"""

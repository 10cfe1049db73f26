"""
Tools for the onchain plugins.

This package contains the base AutoTool class and the toolsets plugins draw on.
"""

from onchain_plugins.plugins.tools.auto_tool import *

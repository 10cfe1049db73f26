"""
Abstract interfaces for the onchain plugins.

These interfaces define the contracts that concrete implementations
must adhere to, following the Dependency Inversion Principle.

This package contains:
- Plugin interfaces (tools, toolsets, actions, providers, plugins)
- Provider interfaces for external service adapters (LLM, host runtime)
"""

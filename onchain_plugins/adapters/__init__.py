"""
Adapters for external systems and services.

These adapters implement the interfaces defined in onchain_plugins.interfaces
and wrap web3, the Zora API and the language model.
"""

"""
Domain models for the onchain plugins.

This package contains the runtime messages, chains, client bundles and the
per-plugin parameter and result models.
"""

from onchain_plugins.domains.runtime import *
from onchain_plugins.domains.chains import *
from onchain_plugins.domains.wallet import *
from onchain_plugins.domains.polymarket import *
from onchain_plugins.domains.zora import *

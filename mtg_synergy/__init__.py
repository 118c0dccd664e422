"""
MTG Synergy Analyzer backend.

Proxies card lookups to Scryfall and keeps per-user card collections.
"""

__version__ = "0.1.0"

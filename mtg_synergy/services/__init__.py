"""
Application services: Scryfall lookups and collection storage.
"""

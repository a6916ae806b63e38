"""
Cross-cutting building blocks: settings, logging, errors and the store.
"""

"""
CEP Service - Brazilian postal code lookup.

Resolves a CEP by racing several external address providers and returning
the first normalized address that comes back.
"""

__version__ = "0.1.0"

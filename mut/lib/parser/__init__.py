"""
Parser package for brace placeholder interpolation.

Provides a token-based string substitution system using configurable
resolvers.
"""

from .base import BraceTokenParser, TokenResolver, interpolate
from .resolvers import ExternalResolver

__all__ = ["BraceTokenParser", "TokenResolver", "interpolate", "ExternalResolver"]

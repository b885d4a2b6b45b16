"""
Client modules for external APIs.
"""

from .deezer import DeezerClient
from .qobuz import QobuzClient

__all__ = [
    'DeezerClient',
    'QobuzClient'
]

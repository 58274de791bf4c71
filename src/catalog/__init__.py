"""
Gesture Catalog Module

Immutable gesture records and the catalog that supplies them.
"""
from .gestures import Difficulty, Gesture, GestureCatalog
from .samples import SAMPLE_GESTURES, default_catalog, load_catalog

__all__ = [
    'Difficulty',
    'Gesture',
    'GestureCatalog',
    'SAMPLE_GESTURES',
    'default_catalog',
    'load_catalog',
]

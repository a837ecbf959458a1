"""
Configuration: application settings and terrain profiles.
"""

from .config import settings, Settings
from .terrain_profiles import get_profile, list_profiles, PROFILES, TerrainProfile

__all__ = ['settings', 'Settings', 'get_profile', 'list_profiles', 'PROFILES', 'TerrainProfile']

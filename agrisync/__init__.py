"""AgriSync: rule-based agronomic advisory core."""

__version__ = "0.1.0"

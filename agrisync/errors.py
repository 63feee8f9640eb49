"""Exception taxonomy shared by the advisory services.

Lookup failures subclass ``LookupError`` and input failures subclass
``ValueError`` so that route handlers can map them generically.
"""

from __future__ import annotations


class AgriSyncError(Exception):
	"""Base class for all advisory-core errors."""


class UnknownCropError(AgriSyncError, LookupError):
	"""Raised when a crop is absent from the knowledge base."""

	def __init__(self, crop_name: str):
		self.crop_name = crop_name
		super().__init__(f"Unknown crop: {crop_name!r}")


class MalformedInputError(AgriSyncError, ValueError):
	"""Raised for invalid dates, negative limits, and empty required fields."""


class LocationUnavailable(AgriSyncError, RuntimeError):
	"""A region source could not produce a value; recovered by the resolver."""


class KnowledgeBaseError(AgriSyncError, RuntimeError):
	"""Raised when the static data tables cannot be loaded or validated."""

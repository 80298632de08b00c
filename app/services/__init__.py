"""Service exports."""

from app.services.content import PatentContentService
from app.services.documents import DocumentFetcher
from app.services.errors import (
	ConfigurationError,
	InvalidIncludeError,
	PatentNotFoundError,
	PatentServiceError,
	UpstreamRequestError,
	UpstreamTimeoutError,
)
from app.services.formatter import InclusionOptions
from app.services.patents import PatentSearchService, PatentService
from app.services.serpapi import SerpApiClient

__all__ = [
	"ConfigurationError",
	"DocumentFetcher",
	"InclusionOptions",
	"InvalidIncludeError",
	"PatentContentService",
	"PatentNotFoundError",
	"PatentSearchService",
	"PatentService",
	"PatentServiceError",
	"SerpApiClient",
	"UpstreamRequestError",
	"UpstreamTimeoutError",
]

"""GitHub contents API client utilities."""

from .client import ContentsClient, StatusError, build_headers, contents_url, get_token
from .models import GitHubContent, GitHubFile

__all__ = [
    "ContentsClient",
    "StatusError",
    "GitHubContent",
    "GitHubFile",
    "build_headers",
    "contents_url",
    "get_token",
]

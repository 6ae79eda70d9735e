"""GitHub contents API data models."""

import base64
import json
from typing import Any, Literal

from pydantic import BaseModel


class GitHubContent(BaseModel):
    """Entry of a directory listing (file, dir, symlink or submodule)."""

    name: str
    path: str = ""
    url: str
    type: Literal["file", "dir", "symlink", "submodule"] = "dir"
    sha: str | None = None
    size: int | None = None
    html_url: str | None = None
    download_url: str | None = None


class GitHubFile(BaseModel):
    """Single file response with base64 content."""

    name: str
    path: str = ""
    content: str
    encoding: Literal["base64"]

    @classmethod
    def is_envelope(cls, data: Any) -> bool:
        """Whether a decoded body looks like a file response."""
        return (
            isinstance(data, dict)
            and data.get("encoding") == "base64"
            and isinstance(data.get("content"), str)
        )

    def decoded(self) -> str:
        """Decoded text content."""
        return base64.b64decode(self.content).decode("utf-8")

    def decoded_json(self) -> Any:
        """Content parsed as JSON."""
        return json.loads(self.decoded())

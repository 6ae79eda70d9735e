"""GitHub contents API transport."""

import logging
import os
import shutil
import subprocess
from typing import Any, Callable

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0  # seconds
CONTENT_TYPE = "application/json"
GH_CLI_TIMEOUT = 5  # seconds


class StatusError(Exception):
    """Response arrived with a status other than 200.

    ``str(error)`` is the standard reason phrase of the status code.
    """

    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(httpx.codes.get_reason_phrase(status_code))


def get_token_from_gh_cli(host: str = "github.com") -> str | None:
    """Token the gh cli holds for ``host``, or None when gh is missing or logged out."""
    gh = shutil.which("gh")
    if gh is None:
        logger.debug("gh cli not on PATH")
        return None
    try:
        result = subprocess.run(
            [gh, "auth", "token", "--hostname", host],
            capture_output=True,
            text=True,
            timeout=GH_CLI_TIMEOUT,
        )
    except subprocess.TimeoutExpired:
        logger.warning("gh auth token timed out after %ss", GH_CLI_TIMEOUT)
        return None
    token = result.stdout.strip()
    if result.returncode != 0 or not token:
        logger.debug("gh cli has no token for %s (exit %d)", host, result.returncode)
        return None
    logger.info("Using token from gh cli for %s", host)
    return token


def get_token(
    token: str | None = None,
    env_var: str | None = None,
    use_gh_cli: bool = False,
) -> str | None:
    """
    Get GitHub token from various sources.

    Priority:
    1. Explicitly provided token
    2. Environment variable named by ``env_var``
    3. Environment variable GH_TOKEN / GITHUB_TOKEN
    4. gh cli (`gh auth token`) - only if use_gh_cli=True

    Args:
        token: Explicitly provided token
        env_var: Extra environment variable to check first
        use_gh_cli: Whether to use gh cli credentials (requires user consent)

    Returns:
        GitHub token or None
    """
    if token:
        logger.debug("Using explicitly provided token")
        return token

    if env_var and os.environ.get(env_var):
        logger.debug("Using token from %s", env_var)
        return os.environ[env_var]

    env_token = os.environ.get("GH_TOKEN") or os.environ.get("GITHUB_TOKEN")
    if env_token:
        logger.debug("Using token from environment variable")
        return env_token

    if use_gh_cli:
        return get_token_from_gh_cli()

    return None


def contents_url(owner: str, repo: str, path: str = "", ref: str = "master") -> str:
    """Build ``<contents-base>/<path>?ref=<branch>`` for a repository path."""
    base = f"{ContentsClient.BASE_URL}/repos/{owner}/{repo}/contents"
    path = path.strip("/")
    url = f"{base}/{path}" if path else base
    return f"{url}?ref={ref}" if ref else url


def build_headers(token: str | None) -> dict[str, str]:
    """Request headers; ``Authorization`` is always present, empty without a token."""
    return {
        "Authorization": f"token {token}" if token else "",
        "Content-type": CONTENT_TYPE,
    }


class ContentsClient:
    """Single-shot GET client for GitHub contents endpoints.

    No retries: a failed request surfaces to the caller as is.
    """

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token_lookup: Callable[[], str | None] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize contents client.

        Args:
            token_lookup: Called before every request to get the current token
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests inject a MockTransport)
        """
        self.token_lookup = token_lookup or (lambda: None)
        self.timeout = timeout
        self.transport = transport
        logger.debug("Contents client ready, timeout=%s", timeout)

    def headers(self) -> dict[str, str]:
        """Headers for the next request."""
        return build_headers(self.token_lookup())

    def get_json(self, url: str) -> Any:
        """
        GET ``url`` and decode its JSON body.

        Raises:
            StatusError: status is not 200
            httpx.TransportError: the request itself failed (propagated unchanged)
        """
        logger.debug("Request: GET %s", url)
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.get(url, headers=self.headers())
        logger.debug("Response: GET %s (status=%d)", url, response.status_code)

        if response.status_code != httpx.codes.OK:
            raise StatusError(response.status_code, url)
        return response.json()

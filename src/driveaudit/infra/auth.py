from __future__ import annotations

"""
OAuth Authentication Infrastructure.

Obtains read-only Drive credentials for the operator. A cached authorized-user
token is reused and refreshed when possible; otherwise an interactive consent
step runs through a local redirect listener and the resulting token is cached
for the next run.
"""

import contextlib
import io
import json
import logging
import os
from typing import Any, Callable, Dict, Optional

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from driveaudit.domain.config import AuditConfig
from driveaudit.domain.constants import DRIVE_SCOPES
from driveaudit.domain.errors import AuthError, ConfigError

logger = logging.getLogger(__name__)

_CLIENT_SECTIONS = ("web", "installed")
AUTH_PROMPT = "Authorize this app by visiting this URL: {url}"
AUTH_SUCCESS = "Authorization successful! You can close this window."

Notify = Callable[[str], None]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_credentials(config: AuditConfig, notify: Optional[Notify] = None) -> Credentials:
    """
    Resolve usable credentials: cached token, refreshed token or new consent.

    Args:
        config: Run configuration (secret/token paths, callback port).
        notify: Receives the consent prompt lines instead of stdout, if given.

    Returns:
        Credentials: Valid credentials for the Drive read-only scope.

    Raises:
        ConfigError: If the client secrets file is missing or malformed.
        AuthError: If refresh or consent fails.
    """
    creds = _load_cached_token(config.token_path)

    if creds is not None and creds.valid:
        logger.debug("Using cached credentials.")
        return creds

    if creds is not None and creds.refresh_token:
        return refresh_credentials(creds, config.token_path)

    return obtain_credentials(config, notify)


def obtain_credentials(config: AuditConfig, notify: Optional[Notify] = None) -> Credentials:
    """
    Run the interactive consent step and cache the resulting token.

    Shows the authorization URL and waits for the redirect on
    http://localhost:<callback_port>/. The flow prints the URL itself; with
    `notify` its output is captured line by line and handed over instead.
    """
    client_config = load_client_config(config.credentials_path)
    flow = InstalledAppFlow.from_client_config(client_config, scopes=list(DRIVE_SCOPES))

    logger.info(f"Waiting for authorization code on http://localhost:{config.callback_port}")
    try:
        with _prompt_output(notify):
            creds = flow.run_local_server(
                port=config.callback_port,
                open_browser=False,
                authorization_prompt_message=AUTH_PROMPT,
                success_message=AUTH_SUCCESS,
            )
    except (OAuth2Error, GoogleAuthError, ValueError) as e:
        raise AuthError(f"Error retrieving access token: {e}") from e
    except OSError as e:
        raise AuthError(
            f"Cannot listen for the authorization callback on port {config.callback_port}: {e}"
        ) from e

    save_token(creds, config.token_path)
    return creds


def refresh_credentials(creds: Credentials, token_path: str) -> Credentials:
    """
    Refresh an expired token in place and persist the new state.

    Raises:
        AuthError: If the refresh request is rejected or cannot be sent.
    """
    logger.debug("Refreshing expired access token.")
    try:
        creds.refresh(Request())
    except GoogleAuthError as e:
        raise AuthError(f"Token refresh failed: {e}") from e

    save_token(creds, token_path)
    return creds


def load_client_config(path: str) -> Dict[str, Any]:
    """
    Read OAuth client secrets, accepting either a 'web' or 'installed' client.

    Raises:
        ConfigError: If the file is unreadable or has no usable client section.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Error loading client secret file '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Client secret file '{path}' is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Client secret file '{path}' must contain a JSON object.")

    for section in _CLIENT_SECTIONS:
        client = data.get(section)
        if isinstance(client, dict) and client.get("client_id") and client.get("client_secret"):
            return {section: client}

    raise ConfigError(
        f"Client secret file '{path}' has no 'web' or 'installed' client with an id and secret."
    )


def save_token(creds: Credentials, token_path: str) -> None:
    """Persist credentials as authorized-user JSON. Failure is not fatal."""
    try:
        parent = os.path.dirname(os.path.abspath(token_path))
        os.makedirs(parent, exist_ok=True)
        with open(token_path, "w", encoding="utf-8") as f:
            f.write(creds.to_json())
        logger.info(f"Token stored to {token_path}")
    except OSError as e:
        logger.error(f"Error saving token: {e}")

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

class _LineForwarder(io.TextIOBase):
    """Text stream that forwards each complete, non-blank line to a callback."""

    def __init__(self, notify: Notify):
        self._notify = notify
        self._buffer = ""

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        self._buffer += text
        while "\n" in self._buffer:
            line, self._buffer = self._buffer.split("\n", 1)
            if line.strip():
                self._notify(line)
        return len(text)

    def flush_pending(self) -> None:
        if self._buffer.strip():
            self._notify(self._buffer)
        self._buffer = ""


@contextlib.contextmanager
def _prompt_output(notify: Optional[Notify]):
    """Route stdout written by the consent flow to `notify` while it runs."""
    if notify is None:
        yield
        return
    forwarder = _LineForwarder(notify)
    try:
        with contextlib.redirect_stdout(forwarder):
            yield
    finally:
        forwarder.flush_pending()


def _load_cached_token(token_path: str) -> Optional[Credentials]:
    """Return cached credentials, or None when absent or unreadable."""
    if not os.path.exists(token_path):
        return None
    try:
        return Credentials.from_authorized_user_file(token_path, scopes=list(DRIVE_SCOPES))
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable token cache '{token_path}': {e}")
        return None

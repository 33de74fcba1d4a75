"""
One-shot Google Sheets read performed at startup.

This flow is independent of the chat: it signs the user in (or reuses an
existing sign-in), reads a fixed range once and logs the values. Failures
are logged and never reach the transcript.
"""
import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Callable, List, Optional, Protocol, Sequence

import google.auth
from google.auth.exceptions import DefaultCredentialsError, GoogleAuthError
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiError

from chat_widget.config import DEFAULT_SIGNIN_TIMEOUT, SHEETS_DISCOVERY_URL, SHEETS_SCOPE, Settings
from chat_widget.core.errors import SheetsAuthError, SheetsError, SheetsInitError, SheetsReadError

logger = logging.getLogger(__name__)

StatusListener = Callable[[bool], None]


async def run_detached(func: Callable[..., Any], *args: Any) -> Any:
    """
    Await a blocking call made on a daemon thread.

    Unlike the default executor, nothing waits for this thread at shutdown,
    so an abandoned browser sign-in cannot keep the process alive.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def _settle(setter: Callable[[Any], None], value: Any) -> None:
        if not future.done():
            setter(value)

    def _post(setter: Callable[[Any], None], value: Any) -> None:
        try:
            loop.call_soon_threadsafe(_settle, setter, value)
        except RuntimeError:
            # loop already closed; the awaiting task is gone
            pass

    def _target() -> None:
        try:
            result = func(*args)
        except Exception as exc:
            _post(future.set_exception, exc)
        else:
            _post(future.set_result, result)

    name = f"sheets-{getattr(func, '__name__', 'call')}"
    threading.Thread(target=_target, name=name, daemon=True).start()
    return await future


class IdentityClient(Protocol):
    credentials: Any

    def init(self) -> None: ...

    def is_signed_in(self) -> bool: ...

    def sign_in(self) -> None: ...

    def listen(self, listener: StatusListener) -> None: ...


class SignInFlow(InstalledAppFlow):
    """Installed-app flow that reports its authorization URL through logging."""

    def authorization_url(self, **kwargs):
        url, state = super().authorization_url(**kwargs)
        logger.info("Google sign-in URL: %s", url)
        return url, state


class GoogleIdentity:
    """
    Google sign-in for a desktop client.

    Application default credentials count as already signed in; otherwise
    `sign_in` runs the browser-based installed-app flow and gives up after
    `timeout` seconds. Both `init` and `sign_in` block.
    """

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str] = None,
        scopes: Sequence[str] = (SHEETS_SCOPE,),
        timeout: float = DEFAULT_SIGNIN_TIMEOUT,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.scopes = list(scopes)
        self.timeout = timeout
        self.credentials: Any = None
        self._listeners: List[StatusListener] = []

    def init(self) -> None:
        if not self.client_id:
            raise SheetsInitError("AUTH_CLIENT_ID is not set")
        try:
            self.credentials, _ = google.auth.default(scopes=self.scopes)
        except DefaultCredentialsError:
            self.credentials = None

    def is_signed_in(self) -> bool:
        return self.credentials is not None

    def listen(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def _client_config(self) -> dict:
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret or "",
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "redirect_uris": ["http://localhost"],
            }
        }

    def sign_in(self) -> None:
        try:
            flow = SignInFlow.from_client_config(self._client_config(), self.scopes)
            self.credentials = flow.run_local_server(
                port=0,
                authorization_prompt_message="",
                timeout_seconds=self.timeout,
            )
        except AttributeError as exc:
            # the local server returned without a redirect: timeout_seconds elapsed
            raise SheetsAuthError(f"sign-in timed out after {self.timeout:g}s") from exc
        except (GoogleAuthError, ValueError, OSError) as exc:
            raise SheetsAuthError(str(exc)) from exc

        for listener in list(self._listeners):
            listener(self.is_signed_in())


class SheetsReader:
    """Reads a range through the Sheets v4 discovery-based client."""

    def __init__(self, api_key: Optional[str], discovery_url: str = SHEETS_DISCOVERY_URL):
        self.api_key = api_key
        self.discovery_url = discovery_url

    def read(self, credentials: Any, spreadsheet_id: Optional[str], cell_range: str) -> list:
        if not spreadsheet_id:
            raise SheetsReadError("SPREADSHEET_ID is not set")
        try:
            service = build(
                "sheets",
                "v4",
                credentials=credentials,
                developerKey=self.api_key,
                discoveryServiceUrl=self.discovery_url,
                cache_discovery=False,
            )
            result = service.spreadsheets().values().get(
                spreadsheetId=spreadsheet_id, range=cell_range
            ).execute()
        except (GoogleApiError, GoogleAuthError, OSError) as exc:
            raise SheetsReadError(str(exc)) from exc
        return result.get("values", [])


class SheetsBootstrap:
    def __init__(
        self,
        settings: Settings,
        identity: Optional[IdentityClient] = None,
        reader: Optional[SheetsReader] = None,
    ) -> None:
        self.settings = settings
        self.identity = identity or GoogleIdentity(
            settings.auth_client_id,
            settings.auth_client_secret,
            timeout=settings.sheets_signin_timeout,
        )
        self.reader = reader or SheetsReader(settings.sheets_api_key)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._reads: List[concurrent.futures.Future] = []

    async def run(self) -> None:
        """
        init -> read if signed in, otherwise sign in and let the status
        listener trigger the read. Never raises.
        """
        self._loop = asyncio.get_running_loop()
        try:
            await run_detached(self.identity.init)
        except Exception as exc:
            logger.error("Sheets initialization error: %s", exc)
            return

        self.identity.listen(self._on_status)
        if self.identity.is_signed_in():
            await self.read()
            return

        try:
            await run_detached(self.identity.sign_in)
        except Exception as exc:
            logger.error("Sheets sign-in error: %s", exc)
        for fut in self._reads:
            await asyncio.wrap_future(fut)

    def _on_status(self, signed_in: bool) -> None:
        if signed_in and self._loop is not None and not self._loop.is_closed():
            self._reads.append(asyncio.run_coroutine_threadsafe(self.read(), self._loop))

    async def read(self) -> Optional[list]:
        try:
            values = await run_detached(
                self.reader.read,
                self.identity.credentials,
                self.settings.spreadsheet_id,
                self.settings.sheets_range,
            )
        except SheetsError as exc:
            logger.error("Google Sheets API Error: %s", exc)
            return None
        except Exception:
            logger.exception("Google Sheets API Error")
            return None
        logger.info("Google Sheets Data: %s", values)
        return values

"""Stripe MCP session manager: spawn the server, create payment links, shut down."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from typing import Any, Dict, List, Optional

import anyio
from mcp import ClientSession, McpError
from mcp.client.stdio import stdio_client
from mcp.types import CONNECTION_CLOSED, Implementation

from stripe_mcp_client.config import ClientConfig, resolve_config
from stripe_mcp_client.config.constants import CLIENT_NAME, CLIENT_VERSION, PAYMENT_LINKS_TOOL
from stripe_mcp_client.domain import (
    ConnectionState,
    McpConnectionError,
    PaymentLinkCreationError,
    RawFallback,
    collect_text,
    decode_tool_text,
)
from stripe_mcp_client.infrastructure.mcp.launch import build_server_parameters, redact_args

logger = logging.getLogger(__name__)


def _is_transport_closed(exc: BaseException) -> bool:
    """True when ``exc`` means the server process or its pipes are gone."""
    if isinstance(exc, (anyio.ClosedResourceError, anyio.BrokenResourceError, anyio.EndOfStream)):
        return True
    return isinstance(exc, McpError) and exc.error.code == CONNECTION_CLOSED


class StripeMcpClient:
    """Owns one connection to a ``@stripe/mcp`` server running as a subprocess.

    Usage::

        client = StripeMcpClient(api_key="sk_test_...")
        await client.connect()
        link = await client.create_payment_link({
            "line_items": [{"price": "price_123", "quantity": 1}],
        })
        await client.close()

    or ``async with StripeMcpClient() as client: ...``.

    ``create_payment_link`` connects on first use, so calling ``connect()``
    explicitly is optional. ``close()`` is always safe to call.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        tools: Optional[str] = None,
        stripe_account: Optional[str] = None,
        debug: bool = False,
        *,
        config: Optional[ClientConfig] = None,
    ) -> None:
        """
        Args:
            api_key: Stripe secret key; defaults to ``STRIPE_API_KEY``.
            tools: Tools selector for the server; defaults to ``paymentLinks.create``.
            stripe_account: Connected account id; defaults to ``STRIPE_ACCOUNT``.
            debug: Log connection progress and advertised tools at INFO.
            config: A ready ``ClientConfig``; when given the other options are ignored.

        Raises:
            ConfigurationError: no API key in the options or the environment.
        """
        self._config = config if config is not None else resolve_config(
            api_key=api_key,
            tools=tools,
            stripe_account=stripe_account,
            debug=debug,
        )
        self._session: Any = None
        self._stack: AsyncExitStack = AsyncExitStack()
        self._state = ConnectionState.DISCONNECTED
        self._transport_open = False
        self._connect_lock = anyio.Lock()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    async def __aenter__(self) -> "StripeMcpClient":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        """Spawn the server, run the MCP handshake and mark the client connected.

        Returns immediately when already connected. Concurrent callers share
        one connection attempt.

        Raises:
            McpConnectionError: the process could not be started or the
                handshake failed. The client stays disconnected.
        """
        if self.connected:
            return
        async with self._connect_lock:
            if self.connected:
                return
            params = build_server_parameters(self._config)
            logger.debug(
                "StripeMcpClient: launching %s %s",
                params.command, " ".join(redact_args(params.args)),
            )
            try:
                read, write = await self._stack.enter_async_context(stdio_client(params))
                self._transport_open = True
                session = await self._stack.enter_async_context(
                    ClientSession(
                        read,
                        write,
                        client_info=Implementation(name=CLIENT_NAME, version=CLIENT_VERSION),
                    )
                )
                await session.initialize()
            except BaseException as exc:
                # Unwind on cancellation too; CancelledError is re-raised unchanged.
                await self._discard_stack()
                if not isinstance(exc, Exception):
                    raise
                raise McpConnectionError(f"Failed to connect to Stripe MCP server: {exc}") from exc

            self._session = session
            self._state = ConnectionState.CONNECTED
            self._log("Connected to Stripe MCP server")

        if self._config.debug:
            await self._log_available_tools()

    async def close(self) -> None:
        """Terminate the server process and release its pipes.

        No-op when there is no connection. Errors raised while shutting the
        transport down are logged, not raised; the client always ends up
        disconnected so a second ``close()`` does nothing.
        """
        if self._session is None and not self._transport_open:
            return
        try:
            with anyio.CancelScope(shield=True):
                await self._stack.aclose()
        except Exception as exc:  # noqa: BLE001
            logger.warning("StripeMcpClient: error while closing the server connection: %s", exc)
        finally:
            self._stack = AsyncExitStack()
            self._session = None
            self._transport_open = False
            self._state = ConnectionState.DISCONNECTED
        self._log("Disconnected from Stripe MCP server")

    # ------------------------------------------------------------------
    # Tool interface
    # ------------------------------------------------------------------

    async def list_tools(self) -> List[str]:
        """Return the names of the tools the server advertises."""
        if not self.connected:
            await self.connect()
        try:
            result = await self._session.list_tools()
        except Exception as exc:
            if _is_transport_closed(exc):
                await self._drop_connection()
            raise McpConnectionError(f"Failed to list Stripe MCP server tools: {exc}") from exc
        return [tool.name for tool in result.tools]

    async def create_payment_link(self, options: Dict[str, Any]) -> Dict[str, Any]:
        """Create a payment link by calling the server's ``paymentLinks.create`` tool.

        ``options`` is forwarded unchanged as the tool arguments (``line_items``,
        ``after_completion``, ``custom_fields``, ...); the server validates it.

        Returns:
            The decoded payment link object, or ``{"raw_response": <text>}``
            when the server's answer is not a JSON object.

        Raises:
            McpConnectionError: lazy connection failed.
            PaymentLinkCreationError: the tool call failed or the server
                flagged its result as an error.
        """
        if not self.connected:
            await self.connect()

        try:
            result = await self._session.call_tool(PAYMENT_LINKS_TOOL, arguments=options)
        except Exception as exc:
            if _is_transport_closed(exc):
                await self._drop_connection()
            raise PaymentLinkCreationError(f"Failed to create payment link: {exc}") from exc

        text = collect_text(result.content)
        if result.isError:
            logger.warning(
                "StripeMcpClient: tool %r returned isError=True: %s", PAYMENT_LINKS_TOOL, text,
            )
            raise PaymentLinkCreationError(f"Failed to create payment link: {text or 'unknown error'}")

        outcome = decode_tool_text(text)
        if isinstance(outcome, RawFallback):
            logger.warning(
                "StripeMcpClient: %r response is not a JSON object; returning raw text",
                PAYMENT_LINKS_TOOL,
            )
        return outcome.as_dict()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _log_available_tools(self) -> None:
        # Diagnostic only: a failed listing never fails connect().
        try:
            result = await self._session.list_tools()
        except Exception as exc:  # noqa: BLE001
            logger.warning("StripeMcpClient: could not list available tools: %s", exc)
            return
        self._log("Available tools: %s", ", ".join(tool.name for tool in result.tools))

    async def _drop_connection(self) -> None:
        """Forget a connection whose transport has died."""
        logger.warning("StripeMcpClient: server connection lost; marking disconnected")
        await self._discard_stack()
        self._session = None
        self._state = ConnectionState.DISCONNECTED

    async def _discard_stack(self) -> None:
        try:
            with anyio.CancelScope(shield=True):
                await self._stack.aclose()
        except Exception as exc:  # noqa: BLE001
            logger.debug("StripeMcpClient: ignoring error while unwinding transport: %s", exc)
        finally:
            self._stack = AsyncExitStack()
            self._transport_open = False

    def _log(self, msg: str, *args: Any) -> None:
        logger.log(logging.INFO if self._config.debug else logging.DEBUG, msg, *args)

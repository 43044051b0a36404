"""Route resolver — render one route and classify what came back.

Wraps the external render collaborator behind a single async interface.  The
collaborator may be a plain function or a coroutine function; plain functions
run in a worker thread so a slow render never blocks the crawl loop.

Outcome classification::

    2xx + body              -> static
    2xx + requires_server   -> dynamic   (skipped, served by the fallback)
    3xx + redirect_target   -> redirect  (target fed back into discovery)
    anything else           -> failed

Transient failures (``OSError``, ``TimeoutError``, ``TransientRenderError``
or a render exceeding ``timeout``) are retried up to ``max_retries`` times.
Application errors are not retried.  ``RenderResult.attempts`` records how
many tries it took, so a retried-then-succeeded route is visible in the report.

Thread Safety:
    ``RouteResolver`` holds no per-route state.  Safe to call concurrently
    for distinct routes.

"""

from __future__ import annotations

import asyncio
import inspect
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pawprint._errors import TransientRenderError

if TYPE_CHECKING:
    from pawprint._types import OutcomeKind, RenderFunc, RoutePath

_TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    TransientRenderError,
    OSError,
    TimeoutError,
)


@dataclass(frozen=True, slots=True)
class RenderResponse:
    """What the render collaborator returns for a single route.

    Attributes:
        status: HTTP-style status code.
        body: Rendered document, or *None*.
        redirect_target: Location for 3xx responses.
        requires_server: The route needs live server logic and cannot be
            prerendered.
        links: Optional hint of routes the page links to, merged with the
            links found by parsing ``body``.

    """

    status: int = 200
    body: str | bytes | None = None
    redirect_target: str | None = None
    requires_server: bool = False
    links: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Classified outcome of resolving one route.

    Attributes:
        route: The route that was rendered.
        kind: Outcome classification.
        content: Encoded document for ``static`` results.
        redirect_target: Location for ``redirect`` results.
        reason: Human-readable cause for ``failed`` and ``dynamic`` results.
        links: Link hints from the collaborator.
        attempts: Number of render attempts made.
        transient_errors: Messages of transient failures that were retried.
        duration_ms: Wall-clock time across all attempts.

    """

    route: RoutePath
    kind: OutcomeKind
    content: bytes | None = None
    redirect_target: str | None = None
    reason: str | None = None
    links: tuple[str, ...] = ()
    attempts: int = 1
    transient_errors: tuple[str, ...] = ()
    duration_ms: float = 0.0

    @property
    def retried(self) -> bool:
        """True if at least one transient failure was retried."""
        return self.attempts > 1


class RouteResolver:
    """Invokes the render collaborator and classifies the outcome.

    Args:
        render: Sync or async callable ``render(route) -> RenderResponse``.
            A bare ``str`` or ``bytes`` return value is treated as a
            ``200`` response with that body.
        max_retries: Extra attempts after a transient failure.
        timeout: Seconds allowed per attempt, or *None* for no limit.

    """

    __slots__ = ("_max_retries", "_render", "_timeout")

    def __init__(
        self,
        render: RenderFunc,
        *,
        max_retries: int = 2,
        timeout: float | None = 30.0,
    ) -> None:
        self._render = render
        self._max_retries = max_retries
        self._timeout = timeout

    async def resolve(self, route: RoutePath) -> RenderResult:
        """Render *route*, retrying transient failures, and classify it."""
        t0 = time.perf_counter()
        transient: list[str] = []
        attempts = 0

        while True:
            attempts += 1
            try:
                response = await self._attempt(route)
            except _TRANSIENT_ERRORS as exc:
                transient.append(_describe(exc))
                if attempts <= self._max_retries:
                    continue
                return RenderResult(
                    route=route,
                    kind="failed",
                    reason=(
                        f"transient render error after {attempts} attempts: "
                        f"{transient[-1]}"
                    ),
                    attempts=attempts,
                    transient_errors=tuple(transient),
                    duration_ms=_elapsed(t0),
                )
            except Exception as exc:
                return RenderResult(
                    route=route,
                    kind="failed",
                    reason=f"render raised {_describe(exc)}",
                    attempts=attempts,
                    transient_errors=tuple(transient),
                    duration_ms=_elapsed(t0),
                )
            break

        return _classify(
            route,
            response,
            attempts=attempts,
            transient=tuple(transient),
            duration_ms=_elapsed(t0),
        )

    async def _attempt(self, route: RoutePath) -> RenderResponse:
        """Run the collaborator once, applying the timeout."""
        if self._timeout is None:
            raw = await self._call(route)
        else:
            try:
                raw = await asyncio.wait_for(self._call(route), self._timeout)
            except asyncio.TimeoutError as exc:
                msg = f"render timed out after {self._timeout}s"
                raise TransientRenderError(msg) from exc
        return _coerce(raw)

    async def _call(self, route: RoutePath) -> Any:
        if inspect.iscoroutinefunction(self._render):
            return await self._render(route)
        result = await asyncio.to_thread(self._render, route)
        if inspect.isawaitable(result):
            return await result
        return result


def _coerce(raw: Any) -> RenderResponse:
    """Normalise whatever the collaborator returned into a RenderResponse.

    Raises:
        TypeError: If the value, or its body, has an unsupported type.

    """
    if isinstance(raw, (str, bytes)):
        return RenderResponse(status=200, body=raw)
    if isinstance(raw, dict):
        raw = RenderResponse(
            status=int(raw.get("status", 200)),
            body=raw.get("body"),
            redirect_target=raw.get("redirect_target") or raw.get("location"),
            requires_server=bool(raw.get("requires_server", False)),
            links=tuple(raw.get("links") or ()),
        )
    if not isinstance(raw, RenderResponse):
        msg = f"render returned unsupported type {type(raw).__name__}"
        raise TypeError(msg)
    if not isinstance(raw.status, int):
        msg = f"render returned a status of unsupported type {type(raw.status).__name__}"
        raise TypeError(msg)
    if raw.body is not None and not isinstance(raw.body, (str, bytes, bytearray)):
        msg = f"render returned a body of unsupported type {type(raw.body).__name__}"
        raise TypeError(msg)
    return raw


def _classify(
    route: RoutePath,
    response: RenderResponse,
    *,
    attempts: int,
    transient: tuple[str, ...],
    duration_ms: float,
) -> RenderResult:
    common = {
        "route": route,
        "attempts": attempts,
        "transient_errors": transient,
        "duration_ms": duration_ms,
        "links": response.links,
    }
    status = response.status

    if 200 <= status < 300:
        if response.requires_server:
            return RenderResult(
                kind="dynamic", reason="route requires a live server", **common,
            )
        if response.body is None:
            return RenderResult(
                kind="failed", reason=f"status {status} with no body", **common,
            )
        body = response.body
        content = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        return RenderResult(kind="static", content=content, **common)

    if 300 <= status < 400:
        if not response.redirect_target:
            return RenderResult(
                kind="failed",
                reason=f"status {status} without a redirect target",
                **common,
            )
        return RenderResult(
            kind="redirect", redirect_target=response.redirect_target, **common,
        )

    return RenderResult(kind="failed", reason=f"status {status}", **common)


def _describe(exc: BaseException) -> str:
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


def _elapsed(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000

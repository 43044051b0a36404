"""Shared type definitions for pawprint."""

from collections.abc import Awaitable, Callable
from typing import Any, Literal, TypeAlias

# Route URL path (e.g., "/", "/about", "/blog/")
RoutePath: TypeAlias = str

# Output-relative POSIX file path (e.g., "about/index.html")
OutputPath: TypeAlias = str

# Lifecycle of a route inside the crawl
RouteStatus: TypeAlias = Literal["pending", "in-progress", "succeeded", "failed", "skipped"]

# Classification of a single render
OutcomeKind: TypeAlias = Literal["static", "dynamic", "redirect", "failed"]

# How routes without a file extension map onto files
TrailingSlash: TypeAlias = Literal["always", "never", "ignore"]

# What a policy knob does with a reportable condition
FailurePolicy: TypeAlias = Literal["warn", "fatal"]

# Render collaborator: sync or async callable taking a route path
RenderFunc: TypeAlias = Callable[[RoutePath], Any | Awaitable[Any]]

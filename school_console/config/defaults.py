"""school_console.config.defaults
===============================

Small, stable default values used across the data layer. They can be
overridden via environment variables or an external config file but give
sensible fallbacks for local development and tests.

This module imports nothing from the rest of the package so that any layer
may depend on it without cycles.
"""

from __future__ import annotations

# ---- Backend ----
# Base URL of the REST backend when nothing else is configured.
DEFAULT_API_BASE_URL = "http://localhost:3000"
# Health probe path, relative to the base URL.
DEFAULT_HEALTH_PATH = "/health"

# ---- HTTP transport ----
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0

# ---- Data units ----
# Items per page requested by the pagination unit.
DEFAULT_PAGE_SIZE = 20
# First page shown by paged list views.
DEFAULT_INITIAL_PAGE = 1
# Quiet period before a search box value propagates (seconds).
DEFAULT_DEBOUNCE_SECONDS = 0.3

# ---- Error messages ----
FETCH_ERROR_FALLBACK = "An error occurred"
MUTATION_ERROR_FALLBACK = "Mutation failed"
SUBMIT_ERROR_FALLBACK = "Submission failed"
NETWORK_ERROR_FALLBACK = "Network error occurred"

# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared constants for rezlog."""

from __future__ import annotations

# Extraction cache
DEFAULT_CACHE_TTL_SECONDS = 30.0
DEFAULT_MAX_CONSECUTIVE_FAILURES = 5

# Proximity windows (characters of rendered text)
DEFAULT_KEY_WINDOW_CHARS = 300
DEFAULT_REZ360_WINDOW_CHARS = 400
DEFAULT_PROFILE_WINDOW_CHARS = 600

# Report mode: more key-label matches than this means a listing is on screen
DEFAULT_REPORT_MATCH_THRESHOLD = 4

# Caller-side retry policy
DEFAULT_RETRY_ATTEMPTS = 5
DEFAULT_RETRY_INITIAL_DELAY_S = 0.25
DEFAULT_RETRY_BACKOFF = 2.0

# Formatting placeholders when the staff member cannot be identified
STAFF_PLACEHOLDER_INITIALS = "X.X"

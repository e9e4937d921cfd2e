# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception hierarchy for rezlog.

Missing fields and failed validation are ordinary outcomes and are reported
through result objects, not exceptions. These are reserved for inputs the
engine cannot work with at all.
"""


class RezLogError(Exception):
    """Base exception for rezlog."""

    pass


class ScopeError(RezLogError):
    """Snapshot could not be turned into a text scope."""

    pass


class PatternError(RezLogError):
    """A configured pattern failed to compile."""

    pass

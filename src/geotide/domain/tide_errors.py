# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Error types raised by the tidal acceleration model.

Every failure aborts the current evaluation; no partial or default
acceleration is ever returned. Earth orientation data being unavailable
is not an error: it only disables the pole tide terms.
"""


class TideModelError(RuntimeError):
    """Base class for tidal acceleration failures."""


class EphemerisNotInitializedError(TideModelError):
    """The ephemeris provider reports that it has not been initialized."""


class BodyLookupError(TideModelError):
    """An ephemeris, reduction or conversion collaborator failed.

    The collaborator's exception is attached as __cause__.
    """


class CoefficientTableUnavailableError(TideModelError):
    """The ocean tide coefficient table is missing or cannot be parsed."""

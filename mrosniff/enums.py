"""Canonical enums for session lifecycle."""

from __future__ import annotations

import enum


class SessionState(enum.StrEnum):
    UNINITIALIZED = "uninitialized"
    BUILT = "built"
    FINALIZED = "finalized"

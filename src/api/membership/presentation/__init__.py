"""Membership presentation layer."""

from __future__ import annotations

from membership.presentation.routes import router

__all__ = ["router"]

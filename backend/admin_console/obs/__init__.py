"""Observability package bootstrap."""

from __future__ import annotations

from fastapi import FastAPI

from admin_console.obs import logging as obs_logging
from admin_console.obs import middleware
from admin_console.settings import settings

_initialised = False


def init(app: FastAPI) -> None:
	global _initialised
	if settings.obs_enabled and not _initialised:
		obs_logging.configure_logging()
		_initialised = True
	middleware.install(app, enabled=settings.obs_enabled)


__all__ = ["init"]

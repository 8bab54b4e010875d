"""Ports implemented by infrastructure (DIP)."""

from site_content.application.interfaces.services import IContentApi

__all__ = ["IContentApi"]

"""Spine vector pipeline entry point."""

from spinevec.pipeline.processor import SpineVectorProcessor

__all__ = ['SpineVectorProcessor']

"""Renderers for the Markyfy token tree."""

from markyfy.renderers.html import HtmlRenderer, RenderContext

__all__ = ["HtmlRenderer", "RenderContext"]

"""
Rendering sinks for the presentation model: HTML (web page) and plain text (CLI).
"""

from txlens.render.html import render_html, render_page
from txlens.render.text import render_text

__all__ = ["render_html", "render_page", "render_text"]

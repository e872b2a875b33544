"""
Scrambled Net - Rendering Package
Text and matplotlib views of a board. The engine never imports these.
"""
from .text_render import render_text
from .net_render import NetRenderer, save_png

__all__ = ['render_text', 'NetRenderer', 'save_png']

from .renderer import RenderedPage, render, render_preview

__all__ = ["RenderedPage", "render", "render_preview"]

"""chatmark renderers.

Available Renderers:
- HtmlRenderer: Renders markdown lines to HTML using the StringBuilder pattern

Thread Safety:
All per-call state lives in a RenderContext created by render().
Safe for concurrent use from multiple threads.

"""

from chatmark.renderers.html import HtmlRenderer, RenderContext

__all__ = ["HtmlRenderer", "RenderContext"]

"""Terminal presentation: banners, status lines, boxes, spinner, instance picker."""

from gcloud_ssh.ui.render import RenderContext, Renderer
from gcloud_ssh.ui.selector import default_prompt, select_instance

__all__ = ["RenderContext", "Renderer", "default_prompt", "select_instance"]

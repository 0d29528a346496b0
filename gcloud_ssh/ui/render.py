"""Terminal rendering for the provisioning workflow.

The Renderer only displays things: it never decides anything and never
raises. Each public method measures the terminal once (RenderContext),
hands the measurements to the pure formatters in ``banner.py``, and falls
back to a plain ``print`` of the unstyled text if rich cannot render.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from gcloud_ssh import __version__
from gcloud_ssh.ui import banner

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24
MIN_BOX_WIDTH = 20


@dataclass(frozen=True)
class RenderContext:
    """Terminal measurements for one render pass."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    color: bool = False

    @classmethod
    def detect(cls, console: Console) -> "RenderContext":
        try:
            width, height = console.size
            color = console.color_system is not None
        except Exception as e:  # unknown terminal: render plain at the default size
            logger.debug(f"Terminal size detection failed: {e}")
            return cls()
        if width <= 0 or height <= 0:
            return cls()
        return cls(width=width, height=height, color=color)


class Renderer:
    """Styled output for the workflow, with plain-text fallback."""

    def __init__(self, console=None, show_banner=True, tutorial=True, show_tips=True):
        self.console = console or Console(highlight=False)
        self.show_banner = show_banner
        self.tutorial = tutorial
        self.show_tips = show_tips

    # ── plumbing ──────────────────────────────────────────────────

    def _emit(self, build, plain):
        """Print build(context); on any rendering failure print *plain* instead."""
        try:
            context = RenderContext.detect(self.console)
            self.console.print(build(context))
        except Exception as e:
            logger.debug(f"Falling back to plain output: {e}")
            print(plain, flush=True)

    def _status(self, message, style, symbol):
        def build(context):
            return Text(banner.fit(f"{symbol} {message}", context.width), style=style)

        self._emit(build, f"{symbol} {message}")

    # ── status lines ──────────────────────────────────────────────

    def info(self, message):
        self._status(message, "blue", "ℹ")

    def success(self, message):
        self._status(message, "bold green", "✔")

    def warning(self, message):
        self._status(message, "yellow", "!")

    def error(self, message):
        """Errors are wrapped, not truncated: the diagnostic must be readable in full."""

        def build(context):
            lines = banner.wrap_lines(f"✖ {message}", context.width)
            return Text("\n".join(lines), style="bold red")

        self._emit(build, f"✖ {message}")

    # ── sections ──────────────────────────────────────────────────

    def welcome(self):
        """Banner, greeting, tutorial box and keyboard tips, as configured."""
        if self.show_banner:
            self._emit(lambda c: banner.main_banner(c.width, c.height), f"{banner.APP_TITLE} v{__version__}")
        greeting = f"Welcome to {banner.APP_TITLE}! Let's set up your SSH access."
        self._emit(lambda c: Text("\n".join(banner.wrap_lines(greeting, c.width))), greeting)
        if self.tutorial:
            self.box(banner.tutorial_text())
        if self.show_tips:
            tips = "\n".join(banner.KEYBOARD_SHORTCUTS)
            self._emit(lambda c: Text(tips, style="dim", no_wrap=True, overflow="ellipsis"), tips)

    def section(self, title):
        self._emit(lambda c: Text("\n").append_text(banner.section_header(title, c.width)), f"\n== {title} ==")

    def box(self, body, title=None, style="bright_blue"):
        """Framed message no wider than the terminal."""

        def build(context):
            width = max(min(context.width, banner.MAX_RULE_WIDTH + 4), MIN_BOX_WIDTH)
            inner = max(width - 4, 1)
            lines = [line for paragraph in body.splitlines() for line in banner.wrap_lines(paragraph, inner)]
            return Panel(Text("\n".join(lines)), title=title, border_style=style, width=width, expand=False)

        self._emit(build, body)

    def choices(self, labels):
        """Numbered menu, one line per label, each clipped to the terminal width."""

        def build(context):
            return Group(*(banner.numbered_label(i, label, context.width) for i, label in enumerate(labels)))

        self._emit(build, "\n".join(f"[{i + 1}] {label}" for i, label in enumerate(labels)))

    def connection_info(self, instance, command):
        """Instance summary followed by the boxed ssh command."""
        self.section("CONNECTION INFORMATION")

        def build(context):
            summary = Text(no_wrap=True, overflow="ellipsis")
            for label, value in (("VM Name:", instance.name), ("Zone:", instance.zone), ("External IP:", instance.external_address)):
                summary.append(f"{label} ", style="yellow")
                summary.append(f"{value}\n")
            summary.append("\nTo connect to your VM, run:", style="green")
            return summary

        plain = (
            f"VM Name: {instance.name}\nZone: {instance.zone}\n"
            f"External IP: {instance.external_address}\n\nTo connect to your VM, run:"
        )
        self._emit(build, plain)

        def build_command(context):
            text = Text(command, style="bold bright_white", overflow="fold")
            width = min(len(command) + 8, max(context.width, MIN_BOX_WIDTH))
            return Panel(text, border_style="bright_blue", width=width, expand=False)

        self._emit(build_command, f"  {command}")

    def no_external_address(self, instance):
        """Explain why no ssh command is shown for *instance*."""
        self.warning(f"VM '{instance.name}' does not have an external IP address")
        self.info("Connect through IAP or a bastion host, e.g. 'gcloud compute ssh --tunnel-through-iap'.")

    # ── progress ──────────────────────────────────────────────────

    @contextmanager
    def spinner(self, message):
        """Show a spinner while the body runs.

        rich refreshes the spinner from its own thread; leaving the block
        stops it. Non-terminal consoles just get the message once.
        """
        status = None
        try:
            if self.console.is_terminal:
                status = self.console.status(message, spinner="dots")
                status.start()
            else:
                self.console.print(Text(message, style="blue"))
        except Exception as e:
            logger.debug(f"Spinner unavailable: {e}")
            status = None
            print(message, flush=True)
        try:
            yield
        finally:
            if status is not None:
                try:
                    status.stop()
                except Exception as e:
                    logger.debug(f"Failed to stop spinner: {e}")

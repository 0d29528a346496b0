"""Banners, headers and labels.

Pure formatting: every function takes the sizes it needs explicitly and
returns rich ``Text`` (or plain ``str``); nothing here reads the terminal.
"""

import textwrap

from rich.text import Text

from gcloud_ssh import __version__

APP_TITLE = "Google Cloud SSH Manager"
APP_TAGLINE = "Secure • Fast • Simple"

BANNER_ART = (
    "  ____  ____ _     ___  _   _ ____    ____ ____  _   _ ",
    " / ___|/ ___| |   / _ \\| | | |  _ \\  / ___/ ___|| | | |",
    "| |  _| |   | |  | | | | | | | | | | \\___ \\___ \\| |_| |",
    "| |_| | |___| |__| |_| | |_| | |_| |  ___) |__) |  _  |",
    " \\____|\\____|_____\\___/ \\___/|____/  |____/____/|_| |_|",
)

TUTORIAL_STEPS = (
    "Checking for an existing SSH key",
    "Creating a new key if needed",
    "Listing your Google Cloud VMs",
    "Selecting a VM to connect to",
    "Adding your SSH key to the VM",
    "Generating the SSH command for connection",
)

KEYBOARD_SHORTCUTS = (
    "Keyboard shortcuts:",
    "  - Press ↑/↓ to navigate",
    "  - Press Enter to select",
    "  - Press Ctrl+C to quit at any prompt",
)

RULE_CHAR = "─"
MAX_RULE_WIDTH = 60


def fit(text, width):
    """Truncate *text* to *width* columns, marking the cut with an ellipsis."""
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    if width == 1:
        return "…"
    return text[: width - 1] + "…"


def wrap_lines(text, width):
    """Wrap *text* to *width*, breaking words that are longer than a line."""
    width = max(width, 1)
    lines = []
    for paragraph in text.splitlines() or [""]:
        lines.extend(textwrap.wrap(paragraph, width=width, break_long_words=True) or [""])
    return lines


def main_banner(width, height) -> Text:
    """Large banner when it fits, a single title line otherwise."""
    art_width = max(len(line) for line in BANNER_ART)
    art_height = len(BANNER_ART) + 3
    banner = Text()
    if width >= art_width and height >= art_height * 2:
        rule = RULE_CHAR * min(width, art_width)
        banner.append(rule + "\n", style="bright_blue")
        for line in BANNER_ART:
            banner.append(line + "\n", style="bold bright_cyan")
        banner.append(fit(f"SSH MANAGER v{__version__}  {APP_TAGLINE}", width) + "\n", style="bright_white")
        banner.append(rule, style="bright_blue")
    else:
        banner.append(fit(f"{APP_TITLE} v{__version__}", width), style="bold bright_cyan")
    return banner


def section_header(title, width) -> Text:
    """``──── Title ────`` centred in at most MAX_RULE_WIDTH columns."""
    span = min(width, MAX_RULE_WIDTH)
    title = fit(title, max(span - 2, 1))
    pad = max((span - len(title) - 2) // 2, 0)
    header = Text()
    header.append(RULE_CHAR * pad, style="bright_blue")
    header.append(f" {title} ", style="bold bright_white")
    header.append(RULE_CHAR * pad, style="bright_blue")
    return header


def tutorial_text():
    steps = "\n".join(f"{i}. {step}" for i, step in enumerate(TUTORIAL_STEPS, 1))
    return f"This tool will guide you through the process of:\n{steps}"


def selection_label(instance):
    """Single-line menu label: name, zone and the external IP when there is one."""
    if instance.reachable:
        address = f" - IP: {instance.external_address}"
    else:
        address = " - No external IP"
    return f"{instance.name} (zone: {instance.zone}){address}"


def numbered_label(index, label, width) -> Text:
    """``[n] label`` menu line, truncated to *width*."""
    line = Text(no_wrap=True, overflow="ellipsis")
    line.append(f"[{index + 1}] ", style="bold bright_yellow")
    line.append(label, style="bright_cyan")
    line.truncate(max(width, 1), overflow="ellipsis")
    return line

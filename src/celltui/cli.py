"""
Command-line interface for celltui.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from celltui.application import Application, BackendInitError
from celltui.box import Widget
from celltui.config import AppConfig, ConfigError
from celltui.keybindings import KeybindingsManager
from celltui.keys import Key
from celltui.logging import setup_logging
from celltui.primitive import Primitive, RequestFocus
from celltui.screen.base import Screen
from celltui.theme import Theme, ThemeError, discover_themes, load_theme, resolve_theme
from celltui.widgets import Checkbox, InputField, List

console = Console()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="celltui terminal UI toolkit",
        prog="celltui",
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to a celltui YAML config file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    demo_parser = subparsers.add_parser("demo", help="Run a small interactive form")
    demo_parser.add_argument(
        "--theme",
        help="Theme name or path (overrides the config file)",
    )

    subparsers.add_parser("themes", help="List discovered themes")
    subparsers.add_parser("keys", help="Show key bindings")

    args = parser.parse_args(argv)

    try:
        config = _load_config(args.config)
    except (ConfigError, OSError) as e:
        console.print(f"[red]Failed to load config: {e}[/red]")
        sys.exit(1)

    # Setup logging based on verbosity
    level = "DEBUG" if args.verbose else config.log_level
    setup_logging(level, file=config.log_file)

    if args.command == "demo":
        cmd_demo(args, config)
    elif args.command == "themes":
        cmd_themes(args, config)
    elif args.command == "keys":
        cmd_keys(args, config)
    else:
        parser.print_help()


def _load_config(path: str | None) -> AppConfig:
    if path is None:
        return AppConfig()
    return AppConfig.from_yaml(Path(path))


# ---------------------------------------------------------------------------
# demo
# ---------------------------------------------------------------------------


class DemoPanel(Widget):
    """Draws its children stacked top to bottom inside a titled border."""

    def __init__(self, children: list[tuple[Primitive, int]], theme: Theme | None = None) -> None:
        super().__init__(theme)
        self.children = children
        self.box.set_border(True).set_title(" celltui demo ")

    def draw(self, screen: Screen) -> None:
        self.box.draw(screen)
        x, y, width, height = self.get_inner_rect()
        bottom = y + height
        for child, rows in self.children:
            if y >= bottom:
                break
            child.set_rect(x + 1, y, max(0, width - 2), min(rows, bottom - y))
            child.draw(screen)
            y += rows + 1

    def focus(self, request_focus: RequestFocus) -> None:
        if self.children:
            request_focus(self.children[0][0])


def build_demo(app: Application, theme: Theme) -> tuple[DemoPanel, InputField, Checkbox, List]:
    """Wire an input field, a checkbox and a list into a panel on *app*."""
    name = InputField(theme).set_label("Name: ").set_placeholder("type here").set_field_width(30)
    subscribe = Checkbox(theme).set_label("Subscribe: ")
    colours = List(theme)
    for index, colour in enumerate(("Red", "Green", "Blue")):
        colours.add_item(colour, f"Pick {colour.lower()}", str(index + 1))

    def after_name(key: Key) -> None:
        if key.name == "escape":
            app.stop()
        elif key.shift:
            app.set_focus(colours)
        else:
            app.set_focus(subscribe)

    def after_subscribe(key: Key) -> None:
        if key.name == "escape":
            app.stop()
        else:
            app.set_focus(colours)

    name.set_done_func(after_name)
    subscribe.set_done_func(after_subscribe)
    colours.set_done_func(app.stop)
    colours.set_selected_func(lambda index, main, secondary, shortcut: app.stop())

    panel = DemoPanel([(name, 1), (subscribe, 1), (colours, 6)], theme)
    return panel, name, subscribe, colours


def cmd_demo(args: argparse.Namespace, config: AppConfig) -> None:
    """Run the demo form until a colour is picked or escape is pressed."""
    try:
        theme = resolve_theme(args.theme or config.theme)
    except (ThemeError, OSError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    app = Application(config.screen, keybindings=KeybindingsManager.load(overrides=config.keybindings))
    panel, name, subscribe, colours = build_demo(app, theme)
    app.set_root(panel, fullscreen=True)

    try:
        app.run()
    except BackendInitError as e:
        console.print(f"[red]Cannot start the terminal UI: {e.cause}[/red]")
        sys.exit(1)

    picked = colours.get_item(colours.get_current_item()).main_text
    console.print(f"[bold]Name:[/bold] {name.get_text() or '-'}")
    console.print(f"[bold]Subscribe:[/bold] {'yes' if subscribe.is_checked() else 'no'}")
    console.print(f"[bold]Colour:[/bold] {picked}")


# ---------------------------------------------------------------------------
# themes / keys
# ---------------------------------------------------------------------------


def cmd_themes(args: argparse.Namespace, config: AppConfig) -> None:
    """List the built-in theme and every discovered theme file."""
    table = Table(title="Themes")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Source", style="dim")

    default = resolve_theme("default")
    table.add_row(default.name, default.description, "built-in")

    paths = discover_themes()
    for path in paths:
        try:
            theme = load_theme(path)
        except ThemeError as e:
            console.print(f"[yellow]Skipping {path}: {e}[/yellow]")
            continue
        table.add_row(theme.name, theme.description, str(path))

    console.print(table)
    console.print(f"\n[dim]Active: {config.theme}[/dim]")


def cmd_keys(args: argparse.Namespace, config: AppConfig) -> None:
    """Show the effective key bindings."""
    manager = KeybindingsManager.load(overrides=config.keybindings)

    table = Table(title="Key Bindings")
    table.add_column("Action", style="cyan")
    table.add_column("Keys")

    for action in manager.actions():
        table.add_row(action, ", ".join(manager.get_keys(action)))

    console.print(table)


if __name__ == "__main__":
    main()

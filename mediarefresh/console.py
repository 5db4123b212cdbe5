"""Console output for the refresh tools, built on rich."""

from rich.console import Console
from rich.markup import escape


class Log:
    """Prints status lines in the tool's colour scheme. Debug lines only show when verbose."""

    def __init__(self, console=None, verbose=False):
        self.console = console or Console(highlight=False)
        self.verbose = verbose

    def info(self, msg):
        self.console.print(f"    {escape(msg)}")

    def ok(self, msg):
        self.console.print(f"    [green]✔ {escape(msg)}[/]")

    def warn(self, msg):
        self.console.print(f"    [yellow]⚠ {escape(msg)}[/]")

    def error(self, msg):
        self.console.print(f"    [red]✖ {escape(msg)}[/]")

    def debug(self, msg):
        if not self.verbose: return
        self.console.print(f"    [dim]{escape(msg)}[/]")

    def header(self, msg):
        self.console.print(f"\n[bold cyan]{escape(msg)}[/]")

    def status(self, msg):
        """Spinner shown while blocking on a remote command."""
        return self.console.status(f"    [yellow]⏳ {escape(msg)}...[/]")


# Shared default, replaced by the CLI once --verbose is known.
log = Log()


def set_default(new_log):
    global log
    log = new_log
    return log


def get_default():
    return log

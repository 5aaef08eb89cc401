"""Console output for a mailing run."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from certificate_mailer.core.models import RunSummary

console = Console()

def display_welcome():
    """Displays a welcome message."""
    console.print(Panel(
        "[bold green]Data School Program - Certificate & Feedback Mailer[/bold green]",
        title="Welcome",
        border_style="blue"
    ))
    console.print("Sends each student on the roster their feedback and certificates by email.")
    console.rule()

def display_farewell():
    console.rule()
    console.print("[bold cyan]Mailing run complete. Exiting.[/bold cyan]")

def display_error(message: str):
    """Displays an error message in a standard format."""
    console.print(Panel(f"[bold red]Error:[/bold red] {message}", title="Error", border_style="red"))

def display_warning(message: str):
    console.print(f"[yellow]Warning:[/yellow] {message}")

def display_success(message: str):
    console.print(f"[green]Success:[/green] {message}")

def display_step(step_number: int, description: str):
    """Displays the current step in the process."""
    console.print(f"\n[bold blue]Step {step_number}:[/bold blue] {description}")
    console.rule()

def display_summary(summary: RunSummary):
    """Displays the run counters as a table."""
    table = Table(title="Mailing Results", show_header=True, header_style="bold magenta")
    table.add_column("Outcome", style="cyan")
    table.add_column("Rows", justify="right")
    table.add_row("Sent", f"[green]{summary.sent}[/green]")
    table.add_row("Failed", f"[red]{summary.failed}[/red]" if summary.failed else "0")
    table.add_row("Skipped (no email)", str(summary.skipped))
    table.add_row("Total", str(summary.total), style="bold")
    console.print(table)

import os

import pyfiglet
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from hacksniff.models import Verdict

console = Console()


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def print_welcome():
    clear_screen()
    ascii_banner = pyfiglet.figlet_format("HACKSNIFF", font="slant")
    console.print(f"[bold magenta]{ascii_banner}[/bold magenta]")
    console.print("[dim]" + "─" * 80 + "[/dim]")
    console.print("[bold white]Paste a GitHub repository URL to check it for AI-generated development patterns "
                  "and hackathon eligibility.[/bold white]")
    console.print("[dim]Type 'exit' to quit.[/dim]\n")


def analysis_status(repo_url: str):
    return console.status(f"[cyan]Sniffing {escape(repo_url)}...[/cyan]", spinner="dots")


def format_likelihood(likelihood: int) -> str:
    if likelihood >= 70:
        color = "red bold"
    elif likelihood >= 30:
        color = "yellow"
    else:
        color = "green"
    return f"[{color}]{likelihood}%[/{color}]"


def format_details(details) -> str:
    formatted = []
    for d in details:
        if d.startswith("⚠️"):
            formatted.append(f"[bold red]{escape(d)}[/bold red]")
        else:
            formatted.append(f"[dim]•[/dim] {escape(d)}")
    return "\n".join(formatted)


def format_findings(findings) -> str:
    if not findings:
        return "[dim]None[/dim]"
    return "\n".join(f"[yellow]•[/yellow] {escape(f)}" for f in findings)


def build_signals_table(verdict: Verdict) -> Table:
    s = verdict.signals
    table = Table(title="Commit Signals", show_header=True, header_style="bold cyan")
    table.add_column("Signal", style="dim", width=26)
    table.add_column("Value")
    table.add_row("Total commits", str(s.total_commits))
    table.add_row("Verified commits", f"{s.verified_commits} ({s.verification_ratio}%)")
    table.add_row("Rapid commit sequences", str(s.rapid_commit_count))
    table.add_row("File patterns", format_findings(s.file_patterns))
    table.add_row("Time patterns", format_findings(s.time_patterns))
    if verdict.has_marker is not None:
        table.add_row("Bolt.new badge", "[bold]detected[/bold]" if verdict.has_marker else "not found")
    return table


def render_opinion(verdict: Verdict):
    opinion = verdict.opinion
    body = (
        f"{escape(opinion.summary)}\n\n"
        f"[bold]Key findings[/bold]\n{format_findings(opinion.key_findings)}\n\n"
        f"[bold]Recommendations[/bold]\n{format_findings(opinion.recommendations)}"
    )
    console.print(Panel(body, title="[bold]AI Assessment[/bold]", border_style="cyan", expand=False))


def render_verdict(verdict: Verdict):
    """Render the final summary verdict panel."""
    if verdict.is_likely_automated:
        verdict_icon = "🔴"
        verdict_label = "LIKELY AI-GENERATED"
        verdict_color = "bold red"
    elif verdict.likelihood >= 30:
        verdict_icon = "🟡"
        verdict_label = "MIXED / UNCERTAIN"
        verdict_color = "bold yellow"
    else:
        verdict_icon = "🟢"
        verdict_label = "LIKELY HUMAN-WRITTEN"
        verdict_color = "bold green"

    eligibility = "[green]eligible[/green]" if verdict.is_eligible else "[bold red]not eligible[/bold red]"

    summary_text = (
        f"[{verdict_color}]{verdict_icon}  VERDICT: {verdict_label}[/{verdict_color}]\n\n"
        f"  Repository          : {escape(verdict.repo_url)}\n"
        f"  AI-Likelihood Score : {format_likelihood(verdict.likelihood)}\n"
        f"  Confidence          : {verdict.confidence}\n"
        f"  Hackathon           : {eligibility}\n\n"
        f"{format_details(verdict.details)}"
    )

    console.print()
    console.print(Panel(
        summary_text,
        title="[bold]Analysis Complete[/bold]",
        border_style=verdict_color.replace("bold ", ""),
        expand=False,
        padding=(1, 4)
    ))
    console.print()


def render_report(verdict: Verdict):
    console.print(build_signals_table(verdict))
    render_opinion(verdict)
    render_verdict(verdict)


def render_error(message: str):
    console.print(f"[bold red]Error[/bold red]: {escape(message)}")

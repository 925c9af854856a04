import json
import sys

import questionary
import typer

from hacksniff.config import Settings
from hacksniff.errors import SniffError
from hacksniff.github_client import parse_repo_url
from hacksniff.logging_config import setup_logging
from hacksniff.models import Verdict
from hacksniff.pipeline import Analyzer
from hacksniff.ui import analysis_status, console, print_welcome, render_error, render_report

app = typer.Typer(help="Hackathon AI-generation and eligibility checker for GitHub repositories", add_completion=False)


def _run_check(repo_url: str, offline: bool = False, check_badge: bool = True) -> Verdict:
    # Reject bad input before touching configuration or the network
    parse_repo_url(repo_url)
    settings = Settings.from_env()
    analyzer = Analyzer.from_settings(settings, offline=offline, check_badge=check_badge)
    return analyzer.analyze(repo_url)


@app.command(name="check")
def check_cmd(
    repo_url: str = typer.Argument(..., help="GitHub repository URL, e.g. https://github.com/owner/repo"),
    export_json: bool = typer.Option(False, "--json", help="Print the verdict as JSON"),
    no_llm: bool = typer.Option(False, "--no-llm", help="Skip Claude and use the deterministic assessment"),
    no_badge: bool = typer.Option(False, "--no-badge", help="Skip the bolt.new badge lookup"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    """Analyze a repository and report AI-likelihood and hackathon eligibility."""
    setup_logging(verbose=verbose, quiet=export_json and not verbose)

    try:
        if export_json:
            verdict = _run_check(repo_url, offline=no_llm, check_badge=not no_badge)
        else:
            with analysis_status(repo_url):
                verdict = _run_check(repo_url, offline=no_llm, check_badge=not no_badge)
    except SniffError as e:
        if export_json:
            print(json.dumps(e.to_dict()))
        else:
            render_error(e.detail)
        raise typer.Exit(code=e.exit_code)

    if export_json:
        print(json.dumps(verdict.to_dict(), indent=2, ensure_ascii=False))
        return

    render_report(verdict)


@app.command(name="interactive")
def interactive_cmd(
    no_llm: bool = typer.Option(False, "--no-llm", help="Skip Claude and use the deterministic assessment"),
):
    """Prompt for repository URLs until you quit."""
    setup_logging()
    print_welcome()

    while True:
        try:
            repo_url = questionary.text("Repository URL:", qmark=">").ask()
        except KeyboardInterrupt:
            repo_url = None

        # Ctrl+C / EOF
        if repo_url is None:
            console.print("\n[dim]Session terminated.[/dim]")
            break

        repo_url = repo_url.strip()
        if not repo_url:
            continue
        if repo_url.lower() in ["exit", "quit", "q"]:
            console.print("[dim]Goodbye![/dim]")
            break

        try:
            with analysis_status(repo_url):
                verdict = _run_check(repo_url, offline=no_llm)
        except SniffError as e:
            render_error(e.detail)
            continue
        render_report(verdict)


def main():
    if len(sys.argv) == 1:
        interactive_cmd(no_llm=False)
    else:
        app()


if __name__ == "__main__":
    main()

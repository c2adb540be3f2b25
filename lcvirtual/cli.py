"""Command-line interface for lcvirtual."""

from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .client import ContestRef, LeetCodeClient
from .config import LocalConfig
from .config.global_config import SITES
from .utils.files import LANGS
from .utils.terminal import create_table
from .virtual.dispatcher import CommandDispatcher
from .virtual.errors import VirtualContestError
from .virtual.lifecycle import ContestLifecycleController
from .virtual.progress import ProgressTracker
from .virtual.resolver import ContestResolver
from .virtual.session import VirtualIntent, VirtualSession


console = Console()


@click.group()
@click.version_option(version=__version__)
def cli():
    """lcvirtual - CLI for LeetCode virtual contests."""
    pass


@cli.command()
@click.option("--site", type=click.Choice(sorted(SITES)), default="us", help="Judge site")
def login(site: str):
    """Save LeetCode session cookies for future use."""
    client = LeetCodeClient()
    client.config.site = site

    user = click.prompt("Username", default="", show_default=False)
    session_cookie = click.prompt("LEETCODE_SESSION", hide_input=True)
    csrftoken = click.prompt("csrftoken", hide_input=True)

    client.login(session_cookie, csrftoken, user)
    console.print(f"[green]Saved session for {escape(user or site)}[/green]")


@cli.command()
@click.argument("contestname")
@click.option("-a", "--start", is_flag=True, default=False, help="Start Contest")
@click.option("-b", "--end", is_flag=True, default=False, help="End Contest")
@click.option("-r", "--myrank", is_flag=True, default=False, help="Get MyRank")
@click.option("-v", "--view", is_flag=True, default=False, help="View all questions")
@click.option("-f", "--filename", default="", help="File Name To Run/Submit")
@click.option("-t", "--testcase", default="", help="Provide test case")
@click.option("-s", "--submit", is_flag=True, default=False, help="Submit Problem")
@click.option(
    "-q", "--question", type=int, default=-1, help="Show Question by Serial No [0,3]"
)
@click.option("-e", "--editor", default=None, help="Open source code in editor")
@click.option("-g", "--gen", is_flag=True, default=False, help="Generate source code")
@click.option("-o", "--outdir", default=None, help="Where to save source code")
@click.option(
    "-x",
    "--extra",
    is_flag=True,
    default=False,
    help="Show extra question details in source code",
)
@click.option(
    "-l",
    "--lang",
    type=click.Choice(sorted(LANGS)),
    default=None,
    help="Programming language of the source code",
)
@click.option("--debug", is_flag=True, default=False, help="Enable debug output")
@click.pass_context
def virtual(
    ctx: click.Context,
    contestname: str,
    start: bool,
    end: bool,
    myrank: bool,
    view: bool,
    filename: str,
    testcase: str,
    submit: bool,
    question: int,
    editor: Optional[str],
    gen: bool,
    outdir: Optional[str],
    extra: bool,
    lang: Optional[str],
    debug: bool,
):
    """Start, inspect, test, submit and rank a virtual contest.

    \b
    Examples:
      lcvirtual virtual weekly-contest-175
      lcvirtual virtual weekly-contest-175 --start
      lcvirtual virtual weekly-contest-175 --question 0 -gx
      lcvirtual virtual weekly-contest-175 -f 1346.check-if-n-and-its-double-exist.cpp
      lcvirtual virtual weekly-contest-175 -f 1346.check-if-n-and-its-double-exist.cpp --submit
      lcvirtual virtual weekly-contest-175 --myrank
      lcvirtual virtual weekly-contest-175 --end
    """
    config = LocalConfig.load() or LocalConfig()
    intent = VirtualIntent(
        contest=contestname,
        start=start,
        end=end,
        myrank=myrank,
        view=view,
        filename=filename,
        testcase=testcase,
        submit=submit,
        question=question,
        editor=editor,
        gen=gen,
        outdir=outdir or config.outdir,
        extra=extra,
        lang=lang or config.lang,
    )

    client = LeetCodeClient(debug=debug)
    if not client.has_session():
        console.print("[yellow]Not logged in. Run 'lcvirtual login' first.[/yellow]")

    session = VirtualSession(
        intent=intent, tracker=ProgressTracker(), console=console, debug=debug
    )

    try:
        if start or end:
            controller = ContestLifecycleController(client, console)
            if start:
                controller.start(contestname)
            else:
                controller.end(contestname)
            return

        if myrank:
            ContestLifecycleController(client, console).rank(contestname)
            return

        entries = ContestResolver(client, session).resolve(ContestRef(contestname))
        CommandDispatcher(client, session).dispatch(entries)
    except VirtualContestError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        if e.fatal:
            ctx.exit(1)


@cli.command(name="config")
@click.option(
    "-l", "--lang", type=click.Choice(sorted(LANGS)), default=None, help="Default language"
)
@click.option("-o", "--outdir", default=None, help="Default directory for generated code")
def config_cmd(lang: Optional[str], outdir: Optional[str]):
    """Show or update the local configuration."""
    path = LocalConfig.find_config()
    config = LocalConfig.load(path) or LocalConfig()

    if lang is None and outdir is None:
        console.print(f"[bold cyan]Language:[/bold cyan] {config.lang}")
        console.print(f"[bold cyan]Output Dir:[/bold cyan] {escape(config.outdir)}")
        return

    if lang is not None:
        config.lang = lang
    if outdir is not None:
        config.outdir = outdir
    config.save(path)

    console.print(
        f"[green]Default language: {config.lang}, "
        f"output dir: {escape(config.outdir)}[/green]"
    )


@cli.command()
@click.argument("contestname")
@click.option("--cancel", is_flag=True, default=False, help="Un-register instead")
def register(contestname: str, cancel: bool):
    """Register for a contest."""
    controller = ContestLifecycleController(LeetCodeClient(), console)
    try:
        if cancel:
            controller.unregister(contestname)
        else:
            controller.register(contestname)
    except VirtualContestError as e:
        console.print(f"[red]{escape(str(e))}[/red]")


@cli.command()
def stat():
    """Show accepted problems per day."""
    stats = ProgressTracker().stats()

    if not stats:
        console.print("[yellow]No statistics yet.[/yellow]")
        return

    table = create_table("Statistics", ["Date", "Accepted", "Problems"])
    for day, values in stats.items():
        table.add_row(
            day,
            str(values.get("ac", 0)),
            ", ".join(str(fid) for fid in values.get("ac.set", [])),
        )

    console.print(table)


@cli.command()
def version():
    """Show version information."""
    console.print(f"[bold cyan]lcvirtual[/bold cyan] version [green]{__version__}[/green]")
    console.print("CLI for LeetCode virtual contests")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

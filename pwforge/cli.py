#!/usr/bin/env python3
"""
PwForge - Password generator and strength meter CLI
"""
import logging
import sys
from dataclasses import replace

import click
from tabulate import tabulate

from . import __version__
from .charsets import CharacterClass, ordered
from .clipboard import CopyOutcome, copy_to_clipboard, notify, take_pending_clears
from .config import Settings, load_settings
from .exceptions import ConfigError, InvalidRequest
from .generator import GenerationRequest, NoClassesSelected, generate, generate_many
from .random_source import RandomSource, default_source
from .strength import NEUTRAL, StrengthResult, estimate, format_strength_bar

logger = logging.getLogger(__name__)

INSECURE_WARNING = (
    "⚠️  No secure random generator on this system. "
    "These passwords were made with a weaker generator."
)


def get_settings(ctx: click.Context) -> Settings:
    return ctx.obj['settings']


def get_source(ctx: click.Context) -> RandomSource:
    """Random source from the context, or the process-wide default"""
    if ctx.obj.get('source') is None:
        ctx.obj['source'] = default_source()
    return ctx.obj['source']


def build_request(length: int, classes) -> GenerationRequest:
    try:
        return GenerationRequest(length, frozenset(classes))
    except InvalidRequest as e:
        raise click.BadParameter(str(e), param_hint="'--length'")


def warn_if_insecure(source: RandomSource):
    if not source.is_secure:
        click.echo(click.style(INSECURE_WARNING, fg='yellow'), err=True)


def render_strength(result: StrengthResult) -> str:
    if result.is_neutral:
        return f"Strength: {result.text}"
    return f"Strength: {format_strength_bar(result)}"


def display_header(title, width=60):
    """Display a header box"""
    click.echo("\n    ┌" + "─" * (width - 2) + "┐")
    click.echo(f"    │ {title:<{width - 4}} │")
    click.echo("    └" + "─" * (width - 2) + "┘")
    click.echo()


def report_copy(outcome: CopyOutcome, timeout: float, toast_seconds: float):
    notify(outcome.message, toast_seconds, err=outcome is CopyOutcome.FAILED)
    if outcome is CopyOutcome.COPIED and timeout > 0:
        click.echo(f"    ⏱️  Clipboard will auto-clear in {timeout} seconds")


@click.group()
@click.version_option(version=__version__, prog_name="PwForge")
@click.option('--log-level', default='WARNING',
              type=click.Choice(['CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG'], case_sensitive=False),
              help='Logging verbosity')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='Settings file (default: ~/.pwforge/config.json)')
@click.pass_context
def cli(ctx, log_level, config_path):
    """PwForge - Generate random passwords and check their strength

    Every password contains at least one character from each enabled
    character type. Nothing you generate is ever stored.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(levelname)s: %(message)s",
    )
    ctx.ensure_object(dict)
    if 'settings' not in ctx.obj:
        try:
            ctx.obj['settings'] = load_settings(config_path)
        except ConfigError as e:
            raise click.UsageError(f"Bad configuration: {e}")


@cli.command('generate')
@click.option('--length', '-l', type=int, help='Password length')
@click.option('--count', '-c', default=1, type=click.IntRange(min=1), help='Number of passwords to generate')
@click.option('--lower/--no-lower', default=None, help='Include lowercase letters')
@click.option('--upper/--no-upper', default=None, help='Include uppercase letters')
@click.option('--digits/--no-digits', default=None, help='Include numbers')
@click.option('--symbols/--no-symbols', default=None, help='Include symbols')
@click.option('--copy', 'copy_', is_flag=True, help='Copy the (first) password to the clipboard')
@click.option('--timeout', '-t', type=int, help='Clear clipboard after N seconds (0 = don\'t clear)')
@click.option('--show-strength/--hide-strength', default=True, help='Show the strength meter')
@click.pass_context
def generate_cmd(ctx, length, count, lower, upper, digits, symbols, copy_, timeout, show_strength):
    """Generate passwords without saving them"""
    settings = get_settings(ctx)
    classes = set(settings.classes)
    overrides = {
        CharacterClass.LOWERCASE: lower,
        CharacterClass.UPPERCASE: upper,
        CharacterClass.DIGIT: digits,
        CharacterClass.SYMBOL: symbols,
    }
    for cls, enabled in overrides.items():
        if enabled is True:
            classes.add(cls)
        elif enabled is False:
            classes.discard(cls)

    request = build_request(settings.length if length is None else length, classes)
    source = get_source(ctx)
    results = generate_many(request, count, source)
    logger.debug("Generated %d result(s) of length %d", count, request.effective_length)

    if isinstance(results[0], NoClassesSelected):
        click.echo(f"❌ {results[0].message}", err=True)
        if show_strength:
            click.echo(render_strength(NEUTRAL))
        sys.exit(1)

    warn_if_insecure(source)
    if request.effective_length > request.length:
        click.echo(
            f"ℹ️  Length raised to {request.effective_length} so each of the "
            f"{len(request.classes)} character types appears", err=True
        )

    for i, password in enumerate(results):
        prefix = "" if count == 1 else f"{i + 1}. "
        click.echo(prefix + click.style(password, fg='green', bold=True))
        if show_strength:
            click.echo(" " * len(prefix) + render_strength(estimate(password)))

    if copy_:
        timeout = settings.clipboard_timeout if timeout is None else timeout
        outcome = copy_to_clipboard(results[0], timeout)
        report_copy(outcome, timeout, settings.toast_seconds)
        if outcome is CopyOutcome.FAILED:
            sys.exit(1)
        for pending in take_pending_clears():
            click.echo("    ⏳ Waiting to clear clipboard (Ctrl+C to clear now)")
            pending.wait()
            click.echo("    🧹 Clipboard cleared")


@cli.command()
@click.argument('passwords', nargs=-1)
@click.option('--show', '-S', is_flag=True, help='Show passwords in plain text')
def strength(passwords, show):
    """Check the strength of one or more passwords

    With no arguments the password is read from a hidden prompt.
    """
    if not passwords:
        passwords = (click.prompt("Password", hide_input=True, default="", show_default=False),)

    headers = ['Password', 'Score', 'Strength', 'Rating']
    table_data = []
    for password in passwords:
        result = estimate(password)
        shown = password if show else '•' * len(password)
        table_data.append([shown, f"{result.score}/6", f"{result.percentage}%", result.text])

    click.echo(tabulate(table_data, headers=headers, tablefmt='simple_grid'))


def interactive_screen(settings: Settings, password, result: StrengthResult):
    click.clear()
    display_header("Password Generator")

    click.echo("    Current Settings:")
    click.echo("    " + "─" * 40)
    click.echo(f"    Length:     {settings.length} characters")
    for number, cls in enumerate(CharacterClass, 1):
        mark = '✓' if cls in settings.classes else '✗'
        click.echo(f"    {number}. {cls.label + ':':<11} {mark}")

    click.echo("\n    Generated Password:")
    click.echo("    " + "─" * 40)
    if isinstance(password, NoClassesSelected):
        click.echo(f"    {click.style(password.message, fg='yellow')}")
    else:
        click.echo(f"    {click.style(password, fg='green', bold=True)}")
    click.echo(f"    {render_strength(result)}")


@cli.command()
@click.pass_context
def interactive(ctx):
    """Generate passwords from an interactive menu"""
    settings = get_settings(ctx)
    source = get_source(ctx)
    classes = list(CharacterClass)

    def regenerate(current: Settings):
        password = generate(GenerationRequest(current.length, current.classes), source)
        if isinstance(password, NoClassesSelected):
            return password, NEUTRAL
        return password, estimate(password)

    password, result = regenerate(settings)
    while True:
        interactive_screen(settings, password, result)
        if not source.is_secure:
            click.echo(click.style(f"\n    {INSECURE_WARNING}", fg='yellow'))

        click.echo("\n    Actions: (C)opy  (R)egenerate  (L)ength  (1-4) Toggle type  (Q)uit")
        action = click.prompt("\n    Action", type=str, default="r").strip().lower()

        if action == "q":
            # The process is about to exit, so restore the clipboard now
            for pending in take_pending_clears():
                pending.now()
            break
        elif action == "r":
            password, result = regenerate(settings)
        elif action == "c":
            outcome = copy_to_clipboard(password, settings.clipboard_timeout)
            report_copy(outcome, settings.clipboard_timeout, settings.toast_seconds)
        elif action == "l":
            length = click.prompt("    Length", type=click.IntRange(min=1), default=settings.length)
            settings = replace(settings, length=length)
            password, result = regenerate(settings)
        elif action in ("1", "2", "3", "4"):
            settings = settings.toggled(classes[int(action) - 1])
            password, result = regenerate(settings)
        else:
            notify("Invalid option. Please try again.", settings.toast_seconds, err=True)


@cli.command('config')
@click.pass_context
def show_config(ctx):
    """Show the effective settings"""
    settings = get_settings(ctx)
    values = settings.as_dict()
    rows = [
        ['Length', values['length']],
        ['Character types', ", ".join(cls.label for cls in ordered(settings.classes)) or "(none)"],
        ['Clipboard timeout', f"{values['clipboard_timeout']}s"],
        ['Notice duration', f"{values['toast_seconds']}s"],
    ]
    click.echo(tabulate(rows, headers=['Setting', 'Value'], tablefmt='simple_grid'))


@cli.command()
def version():
    """Show PwForge version and info"""
    click.echo("\n🔐 PwForge Password Generator")
    click.echo(f"Version: {__version__}")
    click.echo("License: MIT")
    click.echo("\nRandom passwords with guaranteed character coverage")
    click.echo("Nothing you generate is stored.")
    click.echo("\nFor help: pwforge --help")


# Entry point
if __name__ == '__main__':
    cli()

"""Command line interface for Akwaaba Passwords."""

from __future__ import annotations

import getpass
import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from akwaaba_passwords import __version__
from akwaaba_passwords.errors import PolicyError
from akwaaba_passwords.generator import DEFAULT_GENERATED_LENGTH, generate_secure_password
from akwaaba_passwords.password_strength import IdentityHint, StrengthResult, evaluate_password, strength_label
from akwaaba_passwords.policy import PasswordPolicy, load_policy, policy_as_dict

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_WEAK = 2
EXIT_FS = 3

# rich markup colors for each score
_SCORE_STYLES = {0: "red", 1: "dark_orange", 2: "yellow", 3: "blue", 4: "green"}

console = Console()


def _package_version() -> str:
    try:
        return version("akwaaba-passwords")
    except PackageNotFoundError:
        return __version__


def _prompt_password(password_opt: str | None) -> str:
    if password_opt is not None:
        return password_opt
    return getpass.getpass("Password: ")


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _handle_action(action: Callable[[], int]) -> int:
    try:
        return action()
    except PolicyError as exc:
        console.print(f"[red]Invalid policy:[/red] {exc}")
        return EXIT_USAGE
    except FileNotFoundError as exc:
        console.print(f"[red]File not found:[/red] {exc}")
        return EXIT_FS
    except PermissionError as exc:
        console.print(f"[red]Permission denied:[/red] {exc}")
        return EXIT_FS
    except OSError as exc:  # noqa: BLE001
        console.print(f"[red]Filesystem error:[/red] {exc}")
        return EXIT_FS


def _load_policy_opt(policy_path: Path | None) -> Optional[PasswordPolicy]:
    if policy_path is None:
        return None
    return load_policy(policy_path)


def _check_mark(ok: bool) -> str:
    return "[green]yes[/green]" if ok else "[red]no[/red]"


def _render_result(result: StrengthResult) -> None:
    style = _SCORE_STYLES.get(result.score, "white")
    table = Table(show_header=False, box=None)
    table.add_row("Score", f"[{style}]{result.score}/4 ({strength_label(result.score)})[/{style}]")
    reqs = result.requirements
    table.add_row("Minimum length", _check_mark(reqs.min_length))
    table.add_row("Uppercase", _check_mark(reqs.has_uppercase))
    table.add_row("Lowercase", _check_mark(reqs.has_lowercase))
    table.add_row("Numbers", _check_mark(reqs.has_numbers))
    table.add_row("Special characters", _check_mark(reqs.has_special_chars))
    table.add_row("No common patterns", _check_mark(reqs.no_common_patterns))
    table.add_row("No personal info", _check_mark(reqs.no_personal_info))

    console.print("[bold]Password strength[/bold]")
    console.print(table)
    if result.feedback:
        console.print("Feedback:")
        for line in result.feedback:
            console.print(f"  - {line}", markup=False)
    if result.suggestions:
        console.print("Suggestions:")
        for line in result.suggestions:
            console.print(f"  - {line}", markup=False)


_policy_option = click.option(
    "--policy",
    "policy_path",
    type=click.Path(path_type=Path),
    help="JSON file with policy overrides (defaults apply to missing fields).",
)


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=False,
)
@click.version_option(version=_package_version(), prog_name="Akwaaba Passwords")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Check password strength and generate secure passwords."""
    _configure_logging(verbose)


@cli.command(
    help="Score a password against the password policy.",
    epilog="Examples:\n  akpass check\n  akpass check --policy policy.json --email jane@example.com",
)
@click.option("--password", "password_opt", help="Password to check (will prompt if omitted).")
@_policy_option
@click.option("--email", default=None, help="Account email; its local part must not appear in the password.")
@click.option("--name", default=None, help="Display name; its words must not appear in the password.")
@click.pass_context
def check(
    ctx: click.Context,
    password_opt: str | None,
    policy_path: Path | None,
    email: str | None,
    name: str | None,
) -> None:
    def _run() -> int:
        policy = _load_policy_opt(policy_path)
        password = _prompt_password(password_opt)
        identity = IdentityHint(email=email, name=name) if (email or name) else None
        result = evaluate_password(password, policy, identity)
        _render_result(result)
        if result.meets_requirements:
            console.print("[green]Password meets the policy requirements.[/green]")
            return EXIT_SUCCESS
        console.print("[red]Password does not meet the policy requirements.[/red]")
        return EXIT_WEAK

    ctx.exit(_handle_action(_run))


@cli.command(
    help="Generate random passwords containing every character class.",
    epilog="Examples:\n  akpass generate\n  akpass generate --length 24 --count 3",
)
@click.option(
    "--length",
    type=click.IntRange(min=1),
    default=DEFAULT_GENERATED_LENGTH,
    show_default=True,
    help="Password length (values below 4 are raised to 4).",
)
@click.option("--count", type=click.IntRange(min=1), default=1, show_default=True, help="How many passwords.")
@click.pass_context
def generate(ctx: click.Context, length: int, count: int) -> None:
    for _ in range(count):
        click.echo(generate_secure_password(length))
    ctx.exit(EXIT_SUCCESS)


@cli.command(help="Show the effective password policy.", epilog="Example:\n  akpass policy --policy policy.json")
@_policy_option
@click.pass_context
def policy(ctx: click.Context, policy_path: Path | None) -> None:
    def _run() -> int:
        active = _load_policy_opt(policy_path) or PasswordPolicy()
        table = Table(show_header=False, box=None)
        for key, value in policy_as_dict(active).items():
            table.add_row(key.replace("_", " "), "none" if value is None else str(value))
        console.print("[bold]Password policy[/bold]")
        console.print(table)
        return EXIT_SUCCESS

    ctx.exit(_handle_action(_run))


@cli.command(name="version", help="Show the package version.")
@click.pass_context
def version_command(ctx: click.Context) -> None:
    click.echo(f"Akwaaba Passwords, version {_package_version()}")
    ctx.exit(EXIT_SUCCESS)


def main(argv: list[str] | None = None) -> int:
    try:
        return cli.main(args=argv, prog_name="akpass", standalone_mode=False)
    except SystemExit as exc:  # noqa: TRY003
        code = exc.code if isinstance(exc.code, int) else EXIT_USAGE
        return code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

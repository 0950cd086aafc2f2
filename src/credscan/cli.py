"""credscan CLI: Typer application with scan and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from credscan import __version__

app = typer.Typer(
    name="credscan",
    help="Find leaked passwords, tokens and API keys in a source tree.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _diag(line: str) -> None:
    """Print a diagnostic line verbatim (no Rich markup in scanned text)."""
    console.print(line, markup=False, highlight=False, soft_wrap=True)


def _error(label: str, exc: object) -> None:
    console.print(f"[bold red]{label}:[/bold red] {escape(str(exc))}", highlight=False)


def _warn(exc: object) -> None:
    console.print(f"[yellow]{escape('[WARN]')}[/yellow] {escape(str(exc))}", highlight=False)


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    path: str = typer.Argument(".", help="File or directory to scan"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .credscan.toml"),
    fptn: Optional[str] = typer.Option(None, "--fptn", "-f", help="Filename regex to include"),
    exclude: Optional[str] = typer.Option(None, "--exclude", "-e", help="File/dir name regex to exclude"),
    default_exclude: Optional[str] = typer.Option(
        None, "--default-exclude", "-d", help="Default exclude regex; pass '' to disable"
    ),
    path_exclude: Optional[str] = typer.Option(None, "--path-exclude", help="Full path regex to exclude"),
    skip_binary: Optional[bool] = typer.Option(
        None, "--skip-binary/--no-skip-binary", help="Skip files that look binary"
    ),
    regexp: Optional[List[str]] = typer.Option(
        None, "--regexp", "-r", help="Extra credential regex (group 1 label, group 2 value); repeatable"
    ),
    check_mode: Optional[str] = typer.Option(
        None, "--check-mode",
        help="letter | digit | special | letter+digit | letter+word | letter+digit+word | all",
    ),
    words_file: Optional[str] = typer.Option(None, "--words-file", help="English word list path"),
    words_url: Optional[str] = typer.Option(None, "--words-url", help="Where to download the word list"),
    entropy_threshold: Optional[float] = typer.Option(
        None, "--entropy-threshold", help="Reject values below this Shannon entropy (0 = off)"
    ),
    min_length: Optional[int] = typer.Option(None, "--min-length", help="Shortest value treated as a secret"),
    profile: Optional[str] = typer.Option(None, "--profile", help="Previous run output; its findings are suppressed"),
    save_profile: Optional[str] = typer.Option(
        None, "--save-profile",
        help="Write this run's findings to a file; add --debug so a later --profile can match them",
    ),
    batch_size: Optional[int] = typer.Option(None, "--batch-size", help="Files per worker task"),
    workers: Optional[int] = typer.Option(None, "--workers", help="Worker threads (default: CPU count)"),
    format: Optional[str] = typer.Option(None, "--format", help="Output format: json | terminal"),
    debug: Optional[bool] = typer.Option(
        None, "--debug/--no-debug", help="Print values unmasked and trace raw matches. Never use in CI."
    ),
) -> None:
    """Scan PATH for credentials. Exit 1 when any finding survives."""
    from credscan.config.loader import ConfigError, load_config, validate_config
    from credscan.config.schema import uses_dictionary
    from credscan.output import json_report, terminal
    from credscan.patterns.registry import build_registry
    from credscan.scanner.engine import ScanError, scan as run_scan
    from credscan.scanner.profile import ProfileError
    from credscan.scanner.profile import save_profile as write_profile
    from credscan.scanner.wordlist import WordlistError, ensure_wordlist

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        _error("Config error", exc)
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if fptn is not None:
        cfg.discovery.include = fptn
    if exclude is not None:
        cfg.discovery.exclude = exclude
    if default_exclude is not None:
        cfg.discovery.default_exclude = default_exclude
    if path_exclude is not None:
        cfg.discovery.path_exclude = path_exclude
    if skip_binary is not None:
        cfg.discovery.skip_binary = skip_binary
    if batch_size is not None:
        cfg.discovery.batch_size = batch_size
    if regexp:
        cfg.patterns.extra.extend(regexp)
    if check_mode is not None:
        cfg.check.mode = check_mode  # type: ignore[assignment]
    if words_file is not None:
        cfg.check.words_file = words_file
    if words_url is not None:
        cfg.check.words_url = words_url
    if entropy_threshold is not None:
        cfg.check.entropy_threshold = entropy_threshold
    if min_length is not None:
        cfg.check.min_length = min_length
    if profile is not None:
        cfg.profile.path = profile
    if save_profile is not None:
        cfg.profile.save = save_profile
    if workers is not None:
        cfg.scan.workers = workers
    if format is not None:
        cfg.output.format = format  # type: ignore[assignment]
    if debug is not None:
        cfg.output.debug = debug

    try:
        validate_config(cfg)
    except ConfigError as exc:
        _error("Config error", exc)
        raise typer.Exit(code=2) from exc

    # --- Word list ---
    if uses_dictionary(cfg.check.mode) and not cfg.words_path.is_file():
        console.print(f"[dim]Downloading word list to {cfg.words_path}[/dim]")
        try:
            ensure_wordlist(cfg.words_path, cfg.check.words_url)
        except WordlistError as exc:
            _warn(exc)

    # --- Build patterns ---
    scan_root = Path(path)
    try:
        registry = build_registry(cfg, scan_root if scan_root.is_dir() else Path.cwd())
    except ConfigError as exc:
        _error("Config error", exc)
        raise typer.Exit(code=2) from exc

    if cfg.output.debug:
        console.print(f"[dim]Patterns loaded: {len(registry)}[/dim]")
        console.print("[bold yellow]Debug mode: values are printed unmasked.[/bold yellow]")

    # --- Run scan ---
    fatal: Optional[ScanError] = None
    try:
        result = run_scan(path, cfg, registry)
    except ConfigError as exc:
        _error("Config error", exc)
        raise typer.Exit(code=2) from exc
    except ScanError as exc:
        fatal = exc
        result = exc.result

    for line in result.logs:
        _diag(line)

    # --- Output ---
    if cfg.output.format == "terminal":
        terminal.render(result, console=console)
    else:
        print(json_report.render(result.findings))

    if cfg.profile.save and fatal is None:
        try:
            write_profile(result.findings, cfg.profile.save)
        except ProfileError as exc:
            _warn(exc)

    _diag(f"Scanned {result.files_scanned} files and has processed {result.files_processed} files")

    # --- Exit code ---
    if fatal is not None:
        _error("Scan error", fatal)
        raise typer.Exit(code=2)
    if result.findings:
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .credscan.toml in the current directory."""
    from credscan.config.defaults import DEFAULT_TOML
    from credscan.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"credscan {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """credscan: find leaked credentials before they ship."""

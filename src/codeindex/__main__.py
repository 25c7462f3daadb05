"""codeindex - searchable code index for TypeScript / Next.js projects."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_HELP = """\
Usage: codeindex index [--dir <path>] [--output <file>] [--project-id <id>] [--verbose]

Index options:
  --dir <path>        Project root to analyze (default: current directory)
  --output <file>     JSON output path (default: output.path from config)
  --project-id <id>   Override the configured project id
  --verbose           Log per-file detail
  --help, -h          Show this help message and exit

Configuration is read from ~/.codeindex/config.yaml, then
<project>/.codeindex/config.yaml, then CODEINDEX_* environment variables.
"""


@dataclass
class IndexFlags:
    """Flags parsed from the command line for ``codeindex index``."""

    project_dir: Path = field(default_factory=Path.cwd)
    output: Path | None = None
    project_id: str | None = None
    verbose: bool = False


def main() -> None:
    """Entry point for the codeindex CLI."""
    args = sys.argv[1:]

    if not args or "--help" in args or "-h" in args:
        print(_HELP)
        sys.exit(0)

    if args[0] == "index":
        sys.exit(_run_index(_parse_index_flags(args[1:])))

    print(f"Unknown command: {args[0]}")
    print("Run 'codeindex --help' for usage.")
    sys.exit(1)


def _parse_index_flags(args: list[str]) -> IndexFlags:
    """Parse index sub-command flags from argv."""
    flags = IndexFlags()
    i = 0
    while i < len(args):
        if args[i] == "--verbose":
            flags.verbose = True
            i += 1
        elif args[i] == "--dir" and i + 1 < len(args):
            flags.project_dir = Path(args[i + 1])
            i += 2
        elif args[i] == "--output" and i + 1 < len(args):
            flags.output = Path(args[i + 1])
            i += 2
        elif args[i] == "--project-id" and i + 1 < len(args):
            flags.project_id = args[i + 1]
            i += 2
        else:
            print(f"Unknown argument: {args[i]}")
            print("Run 'codeindex --help' for usage.")
            sys.exit(1)
    return flags


def _configure_logging(verbose: bool) -> None:
    from codeindex.core.config import EnvSettings

    level = "DEBUG" if verbose else EnvSettings().log_level.upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _run_index(flags: IndexFlags) -> int:
    """Analyze the project, write the JSON file and print a summary."""
    from pydantic import ValidationError
    from rich.console import Console
    from rich.table import Table

    from codeindex.core.config import ConfigError, load_config
    from codeindex.index.project_analyzer import ProjectAnalyzer
    from codeindex.index.result_writer import ResultWriter

    console = Console()
    project_dir = flags.project_dir.resolve()
    if not project_dir.is_dir():
        console.print(f"[red]Not a directory:[/red] {project_dir}")
        return 1

    try:
        config = load_config(project_dir)
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        return 1

    updates: dict[str, object] = {}
    if flags.project_id:
        updates["project_id"] = flags.project_id
    if flags.verbose:
        updates["verbose"] = True
    if updates:
        config = config.model_copy(update=updates)

    _configure_logging(config.verbose)

    try:
        analyzer = ProjectAnalyzer(config)
    except ConfigError as exc:
        console.print("[red]Invalid configuration:[/red]")
        for error in exc.errors:
            console.print(f"  - {error}")
        return 1

    console.print(f"Indexing {project_dir} (project: [cyan]{config.project_id}[/cyan])...")

    def _progress(i: int, n: int, name: str) -> None:
        if config.verbose:
            console.print(f"  [{i}/{n}] {name}", style="dim")

    result = analyzer.analyze(project_dir, progress_callback=_progress)

    output_path: Path | None = None
    if flags.output is not None or config.output.enabled:
        output_path = flags.output or Path(config.output.path)
        if not output_path.is_absolute():
            output_path = project_dir / output_path
        ResultWriter(config).write(result, output_path)

    table = Table(title="codeindex summary", show_header=True, header_style="bold cyan")
    table.add_column("Type", style="cyan")
    table.add_column("Files", justify="right", style="green")
    for file_type, count in sorted(result.stats.by_type.items(), key=lambda x: -x[1]):
        table.add_row(file_type, str(count))
    errors = result.stats.parse_errors
    table.add_row("parse errors", str(errors), style="red" if errors else "dim")
    table.add_row("total", str(result.stats.total_files), style="bold")
    console.print(table)

    if output_path is not None:
        console.print(f"Index written to {output_path}")
    return 0


if __name__ == "__main__":
    main()

"""
Programmatic API.

Usage from an orchestrator task:

    from datespine import run
    result = run(project_dir="/opt/stocks", env="prod")
"""

from datetime import datetime
from pathlib import Path

from datespine.config.loader import Config, load_config
from datespine.config.settings import CalendarSettings
from datespine.connections import get_connection
from datespine.core.executor import CalendarBuild, CalendarBuilder, RunResult
from datespine.quality import QualityCheckSummary
from datespine.utils.logging import setup_logging_from_config


def load_project(project_dir: str | Path | None = None, env: str | None = None) -> tuple[Config, CalendarSettings]:
    """
    Load config.yaml (plus the env overlay) and validate the calendar section.

    Raises:
        ConfigurationError: If the config is missing or invalid
    """
    project_path = Path(project_dir) if project_dir is not None else Path.cwd()
    config = load_config(project_path, env=env)
    return config, CalendarSettings.from_config(config)


def run(
    project_dir: str | Path | None = None,
    env: str | None = None,
    dry_run: bool = False,
    configure_logging: bool = True,
    log_level: str | None = None,
    loaded_at: datetime | None = None,
) -> RunResult:
    """
    Build and materialise the calendar for a project.

    Args:
        project_dir: Project root holding config.yaml (default: cwd)
        env: Environment overlay to apply (dev, staging, prod)
        dry_run: Generate without writing
        configure_logging: Apply the config's ``logging`` section first
        log_level: Override the configured log level
        loaded_at: Override the load timestamp

    Returns:
        RunResult describing the run

    Raises:
        DatespineError: Any configuration, upstream, materialisation or
            quality failure; the run is all-or-nothing
    """
    config, settings = load_project(project_dir, env)
    if configure_logging:
        logging_config = dict(config.get("logging") or {})
        if log_level:
            logging_config["level"] = log_level
        setup_logging_from_config({"logging": logging_config}, project_dir=config.project_dir)

    with get_connection(config, settings.connection) as connection:
        return CalendarBuilder(settings, connection).run(dry_run=dry_run, loaded_at=loaded_at)


def preview(project_dir: str | Path | None = None, env: str | None = None) -> CalendarBuild:
    """Generate the calendar rows a run would write, without writing them."""
    config, settings = load_project(project_dir, env)
    with get_connection(config, settings.connection) as connection:
        return CalendarBuilder(settings, connection).build()


def check(project_dir: str | Path | None = None, env: str | None = None) -> QualityCheckSummary:
    """Run the calendar quality checks against the table currently in the destination."""
    config, settings = load_project(project_dir, env)
    with get_connection(config, settings.connection) as connection:
        return CalendarBuilder(settings, connection).check()

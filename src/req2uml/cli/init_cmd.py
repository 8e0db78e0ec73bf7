"""req2uml ``init`` command.

Creates ``.req2uml/`` in the target directory and writes the default
configuration file that :func:`req2uml.cli.config.load_config` picks up.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from req2uml.cli.config import DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_FILE, default_config_toml
from req2uml.cli.errors import CLIError


def run_init(path: Optional[Path] = None, *, force: bool = False) -> Path:
    """Execute the init command logic.

    Parameters
    ----------
    path:
        Target directory.  Defaults to current working directory.
    force:
        Overwrite an existing ``config.toml``.

    Returns
    -------
    Path
        The configuration file that was written.
    """
    project_dir = (path or Path.cwd()).resolve()

    if not project_dir.exists():
        raise CLIError(f"Directory does not exist: {project_dir}")

    if not project_dir.is_dir():
        raise CLIError(f"Not a directory: {project_dir}")

    config_path = project_dir / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE
    if config_path.exists() and not force:
        raise CLIError(
            f"Configuration already exists: {config_path}\n"
            "Use --force to overwrite."
        )

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(default_config_toml(), encoding="utf-8")
    return config_path

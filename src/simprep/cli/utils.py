"""Shared helpers for CLI commands."""

import click

from simprep.core.exceptions import SimPrepError


def run_stage(stage: str, target: str, func, *args, **kwargs):
    """Run one pipeline stage, turning simprep errors into a CLI failure."""
    try:
        return func(*args, **kwargs)
    except SimPrepError as e:
        raise click.ClickException(f"{stage} failed for {target}: {e}")


def pick(value, fallback):
    """Prefer an explicitly given option over the configured value."""
    return fallback if value is None else value

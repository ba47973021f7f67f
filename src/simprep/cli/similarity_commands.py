"""CLI command for Tversky similarity matrices."""

import click

from simprep.core.constants import COEFFICIENT_PRESETS


@click.command()
@click.option("--MD", "-i", "md_path", required=True,
              help="M x D bit matrix.")
@click.option("--ND", "nd_path", default=None,
              help="N x D bit matrix (defaults to --MD).")
@click.option("--MN", "-o", "mn_path", required=True, type=click.Path(),
              help="M x N similarity matrix.")
@click.option("--named", is_flag=True, default=False,
              help="Write row and column names to the output matrix.")
@click.option("--delimiter", "-d", default=None,
              help="Delimiter character between bits (default: space).")
@click.option("--alpha", type=float, default=None,
              help="alpha coefficient (default: 1.0).")
@click.option("--beta", type=float, default=None,
              help="beta coefficient (default: 1.0).")
@click.option("--preset", type=click.Choice(sorted(COEFFICIENT_PRESETS)),
              default=None, help="Named coefficient; overrides --alpha/--beta.")
@click.option("--workers", "-j", type=int, default=None,
              help="Worker processes (default: all CPUs).")
@click.pass_context
def tversky(ctx, md_path, nd_path, mn_path, named, delimiter, alpha, beta,
            preset, workers):
    """Calculate a Tversky index similarity matrix (defaults to Tanimoto)."""
    from simprep.analysis.similarity import resolve_coefficients, tversky_matrix
    from simprep.cli.utils import pick, run_stage
    from simprep.core.config import RunConfig
    from simprep.core.models import LabelLayout
    from simprep.data.loaders import read_matrix
    from simprep.data.writers import write_matrix

    ctx.ensure_object(dict)
    config = ctx.obj.get("config") or RunConfig()
    sim = config.similarity

    delimiter = pick(delimiter, sim.delimiter)
    named = named or sim.named
    workers = pick(workers, sim.n_workers)
    if preset:
        alpha, beta = resolve_coefficients(preset)
    alpha = pick(alpha, sim.alpha)
    beta = pick(beta, sim.beta)
    nd_path = nd_path or md_path

    if len(delimiter) != 1:
        raise click.BadParameter("must be a single character", param_hint="--delimiter")

    click.echo(
        f"Calculating Tversky index (alpha = {alpha}, beta = {beta}) matrix "
        f"from file {nd_path}"
    )
    md = run_stage("load", md_path, read_matrix, md_path,
                   delimiter=delimiter, layout=LabelLayout.ROWS, value_type=bool)
    nd = run_stage("load", nd_path, read_matrix, nd_path,
                   delimiter=delimiter, layout=LabelLayout.ROWS, value_type=bool)

    mn = run_stage(
        "similarity", f"{md_path} x {nd_path}", tversky_matrix, md, nd,
        alpha, beta, n_workers=workers, progress=not ctx.obj.get("quiet", False),
    )

    run_stage("write", mn_path, write_matrix, mn, mn_path,
              delimiter=delimiter, labeled=named)
    click.echo(f"Saved {mn.n_rows}x{mn.n_cols} similarity matrix to {mn_path}")

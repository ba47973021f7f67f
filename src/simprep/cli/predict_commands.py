"""CLI command for drug-target interaction prediction."""

import click


@click.command()
@click.option("--dt-train", "dt_train", required=True,
              help="Training drug-target adjacency matrix.")
@click.option("--dd-train", "dd_train", required=True,
              help="Training drug-drug similarity matrix.")
@click.option("--dd-query", "dd_query", required=True,
              help="Testing drug-drug similarity matrix.")
@click.option("--output-file", "-o", "output_file", required=True,
              type=click.Path(), help="Predicted test drug-target interactions.")
@click.option("--weighted", "-w", is_flag=True, default=False,
              help="Similarity matrix featurization weighting scheme.")
@click.option("--cutoff", "-c", type=float, default=None,
              help="Similarity cutoff (default: 0.5).")
@click.option("--gpu", is_flag=True, default=False, help="GPU acceleration.")
@click.option("--gpu-id", "gpu_id", type=int, default=None,
              help="GPU to use (default: 0).")
@click.option("--backend", "backend_spec", default=None,
              help="Prediction backend as 'module:attribute'.")
@click.pass_context
def predict(ctx, dt_train, dd_train, dd_query, output_file, weighted, cutoff,
            gpu, gpu_id, backend_spec):
    """Predict drug-target interactions for query drugs."""
    from simprep.cli.utils import pick, run_stage
    from simprep.core.config import RunConfig
    from simprep.prediction.backend import load_backend
    from simprep.prediction.pipeline import run_prediction

    ctx.ensure_object(dict)
    config = ctx.obj.get("config") or RunConfig()
    pred = config.prediction

    cutoff = pick(cutoff, pred.cutoff)
    gpu_id = pick(gpu_id, pred.gpu_id)
    weighted = weighted or pred.weighted
    gpu = gpu or pred.gpu

    backend = ctx.obj.get("backend")
    if backend is None:
        backend_spec = pick(backend_spec, pred.backend)
        if not backend_spec:
            raise click.UsageError(
                "No prediction backend configured; pass --backend module:attribute "
                "or set prediction.backend in the config file."
            )
        backend = run_stage("backend", backend_spec, load_backend, backend_spec)

    click.echo(f"Predicting interactions (cutoff = {cutoff}, weighted = {weighted})")
    n = run_stage(
        "prediction", dd_query, run_prediction, dt_train, dd_train, dd_query,
        output_file, backend,
        cutoff=cutoff, weighted=weighted, gpu=gpu, gpu_id=gpu_id,
    )
    click.echo(f"Saved {n} predicted interactions to {output_file}")

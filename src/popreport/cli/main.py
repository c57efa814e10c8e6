import typer
from ..compiler import compile_job
from ..config import load_settings
from ..dsl.schema import JobSpec, job_from_args, load_yaml
from ..errors import ConfigurationError
from ..log import setup_logging
from ..runtime.local import run_ir


app = typer.Typer(help="Filter city population records and report them grouped by state")

PRODUCERS = {
    "stdout": "popreport.operators.produce:StdoutProducer",
    "file": "popreport.operators.produce:FileProducer",
    "none": "popreport.operators.produce:NullProducer",
}


def _fail(e: ConfigurationError) -> None:
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(code=2)


def _execute(job: JobSpec, save: bool, home: str) -> None:
    ir, _ = compile_job(job)
    result = run_ir(ir, save=save, home=home)
    for s in result["skipped"]:
        typer.echo(f"Skipped {s.source}: {s.reason}", err=True)
    if save:
        typer.echo(result["run_digest"], err=True)


@app.command()
def run(
    input_dir: str = typer.Argument(..., help="Directory holding the CSV sources"),
    threshold: str = typer.Argument(..., help="Minimum population to keep"),
    workers: int = typer.Option(None, help="Number of filter tasks"),
    policy: str = typer.Option(None, help="Partition policy: contiguous or round_robin"),
    output: str = typer.Option("stdout", help="Where to emit the report: stdout, file or none"),
    save: bool = typer.Option(False, help="Store the run record in the artifact store"),
):
    try:
        settings = load_settings()
        setup_logging(settings.log_level, settings.log_dir)
        if output not in PRODUCERS:
            raise ConfigurationError(f"Unknown output {output!r}; expected one of {sorted(PRODUCERS)}")
        job = job_from_args(
            input_dir,
            threshold,
            workers=workers if workers is not None else settings.workers,
            policy=policy if policy is not None else settings.policy,
            produce=PRODUCERS[output],
        )
        _execute(job, save, settings.home)
    except ConfigurationError as e:
        _fail(e)


@app.command("run-job")
def run_job(path: str, save: bool = False):
    try:
        settings = load_settings()
        setup_logging(settings.log_level, settings.log_dir)
        _execute(load_yaml(path), save, settings.home)
    except ConfigurationError as e:
        _fail(e)


@app.command()
def compile(path: str):
    try:
        job = load_yaml(path)
        _, manifest = compile_job(job)
    except ConfigurationError as e:
        _fail(e)
    typer.echo(f"seed: {manifest['seed']}")
    for p in manifest["partitions"]:
        typer.echo(f"task {p['task_id']}: {', '.join(p['sources']) or '(empty)'}")


if __name__ == "__main__":
    app()

import typer

from latex_proxy.cli.compile import compile_file, diagnose
from latex_proxy.cli.serve import serve

app = typer.Typer(
    name="latex-proxy",
    help="LaTeX proxy: compile LaTeX projects through a remote service.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("serve")(serve)
app.command("compile")(compile_file)
app.command("diagnose")(diagnose)


def main() -> None:
    app()

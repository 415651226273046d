import typer

from ast_annotate.cli.annotate import annotate, languages

app = typer.Typer(
    name="ast-annotate",
    help="ast-annotate CLI: attach parents, scopes and exact source ranges to ASTs.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("annotate")(annotate)
app.command("languages")(languages)


def main() -> None:
    app()

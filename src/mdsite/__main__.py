from mdsite.cli.cli import app


app(prog_name="mdsite")

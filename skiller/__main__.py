from skiller.cli import app

app(prog_name="skiller")

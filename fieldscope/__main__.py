from fieldscope.cli.app import app

app()

"""``python -m metaspine``"""

from metaspine.cli.app import app

app()

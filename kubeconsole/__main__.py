"""Allow ``python -m kubeconsole``."""

from kubeconsole.main import app

app()

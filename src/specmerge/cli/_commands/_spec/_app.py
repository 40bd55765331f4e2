"""Spec command app definition."""

from cyclopts import App

app = App(
    name="spec", help="Maintain domain specs and merge change deltas", help_on_error=True
)

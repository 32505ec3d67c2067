from typing import Protocol

from ..models import ReportBundle


class ReportRenderer(Protocol):
    """Turns a finished run's ReportBundle into printable text."""

    def render(self, bundle: ReportBundle) -> str: ...

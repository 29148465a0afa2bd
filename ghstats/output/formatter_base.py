"""Report formatting for Feishu messages."""

from ..feishu import TitleColor

MEDAL = 'medal'
NUMBER = 'number'
NONE = 'none'
DECORATIONS = (MEDAL, NUMBER, NONE)

NO_ACTIVITY_MESSAGE = 'No review activity found in this period'


class ReportFormatter:
    """Formats leaderboards and pull request listings as escaped markdown."""

    def __init__(self, report_name: str = '', top_n: int = 5, decoration: str = MEDAL, max_prs: int = 5):
        """Initialize the formatter.

        Args:
            report_name: Name shown in message titles
            top_n: Number of leaderboard entries to include
            decoration: Rank decoration, one of 'medal', 'number' or 'none'
            max_prs: Number of pull requests listed per repository in PTAL messages
        """
        if decoration not in DECORATIONS:
            raise ValueError(f"Unknown rank decoration '{decoration}', expected one of {', '.join(DECORATIONS)}")
        self.report_name = report_name
        self.top_n = top_n
        self.decoration = decoration
        self.max_prs = max_prs

    def title(self, subject: str, kind: str = '') -> str:
        """Card title such as 'TiKV Review ❤️ - Daily'."""
        parts = [p for p in (self.report_name, subject) if p]
        title = ' '.join(parts) + ' ❤️'
        if kind:
            title += f" - {kind.capitalize()}"
        return title

    @staticmethod
    def color(body: str) -> TitleColor:
        """Grey header for empty reports so they stand out less."""
        return TitleColor.GREY if body == NO_ACTIVITY_MESSAGE else TitleColor.WATHET


# Import and attach methods from submodules
from .leaderboard import render_leaderboard, _rank_decoration
from .pull_requests import render_ptal, render_packages, _render_sections, _pr_line

ReportFormatter.render_leaderboard = render_leaderboard
ReportFormatter._rank_decoration = _rank_decoration
ReportFormatter.render_ptal = render_ptal
ReportFormatter.render_packages = render_packages
ReportFormatter._render_sections = _render_sections
ReportFormatter._pr_line = _pr_line

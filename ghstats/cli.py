"""Command line interface for the ghstats reports."""

import argparse
import logging
import os
import sys
from datetime import timedelta
from typing import Dict, List, Optional

import requests
from dotenv import load_dotenv

from .analyzer import FilterPolicy, ReviewAggregator, rank
from .api_client import GitHubAPIClient
from .config import Config, config_template, read_config
from .errors import GhStatsError
from .feishu import WebhookBot
from .output import ReportFormatter
from .package_filter import PackageFilter
from .source import GitHubActivitySource
from .timewindow import KINDS, TimeWindow, parse_window, resolve_window


def configure_logging(verbose: bool = False):
    """Configure root logging from LOG_LEVEL and LOG_FILE."""
    log_level = 'DEBUG' if verbose else os.environ.get('LOG_LEVEL', 'INFO').upper()
    handler_args = {}
    log_file = os.environ.get('LOG_FILE')
    if log_file:
        handler_args['filename'] = log_file
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s %(module)s:%(lineno)d: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p',
        **handler_args
    )


def _bot(config: Config, token: str, dry_run: bool) -> WebhookBot:
    return WebhookBot(token, dry_run=dry_run or config.print_msg_local)


def run_review(config: Config, kind: str, window: TimeWindow, dry_run: bool = False,
               chunk: Optional[timedelta] = None):
    """Build and deliver the review leaderboard for a window.

    Args:
        config: Loaded configuration
        kind: Report kind shown in the title (daily, weekly, monthly, debug)
        window: Report window
        dry_run: Print the message instead of sending it
        chunk: Split the window into sub-windows of this size (None = one search)
    """
    cfg = config.review
    print(f"[review: {', '.join(r.name for r in cfg.repos)}] {kind} {window}")

    source = GitHubActivitySource(GitHubAPIClient(cfg.access.github_token))
    policy = FilterPolicy.build(
        window,
        lgtm_patterns=cfg.lgtm_comments,
        blocked_patterns=cfg.block_comments,
        allow_users=cfg.allow_users,
        block_users=cfg.block_users,
        blocked_labels=cfg.block_labels,
    )
    aggregator = ReviewAggregator(policy, source)
    queries = [query for repo in cfg.repos for query in repo.pr_query]

    if chunk is not None:
        counters = aggregator.aggregate_chunked(queries, window, chunk)
    else:
        items = []
        for query in queries:
            items.extend(source.search_issues(query, window))
        counters = aggregator.aggregate(items)

    ranked = rank(counters)
    for entry in ranked:
        logging.info(f"{entry.user} score={entry.score} {entry.counters}")

    formatter = ReportFormatter(cfg.report_name, top_n=cfg.top_n, decoration=cfg.rank_style)
    body = formatter.render_leaderboard(ranked)
    bot = _bot(config, cfg.access.feishu_webhook_token, dry_run)
    bot.send_markdown(formatter.title('Review', kind), body, formatter.color(body))


def run_pkgs(config: Config, kind: str, window: TimeWindow, dry_run: bool = False):
    """Deliver the pull requests created in a window that touch the configured packages."""
    cfg = config.ptal
    packages = sorted({pkg for repo in cfg.repos for pkg in repo.packages})
    print(f"[pkgs: {', '.join(packages)}] PRs {kind} {window}")

    source = GitHubActivitySource(GitHubAPIClient(cfg.access.github_token))
    prs_by_repo: Dict[str, List] = {}
    for repo in cfg.repos:
        owner, name = repo.owner_repo()
        package_filter = PackageFilter(repo.packages)
        selected = prs_by_repo.setdefault(repo.name, [])
        for pr in source.list_pull_requests(owner, name, cfg.max_pages):
            if not window.contains(pr.created_at):
                continue
            if package_filter.is_bot(pr.author):
                print(f"filter PR created by bot, url:{pr.html_url}, title:{pr.title}")
                continue
            if not package_filter.matches(source.list_pr_files(owner, name, pr.number)):
                logging.debug(f"PR #{pr.number} does not touch {repo.packages}")
                continue
            selected.append(pr)

    formatter = ReportFormatter(cfg.report_name, max_prs=cfg.max_prs)
    body = formatter.render_packages(prs_by_repo)
    if not body:
        print("No PR need to be reviewed.")
        return
    bot = _bot(config, cfg.access.feishu_webhook_token, dry_run)
    bot.send_markdown(formatter.title(f"PTAL Pkgs: {', '.join(packages)}", kind), body)


def run_ptal(config: Config, dry_run: bool = False):
    """Deliver the pull requests matching the PTAL queries."""
    cfg = config.ptal
    print(f"[ptal: {cfg.repos_name()}]")
    source = GitHubActivitySource(GitHubAPIClient(cfg.access.github_token))
    issues_by_repo: Dict[str, List] = {}
    for repo in cfg.repos:
        for query in repo.pr_query:
            issues_by_repo.setdefault(repo.name, []).extend(source.search_issues(query))

    formatter = ReportFormatter(cfg.report_name, max_prs=cfg.max_prs)
    body = formatter.render_ptal(issues_by_repo)
    if not body:
        print("No PR need to be reviewed.")
        return
    bot = _bot(config, cfg.access.feishu_webhook_token, dry_run)
    bot.send_markdown(formatter.title('PTAL'), body)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='ghstats', description='GitHub review statistics for Feishu')
    parser.add_argument('-c', '--config', default=os.environ.get('GHSTATS_CONFIG'), help='Configuration file')
    parser.add_argument('--dry-run', action='store_true', help='Print messages locally instead of sending them')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    commands = parser.add_subparsers(dest='command', required=True)

    review = commands.add_parser('review', help='Collect reviews ❤️')
    review_kinds = review.add_subparsers(dest='kind', required=True)
    for kind in KINDS:
        review_kinds.add_parser(kind, help=f'{kind.capitalize()} review leaderboard')
    debug = review_kinds.add_parser('debug', help='Review leaderboard for a custom range')
    debug.add_argument('--start', required=True, help='Window start, YYYY-MM-DDTHH:MM:SS (UTC+8)')
    debug.add_argument('--end', required=True, help='Window end (exclusive), YYYY-MM-DDTHH:MM:SS (UTC+8)')
    debug.add_argument('--chunk-hours', type=int, default=24, help='Search the range in chunks of N hours')

    pkgs = commands.add_parser('pkgs', help='Collect PRs for the configured packages ❤️')
    pkgs.add_argument('kind', nargs='?', choices=KINDS, default='daily')

    commands.add_parser('ptal', help='Please take a look Pull Requests ❤️')
    commands.add_parser('config', help='Show configuration template')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    # Load environment variables from .env file if it exists
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if args.command == 'config':
        print(config_template())
        return 0

    try:
        config = read_config(args.config)
        if args.command == 'review':
            if args.kind == 'debug':
                window = parse_window(args.start, args.end)
                run_review(config, args.kind, window, args.dry_run, chunk=timedelta(hours=args.chunk_hours))
            else:
                run_review(config, args.kind, resolve_window(args.kind), args.dry_run)
        elif args.command == 'pkgs':
            run_pkgs(config, args.kind, resolve_window(args.kind), args.dry_run)
        elif args.command == 'ptal':
            run_ptal(config, args.dry_run)
    except (GhStatsError, requests.RequestException) as e:
        logging.error(f"{args.command} failed: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())

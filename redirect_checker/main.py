"""
1.0 Main Orchestrator Module
Runs one full redirection check: dataset -> browser -> records -> report.

Key features:
- Timestamped report names so successive runs never overwrite each other
- Report always contains every record (Passed, Failed, Skipped)
- Any Failed record fails the run (RedirectionCheckFailed / exit code 1)
- CLI launches its own Chromium; run_redirection_check() accepts any page

Usage:
    python -m redirect_checker.main
    python -m redirect_checker.main --input data/url_redirections.xlsx --headed
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from playwright.sync_api import sync_playwright

from redirect_checker.config import load_config, validate_config, CONFIG_FILE_PATH, DEFAULT_CONFIG
from redirect_checker.dataset_reader import read_dataset
from redirect_checker.navigation_checker import CheckRecord, STATUS_FAILED, check_navigation
from redirect_checker.report_renderer import generate_html_report, print_summary, save_results_csv

logger = logging.getLogger(__name__)

REPORT_FILE_PREFIX = "redirection_report_"


class RedirectionCheckFailed(Exception):
    """Raised when at least one record failed. Carries the full record list."""

    def __init__(self, failure_count: int, records: List[CheckRecord]):
        self.failure_count = failure_count
        self.records = records
        super().__init__(
            f"{failure_count} URL redirection(s) failed. "
            f"See detailed console logs and HTML report for details."
        )


def setup_logging(log_file: str = "redirect_checker.log"):
    """1.1 Console + file logging, same format for both."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )


def build_report_path(reports_dir: str, now: Optional[datetime] = None) -> str:
    """
    2.0 Timestamped report path, e.g.
    reports/redirection_report_2026-10-18T14-34-05.123456.html
    """
    now = now or datetime.now()
    timestamp = now.isoformat().replace(":", "-")
    return os.path.join(reports_dir, f"{REPORT_FILE_PREFIX}{timestamp}.html")


def print_failures(failed_records: List[CheckRecord]):
    """3.0 Detailed listing of failed records, written to stderr."""
    print("\n" + "!" * 69, file=sys.stderr)
    print("!!!!! TEST FAILED: Some URL Redirections or 404 Pages Found !!!!!", file=sys.stderr)
    print("!" * 69 + "\n", file=sys.stderr)

    print(f"Total Failed Navigations: {len(failed_records)}\n", file=sys.stderr)

    for index, record in enumerate(failed_records, start=1):
        print(f"--- FAILURE #{index} ---", file=sys.stderr)
        print(f"  Old URL:                 {record.old_url}", file=sys.stderr)
        print(f"  Expected New URL Part:   {record.expected_new_url_contains}", file=sys.stderr)
        print(f"  Actual New URL Reached:  {record.new_url}", file=sys.stderr)
        print(f"  Reason for Failure:      {record.reason}", file=sys.stderr)
        print("-" * 50 + "\n", file=sys.stderr)


def run_redirection_check(page, config: Optional[Dict[str, Any]] = None) -> List[CheckRecord]:
    """
    4.0 Run one full pass against an already-open browser page.

    Flow:
    1. Read the configured dataset
    2. Check every row (sequential, one navigation at a time)
    3. Render the HTML report (and CSV) with ALL records
    4. Raise RedirectionCheckFailed if any record failed

    Args:
        page: Playwright sync Page
        config: Settings dict (see config.DEFAULT_CONFIG); defaults if None

    Returns:
        All records, when none failed

    Raises:
        RedirectionCheckFailed: at least one record failed
    """
    config = {**DEFAULT_CONFIG, **(config or {})}
    input_file = config["input_file"]
    report_path = build_report_path(config["reports_directory"])

    logger.info("=" * 60)
    logger.info("Starting URL Redirection Check")
    logger.info(f"Input file: {input_file}")
    logger.info(f"Report will be saved to: {report_path}")
    logger.info(f"Timestamp: {datetime.now().isoformat()}")
    logger.info("=" * 60)

    # 4.1 Check all rows
    dataset = read_dataset(input_file)
    records = check_navigation(
        page,
        dataset,
        timeout_ms=config["navigation_timeout_ms"],
        wait_until=config["wait_until"],
        heading_selector=config["heading_selector"],
    )

    failed_records = [r for r in records if r.status == STATUS_FAILED]
    logger.info(f"Total records: {len(records)}, failed: {len(failed_records)}")

    # 4.2 Reports get every record, not just failures
    generate_html_report(records, report_path, config["template_path"])
    if config.get("export_csv"):
        save_results_csv(records, os.path.splitext(report_path)[0] + ".csv")

    print_summary(records)

    # 4.3 Verdict
    if failed_records:
        print_failures(failed_records)
        raise RedirectionCheckFailed(len(failed_records), records)

    print("\n" + "=" * 49)
    print("==== All URL Redirections Passed Successfully! ====")
    print("=" * 49 + "\n")
    return records


def main(argv: Optional[List[str]] = None) -> int:
    """
    5.0 CLI entry point. Owns the browser: launch, one page, close.

    Returns:
        Process exit code (0 = all passed, 1 = failures or setup error)
    """
    parser = argparse.ArgumentParser(
        description="Verify legacy URLs redirect to their expected targets in a real browser"
    )
    parser.add_argument(
        "--config", "-c",
        default=CONFIG_FILE_PATH,
        help=f"Configuration file (default: {CONFIG_FILE_PATH})"
    )
    parser.add_argument(
        "--input", "-i",
        default=None,
        help="Override the input dataset (.xlsx or .csv)"
    )
    parser.add_argument(
        "--reports-dir", "-r",
        default=None,
        help="Override the reports directory"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=int,
        default=None,
        help="Per-navigation timeout in milliseconds"
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window"
    )

    args = parser.parse_args(argv)
    setup_logging()

    config = load_config(args.config)
    if not config:
        logger.error("Failed to load configuration. Exiting.")
        return 1

    # 5.1 CLI overrides
    if args.input is not None:
        config["input_file"] = args.input
    if args.reports_dir is not None:
        config["reports_directory"] = args.reports_dir
    if args.timeout is not None:
        config["navigation_timeout_ms"] = args.timeout
    if args.headed:
        config["headless"] = False

    if not validate_config(config):
        logger.error("Invalid settings after command-line overrides. Exiting.")
        return 1

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=config["headless"])
        try:
            user_agent = config.get("user_agent")
            if isinstance(user_agent, str) and user_agent.strip():
                context = browser.new_context(user_agent=user_agent)
            else:
                context = browser.new_context()
            page = context.new_page()

            run_redirection_check(page, config)
        except RedirectionCheckFailed as e:
            logger.error(str(e))
            return 1
        except (FileNotFoundError, ValueError) as e:
            logger.error(str(e))
            return 1
        finally:
            browser.close()
            logger.info("Browser closed.")

    return 0


if __name__ == "__main__":
    # 6.0 Entry point - run relative to the project root so config paths resolve
    script_dir = os.path.dirname(os.path.abspath(__file__))
    project_root = os.path.dirname(script_dir)

    if not os.path.exists(CONFIG_FILE_PATH) and os.path.exists(os.path.join(project_root, CONFIG_FILE_PATH)):
        os.chdir(project_root)

    sys.exit(main())

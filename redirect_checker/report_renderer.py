"""
1.0 Report Renderer
Turns check records into a static HTML report (and a CSV copy).

Report generation never raises: a broken template or unwritable reports
directory is logged, and the run's pass/fail verdict stays with the caller.
"""

import logging
import os
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import pandas as pd
from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from redirect_checker.navigation_checker import (
    CheckRecord,
    STATUS_FAILED,
    STATUS_PASSED,
    STATUS_SKIPPED,
)

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_PATH = os.path.join("templates", "report.html")

# 1.1 Column order for CSV output
CSV_COLUMNS = ['old_url', 'expected_new_url_contains', 'status', 'new_url', 'reason', 'error']


def summarize(records: Sequence[CheckRecord]) -> Dict[str, int]:
    """2.0 Count records by status."""
    return {
        "total": len(records),
        "passed": sum(1 for r in records if r.status == STATUS_PASSED),
        "failed": sum(1 for r in records if r.status == STATUS_FAILED),
        "skipped": sum(1 for r in records if r.status == STATUS_SKIPPED),
    }


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def generate_html_report(
    records: Sequence[CheckRecord],
    report_path: str,
    template_path: str = DEFAULT_TEMPLATE_PATH,
) -> None:
    """
    3.0 Render all records into an HTML report, overwriting report_path.

    Template bindings:
        records, total_count, passed_count, failed_count, skipped_count,
        report_date

    Args:
        records: Every record from the run (not just failures)
        report_path: Destination HTML file
        template_path: Jinja2 template file
    """
    logger.info(f"Generating HTML report: {report_path} (template: {template_path})")

    try:
        _ensure_parent_dir(report_path)

        template_dir, template_name = os.path.split(os.path.abspath(template_path))
        env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )
        template = env.get_template(template_name)

        counts = summarize(records)
        html = template.render(
            records=list(records),
            total_count=counts["total"],
            passed_count=counts["passed"],
            failed_count=counts["failed"],
            skipped_count=counts["skipped"],
            report_date=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        )

        with open(report_path, 'w', encoding='utf-8') as f:
            f.write(html)
        logger.info(f"HTML report written to: {report_path}")
        print(f"\nHTML report generated: {report_path}")

    except TemplateNotFound as e:
        logger.error(f"Report template not found: {template_path} ({e})")
    except Exception as e:
        logger.error(f"FAILED generating HTML report {report_path}: {type(e).__name__}: {e}")
        logger.exception("Full traceback:")


def save_results_csv(records: Sequence[CheckRecord], csv_path: str) -> Optional[str]:
    """
    4.0 Save all records as CSV next to the HTML report.

    Returns:
        The CSV path, or None if there was nothing to write or writing failed
    """
    if not records:
        return None

    try:
        _ensure_parent_dir(csv_path)
        df = pd.DataFrame([r.to_dict() for r in records])
        available = [c for c in CSV_COLUMNS if c in df.columns]
        df[available].to_csv(csv_path, index=False)
        logger.info(f"Saved {len(df)} results to {csv_path}")
        return csv_path
    except Exception as e:
        logger.error(f"FAILED saving results CSV {csv_path}: {type(e).__name__}: {e}")
        logger.exception("Full traceback:")
        return None


def print_summary(records: List[CheckRecord]):
    """
    5.0 Print summary of check results.
    """
    if not records:
        print("\nNo records checked.\n")
        return

    counts = summarize(records)

    print(f"\n{'='*50}")
    print("Redirection Check Summary")
    print(f"{'='*50}")

    print(f"\nTotal: {counts['total']}")
    for status, key in [(STATUS_PASSED, "passed"), (STATUS_FAILED, "failed"), (STATUS_SKIPPED, "skipped")]:
        count = counts[key]
        pct = count / counts["total"] * 100
        print(f"  {status}: {count} ({pct:.1f}%)")

    print(f"{'='*50}\n")

"""
1.0 Navigation Checker
Drives a real browser through each legacy URL and verifies where it lands.

Key features:
- One Playwright page, one navigation at a time, input order preserved
- Lenient matching: the reached URL must CONTAIN the expected fragment
  (case and trailing slash insensitive)
- Secondary "page not found" signal from heading text on the destination
- Every row yields a record (Passed / Failed / Skipped); nothing is retried
  and a failing row never stops the run
"""

import logging
import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Pattern, Sequence

from playwright.sync_api import Error as PlaywrightError

from redirect_checker.dataset_reader import iter_redirection_specs
from redirect_checker.url_normalizer import urls_match

logger = logging.getLogger(__name__)

# 1.1 Record status values
STATUS_PASSED = "Passed"
STATUS_FAILED = "Failed"
STATUS_SKIPPED = "Skipped"

NOT_AVAILABLE = "N/A"

# 1.2 Navigation defaults
DEFAULT_TIMEOUT_MS = 60000
DEFAULT_WAIT_UNTIL = "domcontentloaded"
DEFAULT_HEADING_SELECTOR = "h1"

NOT_FOUND_HEADING_PATTERN = re.compile(r"Page Not Found|Error 404|404 Not Found", re.IGNORECASE)

# 1.3 Reason texts
MISSING_FIELDS_REASON = "Missing Old URL or Expected New URL part"


@dataclass
class CheckRecord:
    """Outcome of checking one input row."""
    old_url: str
    expected_new_url_contains: str
    status: str = STATUS_PASSED
    reason: str = ""
    new_url: str = NOT_AVAILABLE
    error: str = NOT_AVAILABLE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _mismatch_clause(expected: str, actual: str) -> str:
    return (
        f'URL Mismatch (Case & Trailing Slash Insensitive): '
        f'Expected to contain "{expected}", but got "{actual}".'
    )


def check_navigation(
    page,
    dataset: Sequence[Sequence[Any]],
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    wait_until: str = DEFAULT_WAIT_UNTIL,
    heading_selector: str = DEFAULT_HEADING_SELECTOR,
    not_found_pattern: Pattern = NOT_FOUND_HEADING_PATTERN,
) -> List[CheckRecord]:
    """
    2.0 Check every data row of the dataset against the browser.

    Per row:
    1. Missing URL or expected fragment -> Skipped, no navigation
    2. page.goto(old_url), capture page.url
    3. Reached URL must contain the expected fragment (normalized, lowercased)
    4. Headings matching not_found_pattern also fail the row
    Both 3 and 4 run; their clauses accumulate into one reason.

    Args:
        page: Playwright sync Page (the caller owns the browser lifecycle)
        dataset: Rows as returned by read_dataset; row 0 is the header
        timeout_ms: Per-navigation timeout
        wait_until: Playwright load state to wait for
        heading_selector: Elements inspected for "not found" text
        not_found_pattern: Regex that marks a heading as a not-found page

    Returns:
        One CheckRecord per data row, in input order
    """
    records: List[CheckRecord] = []

    for row, spec in iter_redirection_specs(dataset):
        record = CheckRecord(
            old_url=spec.old_url,
            expected_new_url_contains=spec.expected_new_url_contains,
        )

        # 2.1 Skip incomplete rows without touching the browser
        if not spec.old_url or not spec.expected_new_url_contains:
            logger.warning(f"Skipping row due to missing Old URL or Expected New URL part: {row}")
            record.status = STATUS_SKIPPED
            record.reason = MISSING_FIELDS_REASON
            record.error = record.reason
            records.append(record)
            continue

        failure_clauses: List[str] = []

        try:
            # 2.2 Navigate and capture where the browser ended up
            page.goto(spec.old_url, wait_until=wait_until, timeout=timeout_ms)
            record.new_url = page.url

            # 2.3 URL containment check
            if not urls_match(record.new_url, spec.expected_new_url_contains):
                failure_clauses.append(_mismatch_clause(spec.expected_new_url_contains, record.new_url))

            # 2.4 "Page Not Found" heading check
            not_found_count = page.locator(heading_selector, has_text=not_found_pattern).count()
            if not_found_count > 0:
                failure_clauses.append("Page Not Found H1 detected on the new page.")

        except PlaywrightError as e:
            # Timeouts, DNS/network errors, invalid URLs
            failure_clauses.append(f"Navigation or initial check failed: {str(e).rstrip('.')}.")

        # 2.5 Final status
        if failure_clauses:
            record.status = STATUS_FAILED
            record.reason = " ".join(failure_clauses).strip()
            record.error = record.reason
            logger.error(f"FAILED: {spec.old_url} -> {record.new_url}. Reason: {record.reason}")
        else:
            logger.info(f"SUCCESS: {spec.old_url} -> {record.new_url}")

        records.append(record)

    passed = sum(1 for r in records if r.status == STATUS_PASSED)
    logger.info(f"Checked {len(records)} rows: {passed} passed")
    return records

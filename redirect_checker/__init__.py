"""
URL Redirect Checker - Source Package

Modules:
- config: Configuration loading and validation
- url_normalizer: Comparison-stable URL form (trailing slash, case)
- dataset_reader: Excel/CSV input of legacy URL -> expected target rows
- navigation_checker: Browser-driven redirect and "page not found" checks
- report_renderer: HTML/CSV report generation and console summary
- main: One full run (CLI and run_redirection_check)
"""

__version__ = "1.0.0"

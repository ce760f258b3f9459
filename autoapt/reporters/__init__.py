"""
Report Generators
=================

Output formatters for the exposure report.

Available Reporters
-------------------
TextReporter
    Plain-text report, written to the output file.
HTMLReporter
    HTML page wrapping the text report, used by the web view.
CLIReporter
    Rich terminal banner, progress lines and summary tables.

Example
-------
>>> from autoapt.reporters import HTMLReporter, TextReporter
>>>
>>> path = TextReporter(output_path="output.txt").report(databases, instances)
>>> page = HTMLReporter().render(open(path).read())
"""

from autoapt.reporters.cli_reporter import CLIReporter
from autoapt.reporters.html_reporter import HTMLReporter
from autoapt.reporters.text_reporter import TextReporter, read_report

__all__ = [
    "CLIReporter",
    "HTMLReporter",
    "TextReporter",
    "read_report",
]

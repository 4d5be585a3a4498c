"""
Burn - Labor-hour burn projection against contract ceilings

Projects cumulative hours for a job over its Period of Performance and
compares the running total with a stepped ceiling schedule.

Modules:
    core        - Shared services (config, logging, errors, output)
    timetracker - Timesheet API client, holiday calendar, actuals & projections
    ceiling     - Ceiling releases, persistence, and accrual
    chart       - Chart generation and per-job result cache
"""

__version__ = "0.1.0"

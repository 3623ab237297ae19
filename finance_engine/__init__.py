"""
Finance Engine - Source Package

Aggregation and reporting core for a personal-finance application.
Turns raw transactions, budgets and loans into categorized,
status-tagged, time-bucketed and exportable financial facts.

DESIGN PRINCIPLES:
1. Computations are pure: same input, same output, no hidden state
2. Derived values (loan status, income type) are never stored twice
3. Percentages never divide by zero
4. Export failures come back as results, never as partial files
5. Display strings come from an injected content provider
"""

__version__ = "1.0.0"
__author__ = "Finance Engine Team"

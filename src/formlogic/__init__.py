"""
Conditional Form Logic Package

Decides, for every field of a form and the current answers, whether the
field is visible, required or disabled. Also provides the business-day
arithmetic used to compute response due dates.

ARCHITECTURAL GUARANTEE:
------------------------
Everything here is a pure computation over read-only snapshots:
    - No persistence
    - No rendering
    - No network access
    - No mutation of forms or answers

A misconfigured rule degrades to a default decision; it never raises.
"""

__version__ = "0.1.0"

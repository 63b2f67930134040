"""
Test the example inspection form.

Validates that the example builder wires every logic action and the
schedule settings used by the demo.
"""

from datetime import datetime

from formlogic.examples import build_example_inspection_form
from formlogic.schedule import check_due_status


def test_example_form_structure():
    form = build_example_inspection_form(version=7)

    assert form.version == 7
    assert len(form.fields) == 8

    actions = {f.id: f.conditional_logic.action for f in form.fields if f.conditional_logic}
    assert actions == {
        "hazard_details": "show",
        "supervisor_name": "hide",
        "photo": "require",
        "signoff": "disable",
    }

    # Second rule of hazard_details joins with OR
    rules = form.get_field("hazard_details").conditional_logic.rules
    assert rules[1].logical_operator == "OR"


def test_example_form_schedule():
    form = build_example_inspection_form()

    # Tuesday 2024-01-02 10:00, after the 09:00 due time
    status = check_due_status(form.schedule, form.business_days, datetime(2024, 1, 2, 10, 0))
    assert status.is_due and status.is_overdue

    # Saturday is not a business day
    status = check_due_status(form.schedule, form.business_days, datetime(2024, 1, 6, 10, 0))
    assert not status.is_due

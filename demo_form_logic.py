"""
Demo: Analyze the example inspection form, resolve it for a few answer sets
and walk the incident report branches.
"""

from datetime import datetime

from formlogic.analyzer import analyze_form
from formlogic.business_days import add_business_days, format_business_days_config
from formlogic.branching import resolve_branching
from formlogic.examples import build_example_incident_form, build_example_inspection_form
from formlogic.resolver import FormResolver
from formlogic.schedule import check_due_status
from formlogic.serialization import form_to_yaml
from formlogic.values import normalize_answers


def print_report(report):
    """Pretty-print a FormLogicReport."""
    print()
    print("=" * 70)
    print(f"FORM LOGIC REPORT: {report.form_id}")
    print("=" * 70)
    print()

    print("📊 BASIC METRICS")
    print(f"  Total Fields:          {report.total_fields}")
    print(f"  Fields with Logic:     {report.fields_with_logic}")
    print(f"  Total Rules:           {report.total_rules}")
    print()

    if report.field_references:
        print("  Trigger Usage:")
        for field_id, count in sorted(report.field_references.items()):
            print(f"    {field_id}: {count} rule(s)")
        print()

    if report.warnings:
        print("⚠️  WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("✨ NO WARNINGS - Logic looks clean!")
    print()


def print_branching(title, visibility):
    print(f"🧭 {title}")
    print(f"  Sections: {', '.join(visibility.sections) or '-'}")
    print(f"  Fields:   {', '.join(visibility.fields) or '-'}")
    print()


def print_states(title, states):
    print(f"🔎 {title}")
    for field_id, state in states.items():
        flags = []
        if not state.visible:
            flags.append("hidden")
        if state.required:
            flags.append("required")
        if state.disabled:
            flags.append("disabled")
        print(f"  {field_id:<18} {', '.join(flags) or '-'}")
    print()


if __name__ == "__main__":
    form = build_example_inspection_form()

    print_report(analyze_form(form))

    resolver = FormResolver(form)
    print_states("No answers yet", resolver.resolve({}))
    print_states("Remote inspection, level 4 hazard, PPE checked", resolver.resolve({
        "inspection_type": "remote",
        "hazards_found": "yes",
        "hazard_level": 4,
        "checklist": ["ppe"],
    }))

    now = datetime(2024, 1, 5, 10, 0)
    status = check_due_status(form.schedule, form.business_days, now)
    print("📅 SCHEDULE")
    print(f"  {format_business_days_config(form.business_days)}")
    print(f"  At {now:%a %Y-%m-%d %H:%M}: due={status.is_due} overdue={status.is_overdue}")
    print(f"  Follow-up in 3 business days: {add_business_days(now, 3, form.business_days):%a %Y-%m-%d}")
    print()

    incident = build_example_incident_form()
    print_branching("Incident report, nothing selected", resolve_branching(incident, {}))
    print_branching("Incident report, injury treated in hospital", resolve_branching(
        incident, normalize_answers({"incident_type": "injury", "treatment": ["hospital"]}),
    ))

    with open("example_form_output.yaml", "w") as f:
        f.write(form_to_yaml(form))
    print(f"✅ Form exported to example_form_output.yaml")

"""
Example form builders used by the demo script and tests.

The daily site-inspection form exercises every logic action:
    - "hazard_details" is shown when hazards were found
    - "supervisor_name" is hidden for remote inspections
    - "photo" becomes required when the hazard level is above 3
    - "signoff" is disabled until the checklist includes "ppe"

The incident report exercises option branching across sections.
"""
from datetime import date, time

from formlogic.business_days import BusinessDaysConfig
from formlogic.model import (
    BranchingLogic,
    BranchingRule,
    ConditionalLogicBlock,
    ConditionalRule,
    Form,
    FormField,
    FormSection,
)
from formlogic.schedule import FormSchedule


def build_example_inspection_form(version: int = 1) -> Form:
    """
    Build the daily site-inspection form described above.

    Args:
        version: Rule-set version to stamp on the form. Bump it to check
            that resolution caches are keyed on the version.

    Returns:
        A new Form with eight fields, four of them carrying logic, a
        Monday to Friday business-day setting and a daily 09:00 schedule.
    """
    form = Form(id="site-inspection", title="Daily Site Inspection", version=version)

    form.fields = [
        FormField(id="inspection_type", label="Inspection type", field_type="radio", required=True),
        FormField(id="hazards_found", label="Were hazards found?", field_type="select", required=True),
        FormField(id="hazard_level", label="Hazard level (1-5)", field_type="number"),
        FormField(id="checklist", label="Checklist completed", field_type="checkbox"),
        FormField(
            id="hazard_details",
            label="Describe the hazards",
            field_type="textarea",
            conditional_logic=ConditionalLogicBlock(
                action="show",
                rules=(
                    ConditionalRule(field_id="hazards_found", operator="equals", value="yes", id="r1"),
                    ConditionalRule(
                        field_id="hazard_level", operator="greater_than", value=0,
                        logical_operator="OR", id="r2",
                    ),
                ),
            ),
        ),
        FormField(
            id="supervisor_name",
            label="Supervisor on site",
            field_type="text",
            conditional_logic=ConditionalLogicBlock(
                action="hide",
                rules=(ConditionalRule(field_id="inspection_type", operator="equals", value="remote", id="r3"),),
            ),
        ),
        FormField(
            id="photo",
            label="Photo of hazard",
            field_type="photo",
            conditional_logic=ConditionalLogicBlock(
                action="require",
                rules=(ConditionalRule(field_id="hazard_level", operator="greater_than", value=3, id="r4"),),
            ),
        ),
        FormField(
            id="signoff",
            label="Sign-off",
            field_type="signature",
            required=True,
            conditional_logic=ConditionalLogicBlock(
                action="disable",
                rules=(ConditionalRule(field_id="checklist", operator="not_contains", value="ppe", id="r5"),),
            ),
        ),
    ]

    form.business_days = BusinessDaysConfig(business_days_only=True, business_days=(1, 2, 3, 4, 5))
    form.schedule = FormSchedule(
        schedule_type="daily",
        start_date=date(2024, 1, 1),
        schedule_time=time(9, 0),
    )

    return form


def build_example_incident_form(version: int = 1) -> Form:
    """
    Build an incident report that branches on the selected options.

    "incident_type" opens the vehicle or injury section, or the free-text
    "other_details" field. Inside the injury section, ticking "hospital"
    under "treatment" opens "hospital_name".
    """
    form = Form(id="incident-report", title="Incident Report", version=version)

    form.sections = [
        FormSection(id="general", title="General"),
        FormSection(id="vehicle", title="Vehicle incident"),
        FormSection(id="injury", title="Injury"),
    ]
    form.fields = [
        FormField(
            id="incident_type",
            label="Incident type",
            field_type="select",
            required=True,
            section_id="general",
            branching=BranchingLogic(rules=(
                BranchingRule(option_value="vehicle", go_to_target="vehicle", target_type="section"),
                BranchingRule(option_value="injury", go_to_target="injury", target_type="section"),
                BranchingRule(option_value="other", go_to_target="other_details", target_type="field"),
            )),
        ),
        FormField(id="other_details", label="Describe the incident", field_type="textarea", section_id="general"),
        FormField(id="reported_by", label="Reported by", field_type="text", section_id="general"),
        FormField(id="plate_number", label="Plate number", field_type="text", section_id="vehicle"),
        FormField(id="damage", label="Damage", field_type="textarea", section_id="vehicle"),
        FormField(id="injured_person", label="Injured person", field_type="text", section_id="injury"),
        FormField(
            id="treatment",
            label="Treatment given",
            field_type="checkbox",
            section_id="injury",
            branching=BranchingLogic(rules=(
                BranchingRule(option_value="hospital", go_to_target="hospital_name"),
            )),
        ),
        FormField(id="hospital_name", label="Hospital", field_type="text", section_id="injury"),
    ]

    return form

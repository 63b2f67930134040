"""
Serialization helpers for form logic objects (Form, FormField, rules, ...).

Maps already-parsed configuration records onto model objects, and back.
Records produced by the form builder use camelCase keys (fieldId,
logicalOperator, businessDaysOnly); stored rows use snake_case. Both are
accepted on input. Output is always snake_case.

JSON and YAML text go through the same intermediate dict representation.
"""
from __future__ import annotations

import json
from datetime import date, datetime, time
from typing import Any, Dict, Mapping, Optional

import yaml

from formlogic.business_days import DEFAULT_BUSINESS_DAYS, BusinessDaysConfig
from formlogic.errors import ConfigurationError
from formlogic.model import (
    BranchingLogic,
    BranchingRule,
    BranchTargetType,
    ConditionalLogicBlock,
    ConditionalRule,
    Form,
    FormField,
    FormSection,
)
from formlogic.schedule import FormSchedule, parse_schedule_time


def _require_mapping(d: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(d, Mapping):
        raise ConfigurationError(f"{kind} record must be a mapping, got {type(d).__name__}")
    return d


def _pick(d: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in d:
            return d[key]
    return default


def _parse_date(value: Any, key: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        # Accept full timestamps, keep the calendar day
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise ConfigurationError(f"Invalid date for {key}: {value!r}") from exc


def rule_from_dict(d: Any) -> ConditionalRule:
    d = _require_mapping(d, "Rule")
    field_id = _pick(d, "fieldId", "field_id")
    if not field_id:
        raise ConfigurationError(f"Rule is missing fieldId: {dict(d)!r}")
    value = d.get("value")
    if isinstance(value, list):
        value = tuple(value)
    return ConditionalRule(
        field_id=field_id,
        operator=d.get("operator", ""),
        value=value,
        logical_operator=_pick(d, "logicalOperator", "logical_operator"),
        id=d.get("id"),
    )


def rule_to_dict(r: ConditionalRule) -> Dict[str, Any]:
    value = list(r.value) if isinstance(r.value, tuple) else r.value
    return {
        "id": r.id,
        "field_id": r.field_id,
        "operator": r.operator,
        "value": value,
        "logical_operator": r.logical_operator,
    }


def logic_from_dict(d: Any) -> ConditionalLogicBlock | None:
    if d is None:
        return None
    d = _require_mapping(d, "Conditional logic")
    return ConditionalLogicBlock(
        action=d.get("action", "show"),
        rules=tuple(rule_from_dict(r) for r in d.get("rules") or []),
    )


def logic_to_dict(b: ConditionalLogicBlock | None) -> Dict[str, Any] | None:
    if b is None:
        return None
    return {"action": b.action, "rules": [rule_to_dict(r) for r in b.rules]}


def branching_rule_from_dict(d: Any) -> BranchingRule:
    d = _require_mapping(d, "Branching rule")
    target = _pick(d, "goToTarget", "go_to_target")
    if not target:
        raise ConfigurationError(f"Branching rule is missing goToTarget: {dict(d)!r}")
    return BranchingRule(
        option_value=str(_pick(d, "optionValue", "option_value", default="")),
        go_to_target=str(target),
        target_type=_pick(d, "targetType", "target_type", default=BranchTargetType.FIELD.value),
    )


def branching_rule_to_dict(r: BranchingRule) -> Dict[str, Any]:
    return {"option_value": r.option_value, "go_to_target": r.go_to_target, "target_type": r.target_type}


def branching_from_dict(d: Any) -> BranchingLogic | None:
    if d is None:
        return None
    d = _require_mapping(d, "Branching")
    return BranchingLogic(
        enabled=bool(d.get("enabled", True)),
        rules=tuple(branching_rule_from_dict(r) for r in d.get("rules") or []),
    )


def branching_to_dict(b: BranchingLogic | None) -> Dict[str, Any] | None:
    if b is None:
        return None
    return {"enabled": b.enabled, "rules": [branching_rule_to_dict(r) for r in b.rules]}


def _is_branching_record(d: Any) -> bool:
    # The builder stores branching under conditional_logic, with go-to rules
    if not isinstance(d, Mapping):
        return False
    rules = d.get("rules") or []
    return any(isinstance(r, Mapping) and ("goToTarget" in r or "go_to_target" in r) for r in rules)


def field_from_dict(d: Any) -> FormField:
    d = _require_mapping(d, "Field")
    if not d.get("id"):
        raise ConfigurationError(f"Field is missing id: {dict(d)!r}")
    logic = _pick(d, "conditional_logic", "conditionalLogic")
    branching = d.get("branching")
    if branching is None and _is_branching_record(logic):
        branching, logic = logic, None
    return FormField(
        id=d["id"],
        label=d.get("label", ""),
        field_type=_pick(d, "field_type", "type", default="text"),
        required=bool(d.get("required", False)),
        conditional_logic=logic_from_dict(logic),
        section_id=_pick(d, "section_id", "sectionId"),
        branching=branching_from_dict(branching),
    )


def field_to_dict(f: FormField) -> Dict[str, Any]:
    return {
        "id": f.id,
        "label": f.label,
        "field_type": f.field_type,
        "required": f.required,
        "conditional_logic": logic_to_dict(f.conditional_logic),
        "section_id": f.section_id,
        "branching": branching_to_dict(f.branching),
    }


def section_from_dict(d: Any) -> FormSection:
    d = _require_mapping(d, "Section")
    if not d.get("id"):
        raise ConfigurationError(f"Section is missing id: {dict(d)!r}")
    return FormSection(id=d["id"], title=d.get("title", ""))


def section_to_dict(s: FormSection) -> Dict[str, Any]:
    return {"id": s.id, "title": s.title}


def business_days_from_dict(d: Any) -> BusinessDaysConfig:
    if d is None:
        return BusinessDaysConfig()
    d = _require_mapping(d, "Business days")
    days = _pick(d, "businessDays", "business_days")
    return BusinessDaysConfig(
        business_days_only=bool(_pick(d, "businessDaysOnly", "business_days_only", default=False)),
        business_days=tuple(DEFAULT_BUSINESS_DAYS if days is None else days),
        exclude_holidays=bool(_pick(d, "excludeHolidays", "exclude_holidays", default=False)),
        holiday_calendar=_pick(d, "holidayCalendar", "holiday_calendar"),
    )


def business_days_to_dict(c: BusinessDaysConfig) -> Dict[str, Any]:
    return {
        "business_days_only": c.business_days_only,
        "business_days": list(c.display_order or sorted(c.business_days, key=repr)),
        "exclude_holidays": c.exclude_holidays,
        "holiday_calendar": c.holiday_calendar,
    }


def _schedule_time(value: Any) -> time | None:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str):
        # YAML 1.1 reads an unquoted 09:30 as the base-60 integer 570
        raise ConfigurationError(
            f"schedule_time must be a string such as '09:30', got {value!r}; "
            "quote the time in YAML"
        )
    return parse_schedule_time(value)


def schedule_from_dict(d: Any) -> FormSchedule | None:
    if d is None:
        return None
    d = _require_mapping(d, "Schedule")
    start = _parse_date(_pick(d, "schedule_start_date", "start_date"), "schedule_start_date")
    if start is None:
        raise ConfigurationError("Schedule is missing schedule_start_date")
    return FormSchedule(
        schedule_type=_pick(d, "schedule_type", "type", default="one_time"),
        start_date=start,
        end_date=_parse_date(_pick(d, "schedule_end_date", "end_date"), "schedule_end_date"),
        schedule_time=_schedule_time(_pick(d, "schedule_time", "time")),
    )


def schedule_to_dict(s: FormSchedule | None) -> Dict[str, Any] | None:
    if s is None:
        return None
    return {
        "schedule_type": s.schedule_type,
        "schedule_start_date": s.start_date.isoformat(),
        "schedule_end_date": s.end_date.isoformat() if s.end_date else None,
        "schedule_time": s.schedule_time.strftime("%H:%M") if s.schedule_time else None,
    }


def form_to_dict(f: Form) -> Dict[str, Any]:
    return {
        "id": f.id,
        "title": f.title,
        "version": f.version,
        "fields": [field_to_dict(fl) for fl in f.fields],
        "sections": [section_to_dict(s) for s in f.sections],
        "business_days": business_days_to_dict(f.business_days),
        "schedule": schedule_to_dict(f.schedule),
    }


def form_from_dict(d: Any) -> Form:
    d = _require_mapping(d, "Form")
    return Form(
        id=d.get("id", ""),
        title=d.get("title", ""),
        version=int(d.get("version", 1)),
        fields=[field_from_dict(fl) for fl in d.get("fields") or []],
        sections=[section_from_dict(s) for s in d.get("sections") or []],
        business_days=business_days_from_dict(d.get("business_days")),
        schedule=schedule_from_dict(d.get("schedule")),
    )


def form_to_json(f: Form) -> str:
    return json.dumps(form_to_dict(f), sort_keys=True)


def form_from_json(s: str) -> Form:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid form JSON: {exc}") from exc
    return form_from_dict(d)


def form_to_yaml(f: Form) -> str:
    return yaml.safe_dump(form_to_dict(f))


def form_from_yaml(s: str) -> Form:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid form YAML: {exc}") from exc
    return form_from_dict(d)

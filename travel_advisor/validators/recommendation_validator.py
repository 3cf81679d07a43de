"""Turns raw LLM output into a checked ``RecommendationSet``.

Strict on required fields, lenient on count: more than three plans are
truncated instead of rejected. The first violation aborts with a
``SchemaError`` naming the plan and field.
"""

from __future__ import annotations

import datetime as dt
import uuid
from typing import Any, Optional

from pydantic import ValidationError

from travel_advisor.domain.exceptions import ParseError, SchemaError
from travel_advisor.domain.models import GenerationMetadata, RecommendationSet, TravelPlan
from travel_advisor.infrastructure.logging import StructuredLogger
from travel_advisor.validators.json_extract import loads_lenient

MAX_PLANS = 3
MIN_PLANS_EXPECTED = 2


def _new_plan_id() -> str:
    return f"plan-{uuid.uuid4().hex[:12]}"


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_required_fields(plan: Any, index: int) -> None:
    """Required-field checks in a fixed order; first failure wins."""
    if not isinstance(plan, dict):
        raise SchemaError("plan is not an object", field="plan", plan_index=index)
    if not _non_empty_str(plan.get("destination")):
        raise SchemaError("missing destination", field="destination", plan_index=index)
    if not _non_empty_str(plan.get("country")):
        raise SchemaError("missing country", field="country", plan_index=index)

    duration = plan.get("duration")
    if not isinstance(duration, dict):
        raise SchemaError("missing duration information", field="duration", plan_index=index)
    for key in ("startDate", "endDate"):
        if not duration.get(key):
            raise SchemaError(f"missing duration.{key}", field=f"duration.{key}", plan_index=index)

    budget = plan.get("budget")
    if not isinstance(budget, dict) or not _is_number(budget.get("estimated")):
        raise SchemaError("missing budget information", field="budget.estimated", plan_index=index)

    if not _non_empty_list(plan.get("highlights")):
        raise SchemaError("missing highlights", field="highlights", plan_index=index)
    if not _non_empty_list(plan.get("activities")):
        raise SchemaError("missing activities", field="activities", plan_index=index)


def _error_field(exc: ValidationError) -> str:
    first = exc.errors()[0]
    return ".".join(str(part) for part in first.get("loc", ())) or "plan"


def _build_plan(raw: dict[str, Any], index: int) -> TravelPlan:
    try:
        return TravelPlan.model_validate(raw)
    except ValidationError as e:
        field = _error_field(e)
        raise SchemaError(f"invalid {field}: {e.errors()[0].get('msg', '')}", field=field, plan_index=index) from None


def _drop_name_highlights(plan: TravelPlan, index: int) -> TravelPlan:
    """Highlights that only restate the destination carry no information."""
    names = {plan.destination.strip().casefold()}
    # "Grouse Mountain, Vancouver" -> also reject "Grouse Mountain"
    names.add(plan.destination.split(",")[0].strip().casefold())
    kept = [h for h in plan.highlights if h.strip() and h.strip().casefold() not in names]
    if not kept:
        raise SchemaError("highlights only repeat the destination", field="highlights", plan_index=index)
    if len(kept) == len(plan.highlights):
        return plan
    return plan.model_copy(update={"highlights": kept})


def _assign_ids(plans: list[TravelPlan]) -> list[TravelPlan]:
    seen: set[str] = set()
    result = []
    for plan in plans:
        plan_id = plan.id.strip()
        if not plan_id or plan_id in seen:
            plan = plan.model_copy(update={"id": _new_plan_id()})
        seen.add(plan.id)
        result.append(plan)
    return result


def _build_metadata(raw: Any, now: dt.datetime) -> GenerationMetadata:
    data = raw if isinstance(raw, dict) else {}
    try:
        metadata = GenerationMetadata.model_validate(data)
    except ValidationError:
        # metadata is advisory; a malformed block is replaced, not fatal
        metadata = GenerationMetadata()
    if not metadata.generated_at:
        metadata.generated_at = now.isoformat()
    return metadata


class RecommendationValidator:
    def __init__(self, logger: Optional[StructuredLogger] = None):
        self._logger = logger

    def validate(
        self,
        raw: str,
        *,
        now: Optional[dt.datetime] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> RecommendationSet:
        now = now or dt.datetime.now(dt.timezone.utc)
        logger = logger or self._logger

        def warn(message: str, **extra: Any) -> None:
            if logger is not None:
                logger.warning("validate", message, **extra)

        try:
            data = loads_lenient(raw or "")
        except ValueError:
            raise ParseError("completion is not valid JSON") from None

        if not isinstance(data, dict):
            raise SchemaError("top-level value is not an object", field="root")
        if not _non_empty_str(data.get("summary")):
            raise SchemaError("missing or invalid summary", field="summary")
        raw_plans = data.get("plans")
        if not _non_empty_list(raw_plans):
            raise SchemaError("plans must be a non-empty array", field="plans")

        if len(raw_plans) > MAX_PLANS:
            warn("plans truncated", received=len(raw_plans), kept=MAX_PLANS)
            raw_plans = raw_plans[:MAX_PLANS]
        elif len(raw_plans) < MIN_PLANS_EXPECTED:
            warn("fewer plans than requested", received=len(raw_plans))

        plans = []
        for index, raw_plan in enumerate(raw_plans):
            check_required_fields(raw_plan, index)
            plan = _build_plan(raw_plan, index)
            plans.append(_drop_name_highlights(plan, index))

        return RecommendationSet(
            summary=data["summary"],
            plans=_assign_ids(plans),
            metadata=_build_metadata(data.get("metadata"), now),
        )


def validate_recommendation(
    raw: str,
    *,
    now: Optional[dt.datetime] = None,
    logger: Optional[StructuredLogger] = None,
) -> RecommendationSet:
    return RecommendationValidator(logger).validate(raw, now=now)

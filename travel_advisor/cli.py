"""travel-advisor CLI: multi-turn conversation in the terminal.

    travel-advisor                          interactive session
    travel-advisor "beach trip in march"    single turn
    travel-advisor --map LAT LNG NAME       plans for a map location
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from travel_advisor.application.contracts import TurnResult, TurnStatus
from travel_advisor.application.conversation import ConversationOrchestrator
from travel_advisor.config.settings import load_settings
from travel_advisor.domain.enums import Role
from travel_advisor.domain.message_log import MessageLog
from travel_advisor.domain.models import TravelPlan
from travel_advisor.infrastructure.llm_factory import build_gateway, is_llm_available

_QUIT_WORDS = ("quit", "exit", "q")


def format_plan(index: int, plan: TravelPlan) -> str:
    lines = [f"[{index}] {plan.destination} ({plan.country})"]
    duration = plan.duration
    when = duration.start_date.isoformat()
    if duration.end_date != duration.start_date:
        when += f" -> {duration.end_date.isoformat()}"
    if duration.hours:
        when += f", about {duration.hours:g}h"
    lines.append(f"    When:   {when}")
    lines.append(f"    Budget: {plan.budget.estimated:,.0f} {plan.budget.currency}")
    if plan.budget.breakdown:
        parts = ", ".join(f"{k} {v:,.0f}" for k, v in plan.budget.breakdown.items())
        lines.append(f"            ({parts})")
    lines.append("    Highlights: " + "; ".join(plan.highlights))
    lines.append("    Activities: " + "; ".join(plan.activities))
    if plan.best_for:
        lines.append("    Best for:   " + ", ".join(plan.best_for))
    for note in plan.considerations:
        lines.append(f"    ! {note}")
    return "\n".join(lines)


def format_result(result: TurnResult) -> str:
    if result.status == TurnStatus.MESSAGE:
        return f"Assistant: {result.message}"
    if result.status == TurnStatus.RECOMMENDATIONS and result.recommendations is not None:
        recs = result.recommendations
        cards = [format_plan(i, p) for i, p in enumerate(recs.plans, start=1)]
        return "\n\n".join([f"Assistant: {recs.summary}", *cards])
    error = result.error
    hint = " (you can try again)" if error.get("retryable") else ""
    return f"Error [{error.get('code', 'INTERNAL_ERROR')}]: {error.get('message', '')}{hint}"


async def _interactive(orchestrator: ConversationOrchestrator) -> None:
    log = MessageLog()
    print("Tell me about the trip you have in mind. Type quit to leave.\n")
    while True:
        try:
            user_input = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return
        if not user_input:
            continue
        if user_input.lower() in _QUIT_WORDS:
            print("Bye!")
            return

        log.append(Role.USER, user_input)
        result = await orchestrator.handle_turn({"messages": log.to_payload()})
        print("\n" + format_result(result) + "\n")

        if result.status == TurnStatus.MESSAGE:
            log.append(Role.ASSISTANT, result.message)
        elif result.status == TurnStatus.RECOMMENDATIONS and result.recommendations is not None:
            log.append(Role.ASSISTANT, result.recommendations.summary)


async def _run(argv: Sequence[str]) -> int:
    settings = load_settings()
    gateway = build_gateway(settings)
    orchestrator = ConversationOrchestrator(gateway, settings=settings)
    try:
        if argv and argv[0] == "--map":
            if len(argv) < 3:
                print("usage: travel-advisor --map LAT LNG [NAME]", file=sys.stderr)
                return 2
            try:
                lat, lng = float(argv[1]), float(argv[2])
            except ValueError:
                print("LAT and LNG must be numbers", file=sys.stderr)
                return 2
            result = await orchestrator.handle_geo_turn({
                "coordinates": {"lat": lat, "lng": lng},
                "locationName": " ".join(argv[3:]),
            })
            print(format_result(result))
            return 0 if result.ok else 1

        if argv:
            result = await orchestrator.handle_turn({"messages": [{"role": "user", "content": " ".join(argv)}]})
            print(format_result(result))
            return 0 if result.ok else 1

        await _interactive(orchestrator)
        return 0
    finally:
        await gateway.aclose()


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = list(sys.argv[1:] if argv is None else argv)
    if not is_llm_available():
        print("No LLM key found; set OPENROUTER_API_KEY in .env", file=sys.stderr)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())

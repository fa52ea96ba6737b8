"""Board summaries: counts, longest/shortest routes, airline breakdown."""
from __future__ import annotations

from typing import Any, Iterable


def _other_side(side: str) -> str:
    return "departure" if side == "arrival" else "arrival"


def format_duration(minutes: int | None) -> str | None:
    if minutes is None:
        return None
    hrs, mins = divmod(int(minutes), 60)
    if hrs > 0 and mins > 0:
        return f"{hrs}h {mins}m"
    if hrs > 0:
        return f"{hrs}h"
    return f"{mins}m"


def status_options(flights: Iterable[dict[str, Any]], side: str) -> list[str]:
    """Distinct time-status labels present on the board, ordered by code."""
    seen: dict[str, int] = {}
    for f in flights:
        label = f.get(f"{side}_time_status")
        code = f.get(f"{side}_time_status_code")
        if label and code is not None:
            seen[label] = code
    return [label for label, _ in sorted(seen.items(), key=lambda kv: kv[1])]


def _route(flight: dict[str, Any]) -> dict[str, Any]:
    return {
        "from": flight.get("departure_iata"),
        "from_country_code": flight.get("departure_airport_country_code"),
        "to": flight.get("arrival_iata"),
        "to_country_code": flight.get("arrival_airport_country_code"),
        "flight": flight.get("flight_iata"),
        "duration_minutes": flight.get("flight_duration"),
        "duration": format_duration(flight.get("flight_duration")),
    }


def airline_breakdown(flights: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flights per airline, most frequent first, ties by name."""
    airlines: dict[str, dict[str, Any]] = {}
    for f in flights:
        code = f.get("airline_iata")
        name = f.get("airline_name")
        if not code or not name:
            continue
        entry = airlines.setdefault(code, {"code": code, "name": name, "count": 0, "flights": []})
        entry["count"] += 1
        entry["flights"].append(f.get("flight_iata"))
    return sorted(airlines.values(), key=lambda a: (-a["count"], a["name"]))


def summarize_board(flights: list[dict[str, Any]], side: str) -> dict[str, Any]:
    """Summarize an arrivals (side="arrival") or departures board.

    Counterpart fields describe the other end of each flight: origins for
    arrivals, destinations for departures.
    """
    other = _other_side(side)
    timed = [f for f in flights if isinstance(f.get("flight_duration"), int) and f["flight_duration"] > 0]
    longest = max(timed, key=lambda f: f["flight_duration"]) if timed else None
    shortest = min(timed, key=lambda f: f["flight_duration"]) if timed else None

    return {
        "flights": len(flights),
        "countries": len({f.get(f"{other}_airport_country") for f in flights} - {None, ""}),
        "airports": len({f.get(f"{other}_iata") for f in flights} - {None, ""}),
        "airlines": len({f.get("airline_iata") for f in flights} - {None, ""}),
        "idl_crossings": sum(1 for f in flights if f.get("intersection_idl") == "yes"),
        "longest_route": _route(longest) if longest else None,
        "shortest_route": _route(shortest) if shortest else None,
        "airline_breakdown": airline_breakdown(flights),
        "status_options": status_options(flights, side),
    }

from core.constants import TYPE_TEAM
from core.state import AppState


def get_dashboard_stats(state: AppState) -> dict:
    participants = state.participants

    stats = {
        "total": len(participants),
        "present": len([p for p in participants if p.present]),
        "teams": len([p for p in participants if p.type == TYPE_TEAM]),
        "users": len(state.users),
    }

    if stats["total"] > 0:
        stats["attendance_rate"] = round((stats["present"] / stats["total"]) * 100, 2)
    else:
        stats["attendance_rate"] = 0

    stats["event"] = {
        "name": state.settings.event_name,
        "date": state.settings.event_date,
        "team_size_range": state.settings.team_size_range,
    }
    return stats

"""
Reservation analytics.
Daily breakdowns, status and attendance distributions, busiest and quietest days.
"""

from collections import OrderedDict

TOP_DAYS = 3


def _daily_stat(day: str, rows: list) -> dict:
    return {
        'date': day,
        'count': len(rows),
        'confirmed': sum(1 for r in rows if r['status'] == 'confirmed'),
        'pending': sum(1 for r in rows if r['status'] == 'pending'),
        'declined': sum(1 for r in rows if r['status'] == 'declined'),
        'attended': sum(1 for r in rows if r.get('attendance') == 'attended'),
        'no_show': sum(1 for r in rows if r.get('attendance') == 'no-show'),
        'total_guests': sum(r['party_size'] for r in rows),
    }


def attendance_rate(attended: int, no_show: int) -> float:
    """Percentage of marked reservations that attended; 0 when none marked."""
    marked = attended + no_show
    if marked == 0:
        return 0.0
    return round(attended / marked * 100, 1)


def get_daily_stats(reservations: list) -> list:
    """
    Group reservations by date.

    Args:
        reservations: List of reservation dicts

    Returns:
        List of per-date stat dicts sorted by date
    """
    by_date = OrderedDict()
    for reservation in sorted(reservations, key=lambda r: r['reservation_date']):
        by_date.setdefault(reservation['reservation_date'], []).append(reservation)

    stats = []
    for day, rows in by_date.items():
        stat = _daily_stat(day, rows)
        stat['attendance_rate'] = attendance_rate(stat['attended'], stat['no_show'])
        stats.append(stat)
    return stats


def get_reservation_analytics(reservations: list) -> dict:
    """
    Build the analytics summary for a set of reservations.

    Args:
        reservations: List of reservation dicts

    Returns:
        Dict with daily_stats, status_stats, attendance_stats, attendance_rate,
        busiest_days, quietest_days, total_reservations and total_guests
    """
    daily_stats = get_daily_stats(reservations)

    status_stats = {
        'confirmed': sum(1 for r in reservations if r['status'] == 'confirmed'),
        'pending': sum(1 for r in reservations if r['status'] == 'pending'),
        'declined': sum(1 for r in reservations if r['status'] == 'declined'),
    }

    attendance_stats = {
        'attended': sum(1 for r in reservations if r.get('attendance') == 'attended'),
        'no_show': sum(1 for r in reservations if r.get('attendance') == 'no-show'),
        'awaiting': sum(
            1 for r in reservations
            if r['status'] == 'confirmed' and not r.get('attendance')
        ),
    }

    # Stable sort keeps date order among days with equal counts
    by_count = sorted(daily_stats, key=lambda s: s['count'], reverse=True)

    return {
        'daily_stats': daily_stats,
        'status_stats': status_stats,
        'attendance_stats': attendance_stats,
        'attendance_rate': attendance_rate(
            attendance_stats['attended'], attendance_stats['no_show']
        ),
        'busiest_days': by_count[:TOP_DAYS],
        'quietest_days': list(reversed(by_count[-TOP_DAYS:])),
        'total_reservations': len(reservations),
        'total_guests': sum(r['party_size'] for r in reservations),
    }

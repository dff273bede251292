import datetime

def parse_date_internal(value):
    """
    Parses a date given as a date, a datetime or an ISO string (YYYY-MM-DD,
    optionally with a time part) into a datetime.date.
    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None

def format_date_internal(date_obj):
    """
    Formats a date into a YYYY-MM-DD string.
    Returns "" if date_obj is None.
    """
    if not date_obj: return ""
    return date_obj.strftime("%Y-%m-%d")

def days_from_today(days):
    return datetime.date.today() + datetime.timedelta(days=days)

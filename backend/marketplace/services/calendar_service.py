from datetime import timedelta

from icalendar import Alarm, Calendar
from icalendar import Event as CalendarEvent

from marketplace.models import Event
from marketplace.utils.text import parse_timestamp


def generate_event_ics(event: Event) -> bytes:
    cal = Calendar()
    cal.add("prodid", "-//Marketplace//Events//EN")
    cal.add("version", "2.0")

    entry = CalendarEvent()
    entry.add("uid", f"{event.id}@marketplace")
    entry.add("summary", event.title)
    entry.add("dtstart", parse_timestamp(event.start_datetime))
    entry.add("dtend", parse_timestamp(event.end_datetime))
    entry.add("location", event.location)

    description_parts = [event.description]
    if event.is_paid:
        description_parts.append(f"Price per person: {event.price_per_person} (+{event.admin_fee} admin fee)")
    entry.add("description", "\n\n".join(description_parts))

    # Reminders: a day before and an hour before
    for delta in [timedelta(days=1), timedelta(hours=1)]:
        alarm = Alarm()
        alarm.add("action", "DISPLAY")
        alarm.add("trigger", -delta)
        alarm.add("description", f"Upcoming event: {event.title}")
        entry.add_component(alarm)

    cal.add_component(entry)
    return cal.to_ical()

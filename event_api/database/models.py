"""
Container grouping the three repositories around one connection pool.
"""

from dataclasses import dataclass

from event_api.database.attendees import AttendeeModel
from event_api.database.db_connection import Database
from event_api.database.events import EventModel
from event_api.database.users import UserModel


@dataclass
class Models:
    users: UserModel
    events: EventModel
    attendees: AttendeeModel


def new_models(db: Database) -> Models:
    return Models(
        users=UserModel(db),
        events=EventModel(db),
        attendees=AttendeeModel(db),
    )

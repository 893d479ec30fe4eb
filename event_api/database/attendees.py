"""
Attendee repository: the join table between users and events.
"""

from typing import List, Optional

import psycopg2.errors

from event_api.database.db_connection import Database, DuplicateRecord
from event_api.database.entities import Attendee, Event, User


class AttendeeModel:
    def __init__(self, db: Database) -> None:
        self.db = db

    def insert(self, attendee: Attendee) -> Attendee:
        """
        Link a user to an event.

        Raises:
            DuplicateRecord: If the (event_id, user_id) pair already exists.
        """
        sql = """
            INSERT INTO attendees (event_id, user_id)
            VALUES (%s, %s)
            RETURNING id;
        """
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (attendee.event_id, attendee.user_id))
                    attendee.id = cur.fetchone()["id"]
        except psycopg2.errors.UniqueViolation as e:
            raise DuplicateRecord(
                f"user {attendee.user_id} already attends event {attendee.event_id}"
            ) from e
        return attendee

    def get_by_event_and_attendee(self, event_id: int, user_id: int) -> Optional[Attendee]:
        sql = """
            SELECT id, event_id, user_id FROM attendees
            WHERE event_id = %s AND user_id = %s;
        """
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (event_id, user_id))
                row = cur.fetchone()
        return Attendee.from_row(row) if row else None

    def get_attendees_by_event(self, event_id: int) -> List[User]:
        sql = """
            SELECT u.id, u.email, u.password, u.name
            FROM users u
            JOIN attendees a ON a.user_id = u.id
            WHERE a.event_id = %s
            ORDER BY u.id;
        """
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (event_id,))
                rows = cur.fetchall()
        return [User.from_row(r) for r in rows]

    def delete(self, user_id: int, event_id: int) -> None:
        sql = "DELETE FROM attendees WHERE user_id = %s AND event_id = %s;"
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (user_id, event_id))

    def get_events_by_attendee(self, user_id: int) -> List[Event]:
        sql = """
            SELECT e.id, e.owner_id, e.name, e.description, e.date, e.location
            FROM events e
            JOIN attendees a ON a.event_id = e.id
            WHERE a.user_id = %s
            ORDER BY e.id;
        """
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (user_id,))
                rows = cur.fetchall()
        return [Event.from_row(r) for r in rows]

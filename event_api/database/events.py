"""
Event repository: CRUD over the ``events`` table.
"""

from typing import List, Optional

from event_api.database.db_connection import Database
from event_api.database.entities import Event

EVENT_COLUMNS = "id, owner_id, name, description, date, location"


class EventModel:
    def __init__(self, db: Database) -> None:
        self.db = db

    def insert(self, event: Event) -> Event:
        sql = """
            INSERT INTO events (owner_id, name, description, date, location)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING id;
        """
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    event.owner_id,
                    event.name,
                    event.description,
                    event.date,
                    event.location,
                ))
                event.id = cur.fetchone()["id"]
        return event

    def get_all(self) -> List[Event]:
        sql = f"SELECT {EVENT_COLUMNS} FROM events ORDER BY id;"
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql)
                rows = cur.fetchall()
        return [Event.from_row(r) for r in rows]

    def get(self, event_id: int) -> Optional[Event]:
        sql = f"SELECT {EVENT_COLUMNS} FROM events WHERE id = %s;"
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (event_id,))
                row = cur.fetchone()
        return Event.from_row(row) if row else None

    def update(self, event: Event) -> None:
        """Replace every client-editable column. The owner never changes."""
        sql = """
            UPDATE events
            SET name = %s, description = %s, date = %s, location = %s
            WHERE id = %s;
        """
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    event.name,
                    event.description,
                    event.date,
                    event.location,
                    event.id,
                ))

    def delete(self, event_id: int) -> None:
        sql = "DELETE FROM events WHERE id = %s;"
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (event_id,))

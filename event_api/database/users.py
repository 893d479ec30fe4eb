"""
User repository: insert and lookup of user rows.
"""

from typing import Optional

import psycopg2.errors

from event_api.database.db_connection import Database, DuplicateRecord
from event_api.database.entities import User


class UserModel:
    def __init__(self, db: Database) -> None:
        self.db = db

    def insert(self, user: User) -> User:
        """
        Store a new user and fill in the id assigned by the database.

        Raises:
            DuplicateRecord: If the email is already registered.
        """
        sql = """
            INSERT INTO users (email, password, name)
            VALUES (%s, %s, %s)
            RETURNING id;
        """
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (user.email, user.password, user.name))
                    user.id = cur.fetchone()["id"]
        except psycopg2.errors.UniqueViolation as e:
            raise DuplicateRecord(f"email {user.email} already exists") from e
        return user

    def get(self, user_id: int) -> Optional[User]:
        sql = "SELECT id, email, password, name FROM users WHERE id = %s;"
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (user_id,))
                row = cur.fetchone()
        return User.from_row(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        sql = "SELECT id, email, password, name FROM users WHERE email = %s;"
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (email,))
                row = cur.fetchone()
        return User.from_row(row) if row else None

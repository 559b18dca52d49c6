from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Branch
from .repository import BranchRepository


class MySQLBranchRepository(BranchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, branch_id: str) -> Optional[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT branch_id, branch_name, latitude, longitude, radius
                FROM branches
                WHERE branch_id=%s
                """,
                (branch_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Branch(
                branch_id=str(r["branch_id"]),
                name=r["branch_name"],
                latitude=float(r["latitude"]),
                longitude=float(r["longitude"]),
                radius=float(r["radius"]),
            )

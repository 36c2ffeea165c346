"""
공지사항 저장소

pengumuman 테이블 CRUD. 목록은 날짜(tanggal) 최신순.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pengumuman:
    """공지사항"""

    pengumuman_id: str
    judul: str
    isi: str
    tanggal: str
    penulis: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_COLUMNS = "pengumuman_id, judul, isi, tanggal, penulis"


def _row_to_pengumuman(row: tuple[Any, ...]) -> Pengumuman:
    return Pengumuman(
        pengumuman_id=row[0],
        judul=row[1],
        isi=row[2],
        tanggal=row[3],
        penulis=row[4],
    )


class AnnouncementStore:
    """공지사항 저장소

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def add(
        self,
        judul: str,
        isi: str,
        tanggal: str,
        penulis: str | None = None,
    ) -> Pengumuman:
        pengumuman = Pengumuman(
            pengumuman_id=uuid.uuid4().hex,
            judul=judul,
            isi=isi,
            tanggal=tanggal,
            penulis=penulis,
        )
        async with self.db.transaction():
            await self.db.execute(
                f"INSERT INTO pengumuman ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                (
                    pengumuman.pengumuman_id,
                    pengumuman.judul,
                    pengumuman.isi,
                    pengumuman.tanggal,
                    pengumuman.penulis,
                ),
            )
        logger.info(f"Announcement added: {pengumuman.pengumuman_id}")
        return pengumuman

    async def get(self, pengumuman_id: str) -> Pengumuman | None:
        row = await self.db.fetchone(
            f"SELECT {_COLUMNS} FROM pengumuman WHERE pengumuman_id = ?",
            (pengumuman_id,),
        )
        return _row_to_pengumuman(row) if row else None

    async def list_all(self) -> list[Pengumuman]:
        """공지사항 목록 (최신순)"""
        rows = await self.db.fetchall(
            f"SELECT {_COLUMNS} FROM pengumuman ORDER BY tanggal DESC, created_at DESC"
        )
        return [_row_to_pengumuman(row) for row in rows]

    async def update(
        self,
        pengumuman_id: str,
        changes: dict[str, Any],
    ) -> Pengumuman | None:
        """공지사항 수정

        Returns:
            수정된 공지사항 (없으면 None)
        """
        async with self.db.transaction():
            existing = await self.get(pengumuman_id)
            if existing is None:
                return None

            updated = Pengumuman(
                **{**asdict(existing), **changes, "pengumuman_id": pengumuman_id}
            )
            await self.db.execute(
                """
                UPDATE pengumuman SET
                    judul = ?, isi = ?, tanggal = ?, penulis = ?,
                    updated_at = datetime('now')
                WHERE pengumuman_id = ?
                """,
                (
                    updated.judul,
                    updated.isi,
                    updated.tanggal,
                    updated.penulis,
                    pengumuman_id,
                ),
            )
        return updated

    async def delete(self, pengumuman_id: str) -> bool:
        async with self.db.transaction():
            cursor = await self.db.execute(
                "DELETE FROM pengumuman WHERE pengumuman_id = ?",
                (pengumuman_id,),
            )
        return cursor.rowcount > 0

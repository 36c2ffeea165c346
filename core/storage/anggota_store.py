"""
회원 명부 저장소

anggota 테이블 관리. 장부 엔진은 이름 조회(get_name_map)만 사용한다.
회원번호는 항상 대문자로 정규화해서 저장/조회.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from core.types import MemberStatus

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


class MemberExistsError(ValueError):
    """이미 등록된 회원번호"""


def normalize_no_anggota(no_anggota: str) -> str:
    """회원번호 정규화 (공백 제거, 대문자)"""
    return (no_anggota or "").strip().upper()


@dataclass(frozen=True)
class Anggota:
    """회원"""

    no_anggota: str
    nama: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    join_date: str | None = None
    status: MemberStatus = MemberStatus.AKTIF

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


_COLUMNS = "no_anggota, nama, email, phone, address, join_date, status"


def _row_to_anggota(row: tuple[Any, ...]) -> Anggota:
    return Anggota(
        no_anggota=row[0],
        nama=row[1],
        email=row[2],
        phone=row[3],
        address=row[4],
        join_date=row[5],
        status=MemberStatus(row[6]),
    )


class MemberDirectory:
    """회원 명부

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def add(self, anggota: Anggota) -> Anggota:
        """회원 추가

        Raises:
            MemberExistsError: 같은 회원번호가 이미 있음
            ValueError: 회원번호 또는 이름 누락
        """
        no_anggota = normalize_no_anggota(anggota.no_anggota)
        if not no_anggota:
            raise ValueError("no_anggota is required")
        if not anggota.nama.strip():
            raise ValueError("nama is required")

        async with self.db.transaction():
            if await self.get_by_no(no_anggota) is not None:
                raise MemberExistsError(f"Member already exists: {no_anggota}")

            await self.db.execute(
                f"INSERT INTO anggota ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    no_anggota,
                    anggota.nama.strip(),
                    anggota.email,
                    anggota.phone,
                    anggota.address,
                    anggota.join_date,
                    anggota.status.value,
                ),
            )

        logger.info(f"Member added: {no_anggota}")
        return Anggota(**{**asdict(anggota), "no_anggota": no_anggota})

    async def update(self, no_anggota: str, changes: dict[str, Any]) -> Anggota | None:
        """회원 정보 수정 (회원번호는 변경 불가)

        Returns:
            수정된 회원 (없으면 None)
        """
        no_anggota = normalize_no_anggota(no_anggota)
        async with self.db.transaction():
            existing = await self.get_by_no(no_anggota)
            if existing is None:
                return None

            merged = {**asdict(existing), **changes, "no_anggota": no_anggota}
            merged["status"] = MemberStatus(merged["status"])
            updated = Anggota(**merged)

            await self.db.execute(
                """
                UPDATE anggota SET
                    nama = ?, email = ?, phone = ?, address = ?,
                    join_date = ?, status = ?, updated_at = datetime('now')
                WHERE no_anggota = ?
                """,
                (
                    updated.nama,
                    updated.email,
                    updated.phone,
                    updated.address,
                    updated.join_date,
                    updated.status.value,
                    no_anggota,
                ),
            )

        logger.info(f"Member updated: {no_anggota}")
        return updated

    async def delete(self, no_anggota: str) -> bool:
        """회원 삭제 (장부 데이터는 유지)"""
        no_anggota = normalize_no_anggota(no_anggota)
        async with self.db.transaction():
            cursor = await self.db.execute(
                "DELETE FROM anggota WHERE no_anggota = ?",
                (no_anggota,),
            )
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info(f"Member deleted: {no_anggota}")
        return deleted

    async def get_by_no(self, no_anggota: str) -> Anggota | None:
        row = await self.db.fetchone(
            f"SELECT {_COLUMNS} FROM anggota WHERE no_anggota = ?",
            (normalize_no_anggota(no_anggota),),
        )
        return _row_to_anggota(row) if row else None

    async def list_all(self, status: MemberStatus | None = None) -> list[Anggota]:
        """회원 목록 (회원번호 순)"""
        if status is not None:
            rows = await self.db.fetchall(
                f"SELECT {_COLUMNS} FROM anggota WHERE status = ? ORDER BY no_anggota",
                (status.value,),
            )
        else:
            rows = await self.db.fetchall(
                f"SELECT {_COLUMNS} FROM anggota ORDER BY no_anggota"
            )
        return [_row_to_anggota(row) for row in rows]

    async def get_name_map(self) -> dict[str, str]:
        """{회원번호: 이름} 맵 (배치 시작 시 1회 조회)"""
        rows = await self.db.fetchall("SELECT no_anggota, nama FROM anggota")
        return {row[0]: row[1] for row in rows}

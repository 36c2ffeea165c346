"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
Web과 CLI 스크립트가 동시에 접근 가능하도록 설정.

트랜잭션 경계:
- transaction()은 BEGIN IMMEDIATE로 시작해 쓰기 잠금을 먼저 확보
- 다른 연결이 잠금을 쥐고 있으면 busy_timeout 후 OperationalError (충돌 → 중단)
- 같은 태스크 안에서 중첩 호출되면 바깥 트랜잭션에 합류 (커밋은 바깥에서 1회)
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from core.constants import Paths
from core.types import AppMode

logger = logging.getLogger(__name__)


def get_db_path(mode: AppMode | str) -> Path:
    """모드에 따른 DB 경로 반환

    Args:
        mode: 운영 모드 (PRODUCTION/DEVELOPMENT)

    Returns:
        DB 파일 경로 (Path 타입)
    """
    if isinstance(mode, str):
        mode = AppMode(mode.lower())

    if mode == AppMode.PRODUCTION:
        return Paths.PROD_DB
    return Paths.DEV_DB


async def create_connection(
    db_path: Path | str,
    readonly: bool = False,
    busy_timeout_ms: int = 30000,
) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로
        readonly: 읽기 전용 여부
        busy_timeout_ms: 잠금 대기 시간 (밀리초)

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    # 디렉토리가 없으면 생성
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    if readonly:
        conn = await aiosqlite.connect(f"file:{db_path_str}?mode=ro", uri=True)
    else:
        conn = await aiosqlite.connect(db_path_str)

    await conn.execute("PRAGMA journal_mode=WAL")

    # 동시 접근 설정
    await conn.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")

    await conn.execute("PRAGMA foreign_keys=ON")

    logger.info(
        "SQLite 연결 생성",
        extra={"db_path": db_path_str, "readonly": readonly},
    )

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    WAL 모드로 SQLite 연결 관리.
    트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로
        readonly: 읽기 전용 여부 (조회 전용 API용)
        busy_timeout_ms: 다른 연결의 쓰기 잠금 대기 시간

    사용 예시:
    ```python
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()

    async with adapter.transaction():
        await adapter.execute("INSERT INTO ...")

    await adapter.close()
    ```
    """

    def __init__(
        self,
        db_path: Path | str,
        readonly: bool = False,
        busy_timeout_ms: int = 30000,
    ):
        self.db_path = Path(db_path)
        self.readonly = readonly
        self.busy_timeout_ms = busy_timeout_ms
        self._conn: aiosqlite.Connection | None = None
        # 한 연결 위의 트랜잭션은 한 번에 하나
        self._tx_lock = asyncio.Lock()
        self._tx_owner: asyncio.Task | None = None

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    @property
    def in_transaction(self) -> bool:
        """현재 트랜잭션 진행 여부"""
        return self._conn is not None and self._conn.in_transaction

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(
            self.db_path, self.readonly, self.busy_timeout_ms
        )

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def executemany(
        self,
        sql: str,
        parameters: list[tuple[Any, ...]],
    ) -> aiosqlite.Cursor:
        """SQL 다중 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        return await self._conn.executemany(sql, parameters)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchall()

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외(취소 포함) 시 자동 롤백.
        같은 태스크에서 중첩 호출하면 바깥 트랜잭션에 합류한다.

        사용 예시:
        ```python
        async with adapter.transaction() as conn:
            await conn.execute("INSERT INTO ...")
            # 성공 시 자동 커밋
        ```
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        current = asyncio.current_task()
        if self._tx_owner is not None and self._tx_owner is current:
            yield self._conn
            return

        async with self._tx_lock:
            self._tx_owner = current
            try:
                if not self.in_transaction:
                    await self._conn.execute(
                        "BEGIN" if self.readonly else "BEGIN IMMEDIATE"
                    )
                yield self._conn
                await self._conn.commit()
            except BaseException:
                await self._conn.rollback()
                raise
            finally:
                self._tx_owner = None

    async def table_exists(self, table_name: str) -> bool:
        """테이블 존재 여부 확인"""
        result = await self.fetchone(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        return result is not None

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    여러 번 실행해도 안전 (IF NOT EXISTS).

    Args:
        adapter: 연결된 SQLiteAdapter
    """
    # 회원 명부
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS anggota (
            no_anggota       TEXT PRIMARY KEY,
            nama             TEXT NOT NULL,
            email            TEXT,
            phone            TEXT,
            address          TEXT,
            join_date        TEXT,
            status           TEXT NOT NULL DEFAULT 'Aktif',
            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # 회원별 현재 장부 (최신 기간 스냅샷)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS keuangan (
            no_anggota       TEXT PRIMARY KEY,
            nama_anggota     TEXT NOT NULL DEFAULT '',
            periode          TEXT,
            data_json        TEXT NOT NULL,
            updated_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # 회원별 월간 이력
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS keuangan_history (
            no_anggota       TEXT NOT NULL,
            periode          TEXT NOT NULL,
            data_json        TEXT NOT NULL,
            updated_at       TEXT NOT NULL DEFAULT (datetime('now')),

            PRIMARY KEY (no_anggota, periode)
        )
    """)

    # 거래 로그 (감사 추적)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS transaksi_log (
            log_id            TEXT PRIMARY KEY,
            no_anggota        TEXT NOT NULL,
            nama_anggota      TEXT NOT NULL DEFAULT '',
            periode           TEXT NOT NULL,
            admin_nama        TEXT NOT NULL,
            tanggal_transaksi TEXT,
            log_type          TEXT NOT NULL DEFAULT 'NEW',
            jumlah_setoran    TEXT NOT NULL DEFAULT '0',
            mutasi_json       TEXT NOT NULL,
            log_time          TEXT NOT NULL,
            edited_by         TEXT,
            edited_at         TEXT
        )
    """)

    # 게시된 기간 레지스트리
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS posting_period (
            periode          TEXT PRIMARY KEY,
            created_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # 설정 저장소
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS config_store (
            id           INTEGER PRIMARY KEY AUTOINCREMENT,
            config_key   TEXT NOT NULL UNIQUE,
            value_json   TEXT NOT NULL,
            version      INTEGER NOT NULL DEFAULT 1,

            updated_by   TEXT NOT NULL,
            created_at   TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at   TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # 공지사항
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS pengumuman (
            pengumuman_id    TEXT PRIMARY KEY,
            judul            TEXT NOT NULL,
            isi              TEXT NOT NULL,
            tanggal          TEXT NOT NULL,
            penulis          TEXT,
            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # 대출 신청
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS pengajuan_pinjaman (
            pengajuan_id      TEXT PRIMARY KEY,
            no_anggota        TEXT NOT NULL,
            nama_anggota      TEXT NOT NULL DEFAULT '',
            jenis_pinjaman    TEXT NOT NULL,
            jumlah            TEXT NOT NULL,
            jangka_waktu      INTEGER NOT NULL,
            keperluan         TEXT,
            status            TEXT NOT NULL,
            tanggal_pengajuan TEXT NOT NULL,
            diputuskan_oleh   TEXT,
            diputuskan_at     TEXT
        )
    """)

    # 인덱스 생성
    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_keuangan_history_periode
        ON keuangan_history(periode)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transaksi_log_member
        ON transaksi_log(no_anggota, periode)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transaksi_log_periode
        ON transaksi_log(periode, admin_nama)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_pengajuan_status
        ON pengajuan_pinjaman(status)
    """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")

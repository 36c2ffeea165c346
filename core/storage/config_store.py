"""
ConfigStore - 운영 설정 저장소

config_store 테이블을 통해 koperasi 운영 설정 관리.
저장된 값이 없으면 기본값 반환, 수정은 기존 값에 병합.

설정 키 구조:
- "kewajiban_anggota_baru": 신규 회원 의무 납입액
- "jasa": 서비스 수수료(jasa) 비율 및 대출 이자
- "pinjaman": 대출 시뮬레이션 월 이율
"""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


# 기본 설정값 (금액/비율은 문자열로 저장)
DEFAULT_CONFIGS: dict[str, dict[str, Any]] = {
    "kewajiban_anggota_baru": {
        "simpanan_pokok": "25000",
        "simpanan_wajib_min": "100000",
        "simpanan_wajib_max": "200000",
        "dana_perlaya": "5000",
        "dana_katineng": "5000",
    },
    "jasa": {
        # 저축 측 jasa 배분 비율 (%)
        "simpanan_jasa_rat": "0",
        "simpanan_jasa_shu": "0",
        "simpanan_jasa_simpanan": "0",
        "simpanan_jasa_fons_lebaran": "0",
        # 대출 측 jasa 배분 비율 (%)
        "pinjaman_jasa_rat": "0",
        "pinjaman_jasa_shu": "0",
        "pinjaman_jasa_simpanan": "0",
        "pinjaman_jasa_fons_lebaran": "0",
        # 대출 이자 (%)
        "bunga_berjangka": "2",
        "bunga_khusus": "3",
    },
    "pinjaman": {
        "suku_bunga": "2",  # 월 이율 (%)
    },
}


class UnknownConfigKeyError(KeyError):
    """정의되지 않은 설정 키"""


class ConfigStore:
    """설정 저장소

    config_store 테이블을 읽고 쓰는 클래스.

    Args:
        db: SQLiteAdapter 인스턴스

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        config_store = ConfigStore(db)

        kewajiban = await config_store.get("kewajiban_anggota_baru")
        pokok = kewajiban.get("simpanan_pokok", "0")

        await config_store.update("pinjaman", {"suku_bunga": "1.5"}, updated_by="Budi")
    ```
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self._cache: dict[str, dict[str, Any]] = {}
        self._cache_version: dict[str, int] = {}

    @staticmethod
    def check_key(key: str) -> None:
        """설정 키 검증

        Raises:
            UnknownConfigKeyError: 정의되지 않은 키
        """
        if key not in DEFAULT_CONFIGS:
            raise UnknownConfigKeyError(key)

    async def get(self, key: str, use_cache: bool = True) -> dict[str, Any]:
        """설정 조회

        저장된 값에 없는 필드는 기본값으로 채운다.

        Args:
            key: 설정 키
            use_cache: 캐시 사용 여부 (기본 True)

        Returns:
            설정 값 (dict). 없으면 기본값 반환.
        """
        if use_cache and key in self._cache:
            return dict(self._cache[key])

        defaults = DEFAULT_CONFIGS.get(key, {})
        row = await self.db.fetchone(
            """
            SELECT value_json, version
            FROM config_store
            WHERE config_key = ?
            """,
            (key,),
        )

        if row:
            value = {**defaults, **json.loads(row[0])}
            self._cache[key] = value
            self._cache_version[key] = row[1]
            return dict(value)

        return dict(defaults)

    async def get_value(
        self,
        key: str,
        field: str,
        default: Any = None,
    ) -> Any:
        """설정의 특정 필드 조회"""
        config = await self.get(key)
        return config.get(field, default)

    async def get_decimal(self, key: str, field: str) -> Decimal:
        """금액/비율 필드를 Decimal로 조회"""
        return Decimal(str(await self.get_value(key, field, "0")))

    async def set(
        self,
        key: str,
        value: dict[str, Any],
        updated_by: str = "system",
    ) -> None:
        """설정 저장 (UPSERT, 전체 교체)

        Args:
            key: 설정 키
            value: 설정 값
            updated_by: 수정자
        """
        now = datetime.now(timezone.utc).isoformat()
        value_json = json.dumps(value, ensure_ascii=False)

        async with self.db.transaction():
            await self.db.execute(
                """
                INSERT INTO config_store (config_key, value_json, version, updated_by, created_at, updated_at)
                VALUES (?, ?, 1, ?, ?, ?)
                ON CONFLICT(config_key) DO UPDATE SET
                    value_json = excluded.value_json,
                    version = config_store.version + 1,
                    updated_by = excluded.updated_by,
                    updated_at = excluded.updated_at
                """,
                (key, value_json, updated_by, now, now),
            )

        # 캐시 무효화
        self._cache.pop(key, None)
        self._cache_version.pop(key, None)

        logger.info(f"Config '{key}' updated by {updated_by}")

    async def update(
        self,
        key: str,
        changes: dict[str, Any],
        updated_by: str = "system",
    ) -> dict[str, Any]:
        """설정 병합 업데이트

        Returns:
            병합된 설정 값
        """
        async with self.db.transaction():
            merged = {**await self.get(key, use_cache=False), **changes}
            await self.set(key, merged, updated_by)
        return merged

    async def get_version(self, key: str) -> int:
        """설정 버전 (저장 전이면 0)"""
        row = await self.db.fetchone(
            "SELECT version FROM config_store WHERE config_key = ?",
            (key,),
        )
        return row[0] if row else 0

    async def get_all(self) -> dict[str, dict[str, Any]]:
        """모든 설정 조회 (기본값 포함)"""
        return {key: await self.get(key) for key in DEFAULT_CONFIGS}

    async def ensure_defaults(self) -> None:
        """기본 설정이 없으면 생성

        서버 시작 시 호출하여 설정 키가 모두 존재하도록 보장.
        """
        for key, default_value in DEFAULT_CONFIGS.items():
            row = await self.db.fetchone(
                "SELECT 1 FROM config_store WHERE config_key = ?",
                (key,),
            )
            if not row:
                await self.set(key, default_value, updated_by="system:init")
                logger.info(f"Created default config: {key}")

    def clear_cache(self) -> None:
        """캐시 초기화"""
        self._cache.clear()
        self._cache_version.clear()

    # =========================================================================
    # 설정별 조회 헬퍼
    # =========================================================================

    async def get_kewajiban_anggota_baru(self) -> dict[str, Any]:
        """신규 회원 의무 납입액"""
        return await self.get("kewajiban_anggota_baru")

    async def get_jasa(self) -> dict[str, Any]:
        """jasa 비율 및 대출 이자"""
        return await self.get("jasa")

    async def get_suku_bunga(self) -> Decimal:
        """대출 월 이율 (%)"""
        return await self.get_decimal("pinjaman", "suku_bunga")


async def init_default_configs(db: SQLiteAdapter) -> None:
    """기본 설정 초기화 (편의 함수)"""
    await ConfigStore(db).ensure_defaults()

"""
설정 라우트

koperasi 운영 설정 조회 및 변경 API
"""

from fastapi import APIRouter, Depends, HTTPException, Path

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.config_store import ConfigStore, UnknownConfigKeyError
from web.dependencies import get_db, get_db_write
from web.models.requests import ConfigUpdateRequest
from web.models.responses import ConfigResponse

router = APIRouter(prefix="/api/pengaturan", tags=["Pengaturan"])


@router.get("", response_model=list[ConfigResponse])
async def get_all_configs(
    db: SQLiteAdapter = Depends(get_db),
) -> list[ConfigResponse]:
    """모든 설정 조회 (저장 전이면 기본값)"""
    store = ConfigStore(db)
    configs = await store.get_all()
    return [
        ConfigResponse(key=key, value=value, version=await store.get_version(key))
        for key, value in configs.items()
    ]


@router.get("/{key}", response_model=ConfigResponse)
async def get_config(
    key: str = Path(..., description="설정 키"),
    db: SQLiteAdapter = Depends(get_db),
) -> ConfigResponse:
    """설정 조회"""
    store = ConfigStore(db)
    try:
        store.check_key(key)
    except UnknownConfigKeyError:
        raise HTTPException(status_code=404, detail=f"Config not found: {key}")

    return ConfigResponse(
        key=key,
        value=await store.get(key),
        version=await store.get_version(key),
    )


@router.put("/{key}", response_model=ConfigResponse)
async def update_config(
    request: ConfigUpdateRequest,
    key: str = Path(..., description="설정 키"),
    db: SQLiteAdapter = Depends(get_db_write),
) -> ConfigResponse:
    """설정 변경 (기존 값에 병합)"""
    store = ConfigStore(db)
    try:
        store.check_key(key)
    except UnknownConfigKeyError:
        raise HTTPException(status_code=404, detail=f"Config not found: {key}")

    value = await store.update(key, request.value, updated_by=request.updated_by)
    return ConfigResponse(key=key, value=value, version=await store.get_version(key))
